"""
HTTP client for the ContractGuard API.

This is what the review workflow talks to. It hides the two endpoints behind
``parse_pdf`` and ``analyze`` and reduces every failure (transport error,
non-2xx status, malformed body) to ``BackendError``.
"""

from typing import Optional, Protocol

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from ..models.schemas import AnalysisResult

logger = structlog.get_logger()


class BackendError(Exception):
    """A call to the ContractGuard API did not produce a usable result."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AnalysisBackend(Protocol):
    """Operations the review workflow needs from the server."""

    async def parse_pdf(self, filename: str, content: bytes, content_type: str) -> str:
        ...

    async def analyze(self, contract_text: str, email: str) -> AnalysisResult:
        ...


class ContractGuardClient:
    """
    Async client for ``/parse-pdf`` and ``/analyze``.

    No timeout is applied by default: an analysis usually takes 15-30 seconds
    and the request lives as long as the transport allows.

    Usage:
        async with ContractGuardClient("http://localhost:8000") as client:
            text = await client.parse_pdf("deal.pdf", pdf_bytes, "application/pdf")
            result = await client.analyze(text, "me@example.com")
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(base_url=base_url, timeout=None)

    async def __aenter__(self) -> "ContractGuardClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _post(self, path: str, **kwargs) -> httpx.Response:
        try:
            response = await self._client.post(path, **kwargs)
        except httpx.HTTPError as e:
            logger.error("backend_unreachable", path=path, error=str(e))
            raise BackendError(f"POST {path} failed: {e}") from e

        if response.is_error:
            logger.warning("backend_error_status", path=path, status_code=response.status_code)
            raise BackendError(
                f"POST {path} returned {response.status_code}",
                status_code=response.status_code
            )
        return response

    async def parse_pdf(self, filename: str, content: bytes, content_type: str) -> str:
        """
        Upload a PDF and return its extracted text.

        Raises:
            BackendError: If the upload or extraction failed
        """
        response = await self._post(
            "/parse-pdf",
            files={"file": (filename, content, content_type)}
        )
        try:
            return response.json()["text"]
        except (ValueError, KeyError, TypeError) as e:
            raise BackendError("Malformed /parse-pdf response") from e

    async def analyze(self, contract_text: str, email: str) -> AnalysisResult:
        """
        Request an analysis of ``contract_text``.

        Raises:
            BackendError: If the analysis failed or the body is not an AnalysisResult
        """
        response = await self._post(
            "/analyze",
            json={"contractText": contract_text, "email": email}
        )
        try:
            return AnalysisResult.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            raise BackendError("Malformed /analyze response") from e
