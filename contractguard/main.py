"""
FastAPI REST API for ContractGuard.

Provides endpoints for:
- PDF text extraction
- Contract analysis (summary, red flags, negotiable terms, questions)
- Health check
"""

import asyncio
from datetime import datetime, timezone
from typing import Optional

import structlog
from fastapi import Depends, FastAPI, File, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings
from .errors import ContractGuardError, ValidationError
from .models.schemas import (
    AnalysisResult,
    AnalyzeRequest,
    ErrorResponse,
    HealthResponse,
    ParsePdfResponse,
)
from .services.analysis_gateway import AnalysisGateway
from .services.api_resilience import get_breaker_status, model_breaker
from .services.pdf_extractor import extract_pdf_text
from .utils.dependencies import get_analysis_gateway
from .utils.logging import setup_logging
from .utils.request_context import RequestContextMiddleware
from .utils.validation import PDF_MEDIA_TYPE

logger = structlog.get_logger()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    500: {"model": ErrorResponse, "description": "Processing failure"},
}

# Messages for request bodies FastAPI rejects before a handler runs
FIELD_ERROR_MESSAGES = {
    "contractText": "Contract text is required",
    "email": "Email is required",
    "file": "No file provided",
}


def _validation_message(exc: RequestValidationError) -> str:
    for error in exc.errors():
        for part in error.get("loc", ()):
            if part in FIELD_ERROR_MESSAGES:
                return FIELD_ERROR_MESSAGES[part]
    return "Invalid request body"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Startup settings (logging, CORS). Request-time settings are
            resolved separately through ``get_settings``.
    """
    settings = settings or Settings()
    setup_logging(log_level=settings.log_level, json_format=settings.log_json)

    app = FastAPI(
        title=settings.app_title,
        description="AI-powered contract review for creators",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    @app.exception_handler(ContractGuardError)
    async def contractguard_error_handler(request: Request, exc: ContractGuardError):
        log = logger.warning if exc.status_code < 500 else logger.error
        log(
            "request_failed",
            path=request.url.path,
            status_code=exc.status_code,
            error_type=type(exc).__name__,
            detail=exc.detail
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.public_message}
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        message = _validation_message(exc)
        logger.warning(
            "request_rejected",
            path=request.url.path,
            error=message,
            errors=len(exc.errors())
        )
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            error_type=type(exc).__name__,
            error=str(exc),
            exc_info=True
        )
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to analyze contract"}
        )

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check():
        """
        Liveness probe, with the model provider circuit breaker state.
        """
        return HealthResponse(
            status="healthy",
            service=settings.app_title,
            version=settings.app_version,
            timestamp=datetime.now(timezone.utc),
            model_provider=get_breaker_status(model_breaker)
        )

    @app.post(
        "/parse-pdf",
        response_model=ParsePdfResponse,
        responses=ERROR_RESPONSES,
        tags=["Documents"]
    )
    async def parse_pdf(
        file: Optional[UploadFile] = File(None, description="PDF contract to extract text from")
    ):
        """
        Extract the text layer of an uploaded PDF.

        Size limits are enforced by the client before upload; the server only
        checks presence and media type.

        Raises:
            400: Missing file or not a PDF
            500: Extraction failed
        """
        if file is None:
            raise ValidationError("No file provided")

        if file.content_type != PDF_MEDIA_TYPE:
            raise ValidationError("File must be a PDF")

        file_bytes = await file.read()
        filename = file.filename or "upload.pdf"

        logger.info("pdf_received", filename=filename, size_bytes=len(file_bytes))

        text = await asyncio.to_thread(extract_pdf_text, file_bytes, filename)
        return ParsePdfResponse(text=text)

    @app.post(
        "/analyze",
        response_model=AnalysisResult,
        responses=ERROR_RESPONSES,
        tags=["Analysis"]
    )
    async def analyze_contract(
        request: AnalyzeRequest,
        gateway: AnalysisGateway = Depends(get_analysis_gateway),
    ):
        """
        Analyze contract text with the language model.

        Returns the AnalysisResult object on success.

        Raises:
            400: Missing or invalid contractText / email
            500: Missing credential, upstream failure, or unusable model output
        """
        return await gateway.analyze(request.contract_text, request.email)

    logger.info("app_created", title=settings.app_title, version=settings.app_version)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "contractguard.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
