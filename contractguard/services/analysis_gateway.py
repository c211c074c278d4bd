"""
Analysis Gateway - contract analysis through the Google Gemini API.

Builds the single analysis prompt, sends it to a fixed Gemini model, pulls the
JSON object out of the generated text and validates it against the
AnalysisResult schema. One upstream round trip per request: no retries, no
streaming, no partial results.
"""

import asyncio
import time
from typing import Any, Optional

import google.generativeai as genai
import structlog
from pydantic import ValidationError as PydanticValidationError

from ..config import Settings
from ..errors import (
    ConfigurationError,
    EmptyResponseError,
    GatewayError,
    ParseError,
    SchemaError,
    ValidationError,
)
from ..models.schemas import AnalysisResult
from .api_resilience import call_through_breaker, model_breaker
from .json_extraction import extract_json_object
from .lead_store import LeadStore, LoggingLeadStore

logger = structlog.get_logger()


MAX_OUTPUT_TOKENS = 4096


ANALYSIS_PROMPT = """You are an experienced contract analyst who reviews brand deals, sponsorships and licensing agreements for content creators and influencers. Review the contract below and return your findings as structured data.

Respond with one valid JSON object in exactly this shape:
{
  "summary": "Two or three paragraphs in plain English: what the contract covers, what the creator commits to, and the key terms.",
  "redFlags": [
    {
      "issue": "Short title of the problem",
      "severity": "high" | "medium" | "low",
      "explanation": "What the clause means for the creator and why it is a problem"
    }
  ],
  "negotiableTerms": [
    {
      "term": "The clause or term in question",
      "suggestion": "How the creator could negotiate it into something fairer"
    }
  ],
  "questionsToAsk": [
    "A specific question the creator should put to the other party before signing"
  ]
}

How to analyze:
- Concentrate on what matters to creators: intellectual property ownership, exclusivity, usage and licensing rights, payment terms, and termination.
- Severity: "high" means a deal-breaker or serious financial or legal exposure, "medium" means concerning but negotiable, "low" means minor but worth knowing.
- Give concrete suggestions, not only problems.
- List at least 3 to 5 questions to ask.
- Write for someone who is not a lawyer.
- Be thorough but keep it concise.

CONTRACT TEXT:
"""


def build_analysis_prompt(contract_text: str) -> str:
    """Analyst preamble followed by the contract text, verbatim."""
    return ANALYSIS_PROMPT + contract_text


def first_response_text(response: Any) -> Optional[str]:
    """
    Text of the first generated candidate, or None when there is none.

    Reads candidates and parts directly; ``response.text`` raises when the
    candidate was blocked or carries no text parts.
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None

    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    texts = [getattr(part, "text", None) for part in parts]
    text = "".join(t for t in texts if isinstance(t, str))
    return text or None


_configured_key: Optional[str] = None


def _configure_client(api_key: str) -> None:
    """
    Point the Gemini SDK at ``api_key``.

    The SDK keeps its credential in process-wide state and GenerativeModel
    takes no key of its own, so this is where the injected setting ends.
    Reconfigures only when the key changes.
    """
    global _configured_key
    if api_key != _configured_key:
        genai.configure(api_key=api_key)
        _configured_key = api_key


class AnalysisGateway:
    """
    Sends contracts to the analysis model and returns validated results.

    Usage:
        gateway = AnalysisGateway(settings=Settings())
        result = await gateway.analyze(contract_text, "user@example.com")
        print(result.summary)
    """

    def __init__(
        self,
        settings: Settings,
        lead_store: Optional[LeadStore] = None,
    ):
        """
        Args:
            settings: Application settings carrying the model credential
            lead_store: Where captured emails go (logs only by default)
        """
        self.settings = settings
        self.lead_store = lead_store or LoggingLeadStore()
        self.model_name = settings.analysis_model

        if settings.has_model_credential:
            _configure_client(settings.google_api_key)

    def get_model(self) -> genai.GenerativeModel:
        """Model configured with the fixed output-token ceiling."""
        generation_config = genai.GenerationConfig(
            max_output_tokens=MAX_OUTPUT_TOKENS,
        )
        return genai.GenerativeModel(
            model_name=self.model_name,
            generation_config=generation_config,
        )

    async def generate(self, prompt: str) -> str:
        """
        Make the single upstream call and return the generated text.

        Raises:
            GatewayError: If the call fails or the circuit breaker is open
            EmptyResponseError: If the response has no text content
        """
        start_time = time.perf_counter()
        model = self.get_model()

        try:
            response = await asyncio.to_thread(
                call_through_breaker,
                model_breaker,
                model.generate_content,
                prompt
            )
        except GatewayError:
            raise
        except Exception as e:
            logger.error(
                "model_call_failed",
                model=self.model_name,
                error_type=type(e).__name__,
                error=str(e),
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2)
            )
            raise GatewayError(f"{self.model_name} call failed: {e}") from e

        text = first_response_text(response)
        if not text:
            logger.error("model_returned_no_text", model=self.model_name)
            raise EmptyResponseError("Model response contained no text")

        logger.info(
            "model_call_complete",
            model=self.model_name,
            output_characters=len(text),
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2)
        )
        return text

    async def analyze(self, contract_text: Any, email: Any) -> AnalysisResult:
        """
        Analyze a contract.

        Args:
            contract_text: Contract text to analyze
            email: Submitter's email address

        Returns:
            Validated AnalysisResult

        Raises:
            ValidationError: Missing or non-string input (no network call)
            ConfigurationError: No model credential configured
            GatewayError: Upstream call failed
            EmptyResponseError: Model produced no text
            ParseError: No JSON object in the model output
            SchemaError: JSON does not match the AnalysisResult shape
        """
        if not contract_text or not isinstance(contract_text, str):
            raise ValidationError("Contract text is required")
        if not email or not isinstance(email, str):
            raise ValidationError("Email is required")

        if not self.settings.has_model_credential:
            logger.error("model_credential_missing", setting="GOOGLE_API_KEY")
            raise ConfigurationError("GOOGLE_API_KEY is not set")

        await self.lead_store.record(email)

        logger.info(
            "analysis_started",
            model=self.model_name,
            contract_characters=len(contract_text)
        )

        text = await self.generate(build_analysis_prompt(contract_text))

        try:
            payload = extract_json_object(text)
        except ParseError as e:
            logger.error("analysis_parse_failed", error=str(e), output_preview=text[:200])
            raise

        try:
            result = AnalysisResult.model_validate(payload)
        except PydanticValidationError as e:
            logger.error(
                "analysis_schema_mismatch",
                errors=e.error_count(),
                detail=str(e)
            )
            raise SchemaError(str(e)) from e

        logger.info(
            "analysis_complete",
            red_flags=len(result.red_flags),
            negotiable_terms=len(result.negotiable_terms),
            questions=len(result.questions_to_ask)
        )
        return result
