"""
Error taxonomy for the ContractGuard API.

Every error carries the HTTP status it maps to and the message that is safe
to show to the user. Internal detail (upstream bodies, tracebacks) travels in
the exception chain and the logs, never in ``public_message``.
"""

from typing import Optional


class ContractGuardError(Exception):
    """Base class for all handled API errors."""

    status_code: int = 500
    public_message: str = "Failed to analyze contract"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.public_message)
        self.detail = detail or self.public_message


class ValidationError(ContractGuardError):
    """Bad or missing caller input. The message is shown verbatim."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.public_message = message


class ExtractionError(ContractGuardError):
    """PDF bytes could not be turned into text."""

    public_message = "Failed to parse PDF"


class ConfigurationError(ContractGuardError):
    """Deployment is missing required configuration."""

    public_message = "API configuration error"


class GatewayError(ContractGuardError):
    """The model provider call failed or the circuit breaker is open."""

    public_message = "Failed to analyze contract"


class EmptyResponseError(ContractGuardError):
    """The model returned no text content."""

    public_message = "No analysis generated"


class ParseError(ContractGuardError):
    """No JSON object could be recovered from the model output."""

    public_message = "Failed to parse analysis"


class SchemaError(ContractGuardError):
    """The model's JSON does not match the AnalysisResult shape."""

    public_message = "Analysis did not match the expected format"
