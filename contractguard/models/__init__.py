"""
Models package for ContractGuard.

Pydantic schemas for API requests, responses, and analysis results.
"""

from .schemas import (
    Severity,
    RedFlag,
    NegotiableTerm,
    AnalysisResult,
    AnalyzeRequest,
    ParsePdfResponse,
    ErrorResponse,
    HealthResponse,
    ContractSubmission,
    EmailLead,
)

__all__ = [
    "Severity",
    "RedFlag",
    "NegotiableTerm",
    "AnalysisResult",
    "AnalyzeRequest",
    "ParsePdfResponse",
    "ErrorResponse",
    "HealthResponse",
    "ContractSubmission",
    "EmailLead",
]
