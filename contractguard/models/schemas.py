"""
Pydantic schemas for the ContractGuard API.

The analysis models mirror the JSON shape the model is instructed to return
(camelCase on the wire, snake_case in Python). They are frozen: a result is
built once per submission and never mutated.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator
from pydantic.alias_generators import to_camel


class Severity(str, Enum):
    """Ordinal risk rating attached to a red flag."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class RedFlag(_WireModel):
    """A clause identified as risky for the submitting party."""
    issue: str = Field(..., description="Brief title of the issue")
    severity: Severity = Field(..., description="high, medium or low")
    explanation: str = Field(..., description="Why this is problematic for the creator")

    @field_validator("severity", mode="before")
    @classmethod
    def normalise_severity(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


class NegotiableTerm(_WireModel):
    """A clause commonly renegotiated, with a suggested alternative."""
    term: str = Field(..., description="The specific term or clause")
    suggestion: str = Field(..., description="How it could be made more favorable")


class AnalysisResult(_WireModel):
    """Structured contract analysis returned by the model."""
    summary: str = Field(..., description="Plain-English summary of the contract")
    red_flags: List[RedFlag] = Field(
        default_factory=list,
        description="Risky clauses in the order the model returned them"
    )
    negotiable_terms: List[NegotiableTerm] = Field(
        default_factory=list,
        description="Terms worth negotiating, in model order"
    )
    questions_to_ask: List[str] = Field(
        default_factory=list,
        description="Questions to raise before signing"
    )


class AnalyzeRequest(BaseModel):
    """Body of ``POST /analyze``."""
    contract_text: StrictStr = Field(..., alias="contractText", min_length=1)
    email: StrictStr = Field(..., min_length=1)


class ParsePdfResponse(BaseModel):
    """Body of a successful ``POST /parse-pdf``."""
    text: str


class ErrorResponse(BaseModel):
    """Error body shared by every endpoint."""
    error: str = Field(..., description="Human-readable error message")


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    model_provider: dict = Field(
        default_factory=dict,
        description="Circuit breaker state of the model provider"
    )
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ContractSubmission(BaseModel):
    """Contract text accepted by the input step."""
    model_config = ConfigDict(frozen=True)

    text: str
    source_file_name: Optional[str] = None


class EmailLead(BaseModel):
    """Email address captured before analysis."""
    model_config = ConfigDict(frozen=True)

    address: str
