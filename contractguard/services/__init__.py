"""
Services package for ContractGuard.

PDF extraction, model analysis, lead capture and the HTTP client used by the
review workflow.
"""

from .analysis_gateway import AnalysisGateway
from .api_client import AnalysisBackend, BackendError, ContractGuardClient
from .lead_store import InMemoryLeadStore, LeadStore, LoggingLeadStore
from .pdf_extractor import extract_pdf_text

__all__ = [
    "AnalysisGateway",
    "AnalysisBackend",
    "BackendError",
    "ContractGuardClient",
    "InMemoryLeadStore",
    "LeadStore",
    "LoggingLeadStore",
    "extract_pdf_text",
]
