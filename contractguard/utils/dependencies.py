"""
FastAPI dependency injection for services.

Settings are built per request so the model credential is read lazily; tests
replace any of these through ``app.dependency_overrides``.
"""

from fastapi import Depends

from ..config import Settings
from ..services.analysis_gateway import AnalysisGateway
from ..services.lead_store import LeadStore, LoggingLeadStore

_lead_store: LeadStore = LoggingLeadStore()


def set_lead_store(store: LeadStore) -> None:
    """Replace the process-wide lead store (e.g. with a CRM client)."""
    global _lead_store
    _lead_store = store


def get_settings() -> Settings:
    return Settings()


def get_lead_store() -> LeadStore:
    return _lead_store


def get_analysis_gateway(
    settings: Settings = Depends(get_settings),
    lead_store: LeadStore = Depends(get_lead_store),
) -> AnalysisGateway:
    """
    FastAPI dependency for the analysis gateway.

    Returns:
        AnalysisGateway bound to the current settings
    """
    return AnalysisGateway(settings=settings, lead_store=lead_store)
