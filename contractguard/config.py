"""
Application settings.

Values come from the process environment (or a local ``.env`` file). A new
``Settings`` is built for every request by the API dependency, so a key added
to the environment is picked up without a restart and a missing key is
reported per request.
"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_ANALYSIS_MODEL = "gemini-2.5-flash"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_title: str = "ContractGuard API"
    app_version: str = "1.0.0"

    # Model provider
    google_api_key: Optional[str] = None
    analysis_model: str = DEFAULT_ANALYSIS_MODEL

    # Observability
    log_level: str = "INFO"
    log_json: bool = True

    cors_origins: List[str] = ["*"]

    @property
    def has_model_credential(self) -> bool:
        return bool(self.google_api_key and self.google_api_key.strip())
