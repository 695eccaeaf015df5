"""
Application Settings.

Centralized configuration using Pydantic Settings with environment variable loading.
The Google Places key is optional at load time; the Area Insights client raises
ConfigurationError before any request when it is missing.
"""

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


AREA_INSIGHTS_URL = "https://areainsights.googleapis.com/v1:computeInsights"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Google (Area Insights API)
    # -------------------------------------------------------------------------
    google_places_api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("google_places_api_key", "google_api_key"),
        description="Google Places API key with Area Insights enabled",
    )
    area_insights_url: str = Field(
        default=AREA_INSIGHTS_URL,
        description="computeInsights endpoint",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        description="Per-request transport timeout in seconds",
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(
        default=True,
        description="Render logs as JSON lines (False for console output)",
    )

    @field_validator("request_timeout_seconds")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("request_timeout_seconds must be positive")
        return value

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload settings if needed.
    """
    return Settings()
