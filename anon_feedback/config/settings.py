"""Application settings using Pydantic Settings for environment-based configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central configuration for the anon-feedback web application.

    All settings can be overridden via environment variables.
    Prefix is not used to allow standard env var names (e.g., LOG_LEVEL).
    Component-specific settings live next to their component
    (``AUTH_*`` in ``anon_feedback.auth.config``, ``DASHBOARD_*`` in
    ``anon_feedback.dashboard.config``).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False

    # API server
    api_host: str = "0.0.0.0"
    api_port: int = 3000

    # Origin used for the shareable profile link. Empty means the link is
    # built from the incoming request's own origin.
    public_origin: str = ""

    # CORS (comma-separated origins)
    cors_origins: str = "http://localhost:3000"
    cors_allow_credentials: bool = True

    # Request timeout (0 disables the middleware)
    request_timeout_seconds: float = Field(default=30.0, ge=0.0, le=300.0)

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once.
    Clear cache with get_settings.cache_clear() if needed.
    """
    return Settings()
