"""Dashboard configuration.

Controls where the feedback data API lives and how the shareable
profile link is built. All settings can be overridden via
``DASHBOARD_*`` environment variables.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DashboardConfig(BaseSettings):
    """Configuration for the owner dashboard."""

    model_config = SettingsConfigDict(
        env_prefix="DASHBOARD_",
        case_sensitive=False,
        extra="ignore",
    )

    data_api_base_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the feedback data API",
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        le=120.0,
        description="Timeout for each data API call",
    )
    profile_path_prefix: str = Field(
        default="/u/",
        description="Path prefix of public profile pages",
    )
