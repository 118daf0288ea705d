"""Session resolution configuration.

Controls how session tokens issued by the identity provider are located
and verified. All settings can be overridden via ``AUTH_*`` environment
variables.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthConfig(BaseSettings):
    """Configuration for reading identity provider sessions."""

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        case_sensitive=False,
        extra="ignore",
    )

    secret: str = Field(
        default="",
        description="Shared secret the identity provider uses to encrypt session cookies and sign bearer tokens",
    )
    algorithms: list[str] = Field(
        default_factory=lambda: ["HS256"],
        description="Accepted signing algorithms for bearer (JWS) tokens",
    )
    session_cookie_names: list[str] = Field(
        default_factory=lambda: [
            "__Secure-next-auth.session-token",
            "next-auth.session-token",
        ],
        description="Cookie names checked for a session token, in order",
    )
    leeway_seconds: int = Field(
        default=0,
        ge=0,
        le=300,
        description="Clock skew tolerance when checking token expiry",
    )

    # Identity provider endpoints
    provider_url: str = Field(
        default="",
        description="Base URL of the identity provider (empty = same origin)",
    )
    sign_in_path: str = Field(
        default="/api/auth/signin",
        description="Provider path that starts the sign-in flow",
    )
    sign_out_path: str = Field(
        default="/api/auth/signout",
        description="Provider path that terminates the session",
    )

    @property
    def sign_in_url(self) -> str:
        """Absolute (or origin-relative) URL of the provider's sign-in flow."""
        return f"{self.provider_url.rstrip('/')}{self.sign_in_path}"

    @property
    def sign_out_url(self) -> str:
        """Absolute (or origin-relative) URL of the provider's sign-out endpoint."""
        return f"{self.provider_url.rstrip('/')}{self.sign_out_path}"
