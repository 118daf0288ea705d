"""Schema definitions for identity provider sessions.

Sessions are owned by the identity provider; this application only reads
them. A ``Session`` pairs the raw token with the user projection surfaced
to views.
"""

import enum
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


class SessionStatus(str, enum.Enum):
    """Reactive status of the current session as seen by a view."""

    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


@dataclass(frozen=True)
class SessionUser:
    """User projection carried by a session token.

    Attributes:
        identifier: Provider-side user id (``_id`` claim, falling back to ``sub``).
        username: Public handle used in the shareable profile link.
        email: Account email address.
    """

    identifier: str | None = None
    username: str | None = None
    email: str | None = None

    @property
    def display_name(self) -> str:
        """Name shown in greetings: the username, else the email."""
        return self.username or self.email or ""


@dataclass(frozen=True)
class Session:
    """An authenticated session resolved from a provider token."""

    token: str
    user: SessionUser
    expires_at: datetime | None = None

    @classmethod
    def from_claims(cls, token: str, claims: dict[str, Any]) -> "Session":
        """Build a session from decoded token claims."""
        identifier = claims.get("_id") or claims.get("sub")
        expires_at = None
        if isinstance(claims.get("exp"), (int, float)):
            expires_at = datetime.fromtimestamp(claims["exp"], tz=timezone.utc)

        return cls(
            token=token,
            user=SessionUser(
                identifier=str(identifier) if identifier is not None else None,
                username=claims.get("username"),
                email=claims.get("email"),
            ),
            expires_at=expires_at,
        )


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of the session state handed to consumers."""

    status: SessionStatus
    session: Session | None = None

    @property
    def user(self) -> SessionUser | None:
        return self.session.user if self.session else None

    @property
    def is_authenticated(self) -> bool:
        return self.status is SessionStatus.AUTHENTICATED and self.session is not None
