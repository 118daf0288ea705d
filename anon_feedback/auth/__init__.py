"""Session resolution against the external identity provider.

Components:
- AuthConfig: Pydantic settings for token location and verification
- SessionResolver: Finds and verifies the session token on a request
- SessionProvider: Per-request session context with snapshot/subscribe/refresh
- Session / SessionUser / SessionStatus / SessionSnapshot: Session schemas
"""

from anon_feedback.auth.config import AuthConfig
from anon_feedback.auth.provider import SessionProvider
from anon_feedback.auth.resolver import SessionResolver
from anon_feedback.auth.schemas import (
    Session,
    SessionSnapshot,
    SessionStatus,
    SessionUser,
)
from anon_feedback.auth.tokens import TokenDecodeError, decode_session_token

__all__ = [
    "AuthConfig",
    "Session",
    "SessionProvider",
    "SessionResolver",
    "SessionSnapshot",
    "SessionStatus",
    "SessionUser",
    "TokenDecodeError",
    "decode_session_token",
]
