"""Session resolution from incoming requests.

Locates the identity provider's session token on a request (session
cookie first, then an ``Authorization: Bearer`` header) and verifies it.
Every failure mode collapses to "no session": callers never see an error.
"""

import logging
from typing import Any

from starlette.requests import HTTPConnection

from anon_feedback.auth.config import AuthConfig
from anon_feedback.auth.schemas import Session
from anon_feedback.auth.tokens import TokenDecodeError, decode_session_token

logger = logging.getLogger(__name__)


class SessionResolver:
    """Resolves the current session for a request.

    Stateless apart from its configuration, so one instance can serve
    every request.
    """

    def __init__(self, config: AuthConfig | None = None) -> None:
        self._config = config or AuthConfig()

    @property
    def config(self) -> AuthConfig:
        return self._config

    def extract_token(self, conn: HTTPConnection) -> str | None:
        """Return the raw session token carried by the request, if any."""
        for name in self._config.session_cookie_names:
            value = conn.cookies.get(name) or self._join_chunks(conn, name)
            if value:
                return value

        authorization = conn.headers.get("authorization", "")
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()

        return None

    @staticmethod
    def _join_chunks(conn: HTTPConnection, name: str) -> str | None:
        # Oversized session cookies are split into name.0, name.1, ...
        chunks = []
        while f"{name}.{len(chunks)}" in conn.cookies:
            chunks.append(conn.cookies[f"{name}.{len(chunks)}"])
        return "".join(chunks) or None

    def resolve_token(self, conn: HTTPConnection) -> dict[str, Any] | None:
        """Decode the request's session token.

        Returns:
            The token claims, or None when the token is missing or fails
            verification for any reason.
        """
        raw = self.extract_token(conn)
        if raw is None:
            return None

        try:
            return decode_session_token(raw, self._config)
        except TokenDecodeError as e:
            logger.debug("Session token rejected for %s: %s", conn.url.path, e)
            return None

    def resolve_session(self, conn: HTTPConnection) -> Session | None:
        """Resolve the request's session, or None when unauthenticated."""
        raw = self.extract_token(conn)
        if raw is None:
            return None

        try:
            claims = decode_session_token(raw, self._config)
        except TokenDecodeError as e:
            logger.debug("Session token rejected for %s: %s", conn.url.path, e)
            return None

        return Session.from_claims(raw, claims)
