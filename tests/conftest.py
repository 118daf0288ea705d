"""Pytest fixtures for anon-feedback tests."""

import time
from typing import Any

import jwt
import pytest
from jwcrypto import jwe
from jwcrypto.common import json_encode

from anon_feedback.auth.config import AuthConfig
from anon_feedback.auth.provider import SessionProvider
from anon_feedback.auth.schemas import Session, SessionUser
from anon_feedback.auth.tokens import derive_encryption_key
from anon_feedback.dashboard.config import DashboardConfig

TEST_SECRET = "test-secret-with-enough-bytes-for-hs256"
SESSION_COOKIE = "next-auth.session-token"


def make_token(
    secret: str = TEST_SECRET,
    expires_in: int = 3600,
    **claims: Any,
) -> str:
    """Sign a bearer token the way the identity provider would."""
    payload = {
        "_id": "user_1",
        "username": "alice",
        "email": "alice@example.com",
        "exp": int(time.time()) + expires_in,
    }
    payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


def make_encrypted_token(
    secret: str = TEST_SECRET,
    expires_in: int = 3600,
    **claims: Any,
) -> str:
    """Encrypt a session cookie value the way the identity provider would."""
    payload = {
        "_id": "user_1",
        "username": "alice",
        "email": "alice@example.com",
        "iat": int(time.time()),
        "exp": int(time.time()) + expires_in,
    }
    payload.update(claims)
    token = jwe.JWE(
        json_encode(payload).encode("utf-8"),
        protected=json_encode({"alg": "dir", "enc": "A256GCM"}),
    )
    token.add_recipient(derive_encryption_key(secret))
    return token.serialize(compact=True)


@pytest.fixture
def auth_config() -> AuthConfig:
    """Auth configuration with a known signing secret."""
    return AuthConfig(secret=TEST_SECRET)


@pytest.fixture
def dashboard_config() -> DashboardConfig:
    """Dashboard configuration pointing at a fake data API."""
    return DashboardConfig(data_api_base_url="https://data.example.com")


@pytest.fixture
def alice_session() -> Session:
    """A signed-in session for user alice."""
    return Session(
        token="token-alice",
        user=SessionUser(identifier="user_1", username="alice", email="alice@example.com"),
    )


@pytest.fixture
def signed_in(alice_session) -> SessionProvider:
    """Resolved provider holding alice's session."""
    provider = SessionProvider(lambda: alice_session)
    provider.refresh()
    return provider


@pytest.fixture
def signed_out() -> SessionProvider:
    """Resolved provider with no session."""
    provider = SessionProvider(lambda: None)
    provider.refresh()
    return provider


@pytest.fixture
def auth_env(monkeypatch):
    """Configure AUTH_SECRET for app-level tests and reset cached config."""
    from anon_feedback.api.dependencies import get_auth_config, get_dashboard_config
    from anon_feedback.config.settings import get_settings

    monkeypatch.setenv("AUTH_SECRET", TEST_SECRET)
    monkeypatch.setenv("DASHBOARD_DATA_API_BASE_URL", "https://data.example.com")
    get_auth_config.cache_clear()
    get_dashboard_config.cache_clear()
    get_settings.cache_clear()

    yield

    get_auth_config.cache_clear()
    get_dashboard_config.cache_clear()
    get_settings.cache_clear()


@pytest.fixture
def token_factory():
    """Factory for signed session tokens (see ``make_token``)."""
    return make_token


@pytest.fixture
def encrypted_token_factory():
    """Factory for encrypted session cookie values (see ``make_encrypted_token``)."""
    return make_encrypted_token
