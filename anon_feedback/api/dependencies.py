"""
Dependency injection for FastAPI endpoints.
"""

from functools import lru_cache
from typing import AsyncGenerator

from fastapi import Depends, Request

from anon_feedback.auth.config import AuthConfig
from anon_feedback.auth.provider import SessionProvider
from anon_feedback.auth.resolver import SessionResolver
from anon_feedback.dashboard.client import FeedbackApiClient
from anon_feedback.dashboard.config import DashboardConfig


@lru_cache
def get_auth_config() -> AuthConfig:
    """Get cached auth configuration."""
    return AuthConfig()


@lru_cache
def get_dashboard_config() -> DashboardConfig:
    """Get cached dashboard configuration."""
    return DashboardConfig()


def get_session_resolver() -> SessionResolver:
    """Get a session resolver bound to the auth configuration."""
    return SessionResolver(get_auth_config())


def get_session_provider(
    request: Request,
    resolver: SessionResolver = Depends(get_session_resolver),
) -> SessionProvider:
    """
    Get the session context for this request.

    Created once per request and kept on ``request.state`` so that every
    consumer (page handler, templates) sees the same snapshot.
    """
    provider = getattr(request.state, "sessions", None)
    if provider is None:
        provider = SessionProvider.for_request(resolver, request)
        request.state.sessions = provider
    return provider


async def get_feedback_api(
    request: Request,
    config: DashboardConfig = Depends(get_dashboard_config),
) -> AsyncGenerator[FeedbackApiClient, None]:
    """
    Get a data API client that forwards the caller's cookies.

    One client per request, closed when the request finishes.
    """
    async with FeedbackApiClient(config, cookies=dict(request.cookies)) as api:
        yield api
