"""
Health check endpoint with dependency checks.
"""

import time

import httpx
import structlog
from fastapi import APIRouter, Depends

from anon_feedback import __version__
from anon_feedback.api.dependencies import get_auth_config, get_dashboard_config
from anon_feedback.api.models import ComponentHealth, HealthResponse
from anon_feedback.auth.config import AuthConfig
from anon_feedback.dashboard.config import DashboardConfig

router = APIRouter()
logger = structlog.get_logger(__name__)


async def _check_data_api(config: DashboardConfig) -> ComponentHealth:
    """Check that the data API answers at all (any HTTP status counts)."""
    start = time.perf_counter()
    try:
        async with httpx.AsyncClient(
            base_url=config.data_api_base_url,
            timeout=config.request_timeout_seconds,
        ) as client:
            resp = await client.get("/api/accept-feedbacks")
        latency_ms = (time.perf_counter() - start) * 1000
        return ComponentHealth(
            status="healthy",
            latency_ms=round(latency_ms, 2),
            details={"status_code": resp.status_code},
        )
    except httpx.HTTPError as e:
        latency_ms = (time.perf_counter() - start) * 1000
        return ComponentHealth(
            status="unhealthy",
            latency_ms=round(latency_ms, 2),
            details={"error": str(e)},
        )


def _check_auth(config: AuthConfig) -> ComponentHealth:
    """Sessions can only be verified once a secret is configured."""
    if config.secret:
        return ComponentHealth(status="healthy")
    return ComponentHealth(
        status="unhealthy",
        details={"error": "AUTH_SECRET is not set; every visitor is treated as signed out"},
    )


@router.get("/health", response_model=HealthResponse)
async def health(
    auth_config: AuthConfig = Depends(get_auth_config),
    dashboard_config: DashboardConfig = Depends(get_dashboard_config),
) -> HealthResponse:
    components = {
        "auth": _check_auth(auth_config),
        "data_api": await _check_data_api(dashboard_config),
    }

    healthy = all(c.status == "healthy" for c in components.values())
    if not healthy:
        logger.warning(
            "Health check degraded",
            unhealthy=[name for name, c in components.items() if c.status != "healthy"],
        )

    return HealthResponse(
        status="healthy" if healthy else "degraded",
        version=__version__,
        components=components,
    )
