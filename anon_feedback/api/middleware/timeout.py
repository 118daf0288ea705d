"""
Request timeout middleware.

Bounds how long a page or dashboard action may wait on the identity
provider and the data API. Expired requests get a 504 carrying the same
``{"feedback": ...}`` error shape the data API uses, so dashboard
clients can show it like any other failure. The health check is exempt.
"""

import asyncio

import structlog
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger(__name__)

TIMEOUT_MESSAGE = "Request timed out"

_EXCLUDED_PREFIXES = ("/health",)


class TimeoutMiddleware(BaseHTTPMiddleware):
    """Enforce a maximum request duration, returning 504 on timeout."""

    def __init__(self, app, timeout_seconds: float = 30.0):
        super().__init__(app)
        self.timeout_seconds = timeout_seconds

    async def dispatch(self, request: Request, call_next):
        if request.url.path.startswith(_EXCLUDED_PREFIXES):
            return await call_next(request)

        try:
            async with asyncio.timeout(self.timeout_seconds):
                return await call_next(request)
        except TimeoutError:
            logger.warning(
                "Request timed out",
                path=request.url.path,
                method=request.method,
                timeout_seconds=self.timeout_seconds,
            )
            return JSONResponse(
                status_code=504,
                content={
                    "feedback": TIMEOUT_MESSAGE,
                    "timeout_seconds": self.timeout_seconds,
                },
            )
