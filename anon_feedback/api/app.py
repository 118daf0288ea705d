"""
FastAPI application factory.
"""

import time
import uuid
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from anon_feedback import __version__
from anon_feedback.api.dependencies import get_session_resolver
from anon_feedback.api.middleware.route_guard import RouteGuardMiddleware
from anon_feedback.api.middleware.timeout import TimeoutMiddleware
from anon_feedback.api.routes import dashboard, health, pages
from anon_feedback.config.settings import get_settings
from anon_feedback.observability.logging import bind_context, clear_context, setup_logging

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Reload workers start without the CLI having configured logging.
    if not structlog.is_configured():
        setup_logging()
    logger.info("Anonymous feedback app starting up", version=__version__)
    yield
    logger.info("Anonymous feedback app shutting down")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application
    """
    settings = get_settings()

    openapi_tags = [
        {"name": "health", "description": "Service health checks"},
        {"name": "pages", "description": "Landing, sign-in, sign-up, verify and sign-out"},
        {"name": "dashboard", "description": "Owner dashboard: feedback list, acceptance toggle, profile link"},
    ]

    app = FastAPI(
        title="Anonymous Feedback",
        description="""
Front end for an anonymous feedback service.

## Authentication

Sessions are issued by the identity provider and read from its session
cookie (or an `Authorization: Bearer` header). `/admin/dashboard` requires
a session; `/sign-in`, `/sign-up` and `/verify/*` are for signed-out
visitors only.
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=openapi_tags,
    )

    # Middleware added later runs earlier: the guard runs inside the
    # timeout, and the logging middleware wraps both.
    app.add_middleware(RouteGuardMiddleware, resolver=get_session_resolver())

    if settings.request_timeout_seconds > 0:
        app.add_middleware(
            TimeoutMiddleware,
            timeout_seconds=settings.request_timeout_seconds,
        )

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    # Request logging and correlation ID middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = (
            request.headers.get("X-Request-ID")
            or request.headers.get("X-Correlation-ID")
            or str(uuid.uuid4())
        )
        bind_context(request_id=request_id)

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
            duration = time.perf_counter() - start_time

            response.headers["X-Request-ID"] = request_id

            logger.info(
                "HTTP request",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round(duration * 1000, 2),
            )
            return response
        finally:
            clear_context()

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error", "error_type": "internal"},
        )

    app.include_router(health.router, tags=["health"])
    app.include_router(pages.router, tags=["pages"])
    app.include_router(dashboard.router, tags=["dashboard"])

    return app
