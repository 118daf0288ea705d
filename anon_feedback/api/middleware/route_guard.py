"""
Route guard middleware.

Runs before every matched page request: resolves the session token and
applies the decision from ``anon_feedback.routing.guard``. Signed-in
visitors are bounced off the auth pages, signed-out visitors off the
dashboard. Token resolution failures count as "no session".
"""

import structlog
from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from anon_feedback.auth.resolver import SessionResolver
from anon_feedback.routing.guard import MATCHED_PATHS, decide, is_matched_path

logger = structlog.get_logger(__name__)

# Other methods get 303 so the client follows up with a GET.
SAFE_METHODS = ("GET", "HEAD")


def _redirect_status(method: str) -> int:
    return 307 if method in SAFE_METHODS else 303


class RouteGuardMiddleware(BaseHTTPMiddleware):
    """Redirect requests according to session state and path class."""

    def __init__(
        self,
        app,
        resolver: SessionResolver,
        matched_paths: tuple[str, ...] = MATCHED_PATHS,
    ):
        super().__init__(app)
        self.resolver = resolver
        self.matched_paths = matched_paths

    async def dispatch(self, request: Request, call_next):
        path = request.url.path

        if not is_matched_path(path, self.matched_paths):
            return await call_next(request)

        claims = self.resolver.resolve_token(request)
        decision = decide(path, has_token=claims is not None)

        if decision.is_redirect:
            target = request.url.replace(path=decision.location, query="", fragment="")
            logger.info(
                "Route guard redirect",
                path=path,
                action=decision.action.value,
                location=decision.location,
            )
            return RedirectResponse(url=str(target), status_code=_redirect_status(request.method))

        return await call_next(request)
