"""HTTP middleware: route guarding and request timeouts."""

from anon_feedback.api.middleware.route_guard import RouteGuardMiddleware
from anon_feedback.api.middleware.timeout import TimeoutMiddleware

__all__ = ["RouteGuardMiddleware", "TimeoutMiddleware"]
