"""Session-aware route guard.

Stateless decision functions: given a request path and whether a
session token was resolved, decide whether to redirect to the dashboard,
redirect to sign-in, or let the request through. Nothing here performs
I/O or mutates state; the middleware in
``anon_feedback.api.middleware.route_guard`` applies the decision.

Decision table (evaluated per request, first match wins):

    token present + path under /sign-in, /sign-up, /verify  -> dashboard
    token absent  + path under /admin/dashboard, /dashboard -> sign-in
    anything else                                           -> pass
"""

import enum
from dataclasses import dataclass

DASHBOARD_PATH = "/admin/dashboard"
SIGN_IN_PATH = "/sign-in"

AUTH_ONLY_PREFIXES: tuple[str, ...] = ("/sign-in", "/sign-up", "/verify")
PROTECTED_PREFIXES: tuple[str, ...] = ("/admin/dashboard", "/dashboard")

# Paths the guard runs on. A trailing "/*" matches the base path and
# anything below it; other entries match exactly.
MATCHED_PATHS: tuple[str, ...] = (
    "/sign-in",
    "/sign-up",
    "/",
    "/dashboard/*",
    "/verify/*",
    "/admin/dashboard/*",
)


class GuardAction(str, enum.Enum):
    """Outcome of evaluating the guard for one request."""

    PASS = "pass"
    REDIRECT_DASHBOARD = "redirect_dashboard"
    REDIRECT_SIGN_IN = "redirect_sign_in"


@dataclass(frozen=True)
class GuardDecision:
    """A guard outcome plus the path to redirect to, if any."""

    action: GuardAction
    location: str | None = None

    @property
    def is_redirect(self) -> bool:
        return self.action is not GuardAction.PASS


PASS_THROUGH = GuardDecision(GuardAction.PASS)


def matches_pattern(path: str, pattern: str) -> bool:
    """Check a path against one matcher entry."""
    if pattern.endswith("/*"):
        base = pattern[:-2]
        return path == base or path.startswith(base + "/")
    return path == pattern


def is_matched_path(path: str, patterns: tuple[str, ...] = MATCHED_PATHS) -> bool:
    """Check whether the guard should run for a path at all."""
    return any(matches_pattern(path, pattern) for pattern in patterns)


def is_auth_only_path(path: str) -> bool:
    """Paths meant only for visitors without a session."""
    return path.startswith(AUTH_ONLY_PREFIXES)


def is_protected_path(path: str) -> bool:
    """Paths that require a session to be served."""
    return path.startswith(PROTECTED_PREFIXES)


def decide(path: str, has_token: bool) -> GuardDecision:
    """Evaluate the guard for a request path.

    Args:
        path: Request path (no query string).
        has_token: Whether a valid session token was resolved. Resolution
            failures must be passed as False.

    Returns:
        The guard decision.
    """
    if has_token and is_auth_only_path(path):
        return GuardDecision(GuardAction.REDIRECT_DASHBOARD, DASHBOARD_PATH)

    if not has_token and is_protected_path(path):
        return GuardDecision(GuardAction.REDIRECT_SIGN_IN, SIGN_IN_PATH)

    return PASS_THROUGH
