"""Route guarding for session-gated pages."""

from anon_feedback.routing.guard import (
    DASHBOARD_PATH,
    MATCHED_PATHS,
    SIGN_IN_PATH,
    GuardAction,
    GuardDecision,
    decide,
    is_matched_path,
)

__all__ = [
    "DASHBOARD_PATH",
    "MATCHED_PATHS",
    "SIGN_IN_PATH",
    "GuardAction",
    "GuardDecision",
    "decide",
    "is_matched_path",
]
