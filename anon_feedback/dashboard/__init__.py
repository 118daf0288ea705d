"""Owner dashboard: feedback list, acceptance flag, and profile link.

Components:
- DashboardConfig: Pydantic settings for the data API and profile link
- FeedbackApiClient / DataApiError: httpx client for the data API
- Dashboard commands: one async object per remote action, with
  success/failure result variants
- DashboardViewModel: State holder driving the dashboard page
- FeedbackCard: Per-item delete action
- Feedback / decode_feedback_list: Decoded data API items
"""

from anon_feedback.dashboard.card import FeedbackCard
from anon_feedback.dashboard.client import DataApiError, FeedbackApiClient
from anon_feedback.dashboard.commands import (
    CommandFailure,
    CommandSuccess,
    DeleteFeedback,
    FetchAcceptance,
    FetchFeedbacks,
    SetAcceptance,
)
from anon_feedback.dashboard.config import DashboardConfig
from anon_feedback.dashboard.notifications import Notifier, Toast
from anon_feedback.dashboard.schemas import (
    DecodedFeedbackList,
    Feedback,
    decode_feedback_list,
)
from anon_feedback.dashboard.view_model import DashboardView, DashboardViewModel

__all__ = [
    "CommandFailure",
    "CommandSuccess",
    "DashboardConfig",
    "DashboardView",
    "DashboardViewModel",
    "DataApiError",
    "DecodedFeedbackList",
    "DeleteFeedback",
    "Feedback",
    "FeedbackApiClient",
    "FeedbackCard",
    "FetchAcceptance",
    "FetchFeedbacks",
    "Notifier",
    "SetAcceptance",
    "Toast",
    "decode_feedback_list",
]
