"""
Request and response models for the dashboard JSON endpoints.
"""

from pydantic import BaseModel, Field


class ToastModel(BaseModel):
    """A notification raised by a dashboard action."""

    title: str
    description: str | None = None
    variant: str = Field(default="default", description="default or destructive")


class FeedbackItem(BaseModel):
    """One feedback submission as shown on the dashboard."""

    feedback_id: str
    content: str
    created_at: str | None = None


class DashboardStateResponse(BaseModel):
    """Full dashboard state after a page load or action."""

    view: str = Field(..., description="loading, signed_out, or ready")
    username: str | None = None
    profile_url: str
    accepting_feedback: bool | None = None
    feedbacks: list[FeedbackItem] = Field(default_factory=list)
    toasts: list[ToastModel] = Field(default_factory=list)


class ActionResponse(BaseModel):
    """Outcome of one dashboard action plus the resulting state."""

    ok: bool
    message: str | None = Field(
        default=None,
        description="Server message on success, error message on failure",
    )
    state: DashboardStateResponse


class CopyLinkResponse(BaseModel):
    """Outcome of the copy-profile-link action."""

    copied: bool
    profile_url: str
    toasts: list[ToastModel] = Field(default_factory=list)


class ComponentHealth(BaseModel):
    """Health of one dependency."""

    status: str = Field(..., description="healthy or unhealthy")
    latency_ms: float | None = None
    details: dict = Field(default_factory=dict)


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(
        ...,
        description="Overall service status: healthy or degraded",
    )
    version: str
    components: dict[str, ComponentHealth] = Field(default_factory=dict)
