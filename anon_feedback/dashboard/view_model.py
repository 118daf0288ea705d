"""Dashboard view-model.

Holds the state behind the owner dashboard: the feedback list, the
"accepting feedback" flag, loading indicators, and pending toasts. All
remote work goes through the command objects in
``anon_feedback.dashboard.commands``; this module only decides what each
success or failure does to local state.

Consistency rules:
- The feedback list is a best-effort mirror. A failed load keeps the
  stale list rather than clearing it.
- The acceptance flag is only changed after the server confirmed the
  write; a failed toggle leaves it as it was.
- Local removal of a feedback item never waits for the server.
- Overlapping loads are not de-duplicated; whichever response arrives
  last overwrites state.
"""

import asyncio
import enum
import logging

from anon_feedback.auth.provider import SessionProvider
from anon_feedback.auth.schemas import SessionSnapshot, SessionStatus, SessionUser
from anon_feedback.dashboard.card import FeedbackCard
from anon_feedback.dashboard.client import FeedbackApiClient
from anon_feedback.dashboard.clipboard import Clipboard, ClipboardError
from anon_feedback.dashboard.commands import (
    CommandResult,
    FetchAcceptance,
    FetchFeedbacks,
    SetAcceptance,
    describe,
)
from anon_feedback.dashboard.config import DashboardConfig
from anon_feedback.dashboard.notifications import Notifier
from anon_feedback.dashboard.schemas import DecodedFeedbackList, Feedback
from anon_feedback.routing.guard import SIGN_IN_PATH

logger = logging.getLogger(__name__)

COPY_SUCCESS_TITLE = "Profile URL copied to clipboard!"
COPY_FAILED_MESSAGE = "Failed to copy URL"
COPY_MANUALLY_TITLE = "Copy this link"


class DashboardView(str, enum.Enum):
    """Which version of the dashboard page to render."""

    LOADING = "loading"
    SIGNED_OUT = "signed_out"
    READY = "ready"


class DashboardViewModel:
    """State holder for the owner dashboard page."""

    def __init__(
        self,
        sessions: SessionProvider,
        api: FeedbackApiClient,
        notifier: Notifier | None = None,
        origin: str | None = None,
        config: DashboardConfig | None = None,
    ) -> None:
        """
        Args:
            sessions: Session context for the current request.
            api: Data API client (already entered as a context manager).
            notifier: Toast queue; a fresh one is created if None.
            origin: Page origin for the profile link. None when there is
                no browser-like context, which yields an empty origin.
            config: Dashboard configuration.
        """
        self._sessions = sessions
        self._api = api
        self._config = config or DashboardConfig()
        self.notifier = notifier or Notifier()
        self.origin = origin or ""

        self.feedbacks: list[Feedback] = []
        self.accepting_feedback: bool | None = None
        self.is_loading = False
        self.is_switch_loading = False

        self._user_id = self._current_user_id(sessions.snapshot())
        self._unsubscribe = sessions.subscribe(self._on_session_change)

    # ── Session ─────────────────────────────────────────

    @property
    def status(self) -> SessionStatus:
        return self._sessions.status

    @property
    def user(self) -> SessionUser | None:
        return self._sessions.snapshot().user

    @property
    def view(self) -> DashboardView:
        snapshot = self._sessions.snapshot()
        if snapshot.status is SessionStatus.LOADING:
            return DashboardView.LOADING
        if not snapshot.is_authenticated or snapshot.user is None:
            return DashboardView.SIGNED_OUT
        return DashboardView.READY

    def redirect_target(self, current_path: str) -> str | None:
        """Where to send a signed-out visitor, or None to stay."""
        if self.status is SessionStatus.UNAUTHENTICATED and current_path != SIGN_IN_PATH:
            return SIGN_IN_PATH
        return None

    def close(self) -> None:
        """Stop listening to session changes."""
        self._unsubscribe()

    def _on_session_change(self, snapshot: SessionSnapshot) -> None:
        user_id = self._current_user_id(snapshot)
        if user_id != self._user_id:
            logger.debug("Session user changed, clearing dashboard state")
            self.feedbacks = []
            self.accepting_feedback = None
        self._user_id = user_id

    @staticmethod
    def _current_user_id(snapshot: SessionSnapshot) -> str | None:
        return snapshot.user.identifier if snapshot.user else None

    # ── Loading ─────────────────────────────────────────

    async def mount(self) -> bool:
        """Start the initial loads if a signed-in user is present.

        Both loads run concurrently with no ordering between them.

        Returns:
            True if the loads were started.
        """
        if self.view is not DashboardView.READY:
            return False

        await asyncio.gather(self.load_feedbacks(), self.load_acceptance())
        return True

    async def load_feedbacks(self, refresh: bool = False) -> CommandResult[DecodedFeedbackList]:
        """Replace the local list with the server's current list."""
        self.is_loading = True
        try:
            result = await FetchFeedbacks(self._api).execute()
        finally:
            self.is_loading = False

        logger.debug("Feedback load %s", describe(result))

        if result.ok:
            self.feedbacks = list(result.value.items)
            if refresh:
                self.notifier.notify("Refreshed feedbacks", "Showing latest feedbacks")
        else:
            self.notifier.error(result.message)

        return result

    async def load_acceptance(self) -> CommandResult[bool]:
        """Mirror the server's acceptance flag into local state."""
        self.is_switch_loading = True
        try:
            result = await FetchAcceptance(self._api).execute()
        finally:
            self.is_switch_loading = False

        if result.ok:
            self.accepting_feedback = result.value
        else:
            self.notifier.error(result.message)

        return result

    # ── Actions ─────────────────────────────────────────

    async def toggle_acceptance(self) -> CommandResult[str]:
        """Send the negated flag; adopt it locally only after success."""
        target = not bool(self.accepting_feedback)
        result = await SetAcceptance(self._api, target).execute()

        if result.ok:
            self.accepting_feedback = target
            self.notifier.notify(result.value or "Feedback settings updated")
        else:
            self.notifier.error(result.message)

        logger.info("Acceptance toggle to %s %s", target, describe(result))
        return result

    def remove_feedback(self, feedback_id: str) -> None:
        """Drop entries with this id from the local list, keeping order."""
        self.feedbacks = [f for f in self.feedbacks if f.feedback_id != feedback_id]

    def card_for(self, feedback: Feedback) -> FeedbackCard:
        return FeedbackCard(
            feedback=feedback,
            api=self._api,
            on_delete=self.remove_feedback,
            notifier=self.notifier,
        )

    async def delete_feedback(self, feedback_id: str) -> CommandResult[str]:
        """Delete through the feedback card: server first, then local removal."""
        feedback = next(
            (f for f in self.feedbacks if f.feedback_id == feedback_id),
            Feedback(feedback_id=feedback_id),
        )
        return await self.card_for(feedback).delete()

    # ── Profile link ────────────────────────────────────

    @property
    def profile_url(self) -> str:
        username = self.user.username if self.user else None
        return f"{self.origin}{self._config.profile_path_prefix}{username or ''}"

    async def copy_profile_url(self, clipboard: Clipboard) -> bool:
        """Copy the profile link and report the outcome as a toast."""
        try:
            await clipboard.write_text(self.profile_url)
        except ClipboardError as e:
            logger.warning("Failed to copy profile URL: %s", e)
            self.notifier.error(COPY_FAILED_MESSAGE)
            return False

        self.notifier.notify(COPY_SUCCESS_TITLE)
        return True

    def offer_profile_url(self) -> str:
        """Show the link for manual copying when no clipboard is reachable."""
        self.notifier.notify(COPY_MANUALLY_TITLE, self.profile_url)
        return self.profile_url
