"""Feedback card: the per-item delete action.

The card deletes on the server first and only tells its owner to drop
the item locally once the server confirmed.
"""

import logging
from typing import Callable

from anon_feedback.dashboard.client import FeedbackApiClient
from anon_feedback.dashboard.commands import CommandResult, DeleteFeedback
from anon_feedback.dashboard.notifications import Notifier
from anon_feedback.dashboard.schemas import Feedback

logger = logging.getLogger(__name__)


class FeedbackCard:
    def __init__(
        self,
        feedback: Feedback,
        api: FeedbackApiClient,
        on_delete: Callable[[str], None],
        notifier: Notifier,
    ) -> None:
        self.feedback = feedback
        self._api = api
        self._on_delete = on_delete
        self._notifier = notifier

    async def delete(self) -> CommandResult[str]:
        result = await DeleteFeedback(self._api, self.feedback.feedback_id).execute()

        if result.ok:
            self._notifier.notify(result.value or "Feedback deleted")
            self._on_delete(self.feedback.feedback_id)
        else:
            logger.info("Delete of %s failed: %s", self.feedback.feedback_id, result.message)
            self._notifier.error(result.message)

        return result
