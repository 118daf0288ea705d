"""Dashboard commands: one async object per remote action.

Each command wraps exactly one data API call and returns either a
``CommandSuccess`` carrying the decoded value or a ``CommandFailure``
carrying the message to show. Commands never raise for API failures;
the view-model decides what each outcome does to local state.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from anon_feedback.dashboard.client import DataApiError, FeedbackApiClient
from anon_feedback.dashboard.schemas import DecodedFeedbackList

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CommandSuccess(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class CommandFailure:
    """A failed command.

    Attributes:
        message: Server-supplied message, else the command's fallback.
        status_code: HTTP status when the server answered, else None.
    """

    message: str
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return False


CommandResult = CommandSuccess[T] | CommandFailure


class DashboardCommand(ABC, Generic[T]):
    """Base class for dashboard commands.

    Subclasses implement ``_run`` and declare the fallback message used
    when the server does not supply one.
    """

    fallback_message: str = "Something went wrong"

    def __init__(self, api: FeedbackApiClient) -> None:
        self._api = api

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    async def _run(self) -> T:
        """Perform the API call."""

    async def execute(self) -> CommandResult[T]:
        try:
            value = await self._run()
        except DataApiError as e:
            logger.info("%s failed: %s", self.name, e)
            return CommandFailure(
                message=e.server_message or self.fallback_message,
                status_code=e.status_code,
            )
        return CommandSuccess(value)


class FetchFeedbacks(DashboardCommand[DecodedFeedbackList]):
    fallback_message = "Failed to fetch feedbacks"

    async def _run(self) -> DecodedFeedbackList:
        return await self._api.get_feedbacks()


class FetchAcceptance(DashboardCommand[bool]):
    fallback_message = "Failed to fetch feedback settings"

    async def _run(self) -> bool:
        return await self._api.get_acceptance()


class SetAcceptance(DashboardCommand[str]):
    """Write the acceptance flag; succeeds with the server's status message."""

    fallback_message = "Failed to update feedback settings"

    def __init__(self, api: FeedbackApiClient, accepting: bool) -> None:
        super().__init__(api)
        self.accepting = accepting

    async def _run(self) -> str:
        return await self._api.set_acceptance(self.accepting)


class DeleteFeedback(DashboardCommand[str]):
    fallback_message = "Failed to delete feedback"

    def __init__(self, api: FeedbackApiClient, feedback_id: str) -> None:
        super().__init__(api)
        self.feedback_id = feedback_id

    async def _run(self) -> str:
        return await self._api.delete_feedback(self.feedback_id)


def describe(result: CommandResult[Any]) -> str:
    """Short outcome label for logs."""
    return "ok" if result.ok else f"failed ({result.message})"
