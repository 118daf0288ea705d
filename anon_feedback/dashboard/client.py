"""
Async client for the feedback data API.

Provides:
- DataApiError: Single error type for every failed call
- FeedbackApiClient: httpx-based client for the four dashboard endpoints

The client forwards the caller's session cookies so the data API can
authorize the request as the signed-in user. It performs no retries:
the only retry path is the user re-issuing the action.
"""

import logging
from typing import Any

import httpx

from anon_feedback.dashboard.config import DashboardConfig
from anon_feedback.dashboard.schemas import (
    DecodedFeedbackList,
    decode_acceptance,
    decode_feedback_list,
    decode_message,
)

logger = logging.getLogger(__name__)

GET_FEEDBACKS_PATH = "/api/get-feedbacks"
ACCEPT_FEEDBACKS_PATH = "/api/accept-feedbacks"
DELETE_FEEDBACK_PATH = "/api/delete-feedback/{feedback_id}"


class DataApiError(Exception):
    """Raised when a data API call fails.

    Attributes:
        status_code: HTTP status of the failed response, None for
            transport failures.
        server_message: The ``feedback`` message from a structured error
            body, None when the body was absent or unstructured.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        server_message: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.server_message = server_message


class FeedbackApiClient:
    """
    Async client for the feedback data API.

    Example:
        async with FeedbackApiClient(config, cookies=request.cookies) as api:
            decoded = await api.get_feedbacks()
    """

    def __init__(
        self,
        config: DashboardConfig | None = None,
        cookies: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            config: Dashboard configuration. Uses defaults if None.
            cookies: Session cookies to forward on every call.
            transport: Optional httpx transport (used by tests).
        """
        self.config = config or DashboardConfig()
        self._cookies = dict(cookies or {})
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "FeedbackApiClient":
        self._client = httpx.AsyncClient(
            base_url=self.config.data_api_base_url,
            timeout=self.config.request_timeout_seconds,
            cookies=self._cookies,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def get_feedbacks(self) -> DecodedFeedbackList:
        """Fetch the signed-in user's feedback list.

        Raises:
            DataApiError: On transport failure or non-2xx response.
        """
        payload = await self._request("GET", GET_FEEDBACKS_PATH)
        return decode_feedback_list(payload)

    async def get_acceptance(self) -> bool:
        """Fetch whether the user currently accepts feedback.

        Raises:
            DataApiError: On failure, or if the response carries no boolean.
        """
        payload = await self._request("GET", ACCEPT_FEEDBACKS_PATH)
        accepting = decode_acceptance(payload)
        if accepting is None:
            raise DataApiError(
                "Acceptance response missing isAcceptingFeedback",
                server_message=decode_message(payload),
            )
        return accepting

    async def set_acceptance(self, accepting: bool) -> str:
        """Store the acceptance flag.

        Returns:
            The server's human-readable status message.
        """
        payload = await self._request(
            "POST",
            ACCEPT_FEEDBACKS_PATH,
            json_body={"acceptfeedbacks": accepting},
        )
        return decode_message(payload) or ""

    async def delete_feedback(self, feedback_id: str) -> str:
        """Delete one feedback item on the server.

        Returns:
            The server's human-readable status message.
        """
        path = DELETE_FEEDBACK_PATH.format(feedback_id=feedback_id)
        payload = await self._request("DELETE", path)
        return decode_message(payload) or ""

    async def _request(
        self,
        method: str,
        path: str,
        json_body: dict[str, Any] | None = None,
    ) -> Any:
        """Execute one call and return the parsed JSON body.

        Converts every failure (transport error, non-2xx status, body that
        is not JSON) into a DataApiError.
        """
        if not self._client:
            raise RuntimeError("FeedbackApiClient must be used as async context manager")

        try:
            response = await self._client.request(method, path, json=json_body)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise DataApiError(f"{method} {path} failed: {e}") from e

        payload = _parse_json(response)

        if response.status_code >= 400:
            logger.warning("%s %s returned %d", method, path, response.status_code)
            raise DataApiError(
                f"{method} {path} failed with status {response.status_code}",
                status_code=response.status_code,
                server_message=decode_message(payload),
            )

        if payload is None:
            raise DataApiError(
                f"{method} {path} returned a non-JSON body",
                status_code=response.status_code,
            )

        return payload


def _parse_json(response: httpx.Response) -> Any:
    """Parse a response body as JSON, returning None when it is not JSON."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None
