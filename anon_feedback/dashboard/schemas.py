"""Schema definitions for feedback items and data API payloads.

Feedback records are owned by the external data store; the dashboard
holds a transient decoded copy. Decoding happens once at the API
boundary so that the view-model only ever sees well-formed items.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

logger = logging.getLogger(__name__)

# Keys the data API uses for the feedback identifier, in priority order
_ID_KEYS = ("_id", "id")


@dataclass
class Feedback:
    """One anonymous feedback submission.

    Attributes:
        feedback_id: Identifier assigned by the data store.
        content: Submitted text.
        created_at: Submission time, when the store reports one.
        extra: Any remaining fields, kept opaque.
    """

    feedback_id: str
    content: str = ""
    created_at: datetime | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, item: dict[str, Any]) -> "Feedback | None":
        """Build a Feedback from a data API item, or None if it has no id."""
        feedback_id = next(
            (item[key] for key in _ID_KEYS if item.get(key) not in (None, "")),
            None,
        )
        if feedback_id is None:
            return None

        content = item.get("content")
        extra = {
            k: v for k, v in item.items()
            if k not in _ID_KEYS and k not in ("content", "createdAt")
        }

        return cls(
            feedback_id=str(feedback_id),
            content=content if isinstance(content, str) else "",
            created_at=_parse_timestamp(item.get("createdAt")),
            extra=extra,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "_id": self.feedback_id,
            "content": self.content,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            **self.extra,
        }


@dataclass(frozen=True)
class DecodedFeedbackList:
    """Result of decoding a ``GET /api/get-feedbacks`` payload.

    ``fallback_used`` is True when the payload's ``feedback`` field was
    not a list and an empty list was substituted. ``skipped`` counts
    entries dropped because they were not objects or had no identifier;
    such entries cannot be deleted, so they are never shown.
    """

    items: list[Feedback]
    fallback_used: bool = False
    skipped: int = 0

    @classmethod
    def empty(cls) -> "DecodedFeedbackList":
        return cls(items=[], fallback_used=True)


def decode_feedback_list(payload: Any) -> DecodedFeedbackList:
    """Decode the feedback list payload.

    A payload that is not an object, or whose ``feedback`` field is not a
    list, decodes to an explicit empty result. Entries that are not
    objects or carry no identifier are skipped.

    Args:
        payload: Parsed JSON body.

    Returns:
        The decoded list; never raises.
    """
    raw = payload.get("feedback") if isinstance(payload, dict) else None
    if not isinstance(raw, list):
        logger.info("Feedback payload is not a list (%s), using empty list", type(raw).__name__)
        return DecodedFeedbackList.empty()

    items: list[Feedback] = []
    skipped = 0
    for entry in raw:
        decoded = Feedback.from_api(entry) if isinstance(entry, dict) else None
        if decoded is None:
            skipped += 1
            continue
        items.append(decoded)

    if skipped:
        logger.warning("Skipped %d malformed feedback entries", skipped)

    return DecodedFeedbackList(items=items, skipped=skipped)


def decode_acceptance(payload: Any) -> bool | None:
    """Read ``isAcceptingFeedback`` from a payload; None if absent or not a bool."""
    if not isinstance(payload, dict):
        return None
    value = payload.get("isAcceptingFeedback")
    return value if isinstance(value, bool) else None


def decode_message(payload: Any) -> str | None:
    """Read the human-readable ``feedback`` message from a payload."""
    if not isinstance(payload, dict):
        return None
    message = payload.get("feedback")
    return message if isinstance(message, str) and message else None


def _parse_timestamp(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None
