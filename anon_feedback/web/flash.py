"""Toasts carried across a redirect in a short-lived cookie.

Dashboard form posts answer with a 303 back to the dashboard page. The
toasts raised by the action ride along in ``FLASH_COOKIE`` and are shown
(and the cookie cleared) by the next page load.
"""

import base64
import json
import logging

from starlette.requests import HTTPConnection
from starlette.responses import Response

from anon_feedback.dashboard.notifications import Toast

logger = logging.getLogger(__name__)

FLASH_COOKIE = "dashboard-toasts"
FLASH_MAX_AGE_SECONDS = 60
MAX_FLASHED_TOASTS = 10


def encode_toasts(toasts: list[Toast]) -> str:
    """Serialize toasts into a cookie-safe string."""
    raw = json.dumps(
        [t.to_dict() for t in toasts[:MAX_FLASHED_TOASTS]],
        separators=(",", ":"),
    ).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode_toasts(value: str | None) -> list[Toast]:
    """Parse a flash cookie; anything unreadable yields no toasts."""
    if not value:
        return []

    try:
        raw = base64.urlsafe_b64decode(value + "=" * (-len(value) % 4))
        items = json.loads(raw)
    except ValueError as e:
        logger.debug("Ignoring unreadable flash cookie: %s", e)
        return []

    if not isinstance(items, list):
        return []

    toasts = []
    for item in items[:MAX_FLASHED_TOASTS]:
        toast = Toast.from_dict(item)
        if toast is not None:
            toasts.append(toast)
    return toasts


def flash_toasts(response: Response, toasts: list[Toast], path: str) -> None:
    """Attach toasts to a redirect response."""
    if not toasts:
        return
    response.set_cookie(
        FLASH_COOKIE,
        encode_toasts(toasts),
        max_age=FLASH_MAX_AGE_SECONDS,
        path=path,
        httponly=True,
        samesite="lax",
    )


def read_flashed_toasts(conn: HTTPConnection) -> list[Toast]:
    return decode_toasts(conn.cookies.get(FLASH_COOKIE))


def clear_flash(conn: HTTPConnection, response: Response, path: str) -> None:
    """Expire the flash cookie once its toasts have been shown."""
    if FLASH_COOKIE in conn.cookies:
        response.delete_cookie(FLASH_COOKIE, path=path, httponly=True, samesite="lax")
