"""Clipboard targets for the copy-profile-link action.

The dashboard only depends on the ``Clipboard`` protocol. Over HTTP the
server cannot reach the visitor's clipboard, so the web layer uses a
``BufferClipboard`` and hands the buffered text back in the response for
the page to copy.
"""

from typing import Protocol


class ClipboardError(Exception):
    """Raised when text cannot be written to a clipboard."""


class Clipboard(Protocol):
    async def write_text(self, text: str) -> None:
        """Write text, raising ClipboardError on failure."""


class BufferClipboard:
    """Clipboard that keeps the last written text in memory."""

    def __init__(self) -> None:
        self.text: str | None = None

    async def write_text(self, text: str) -> None:
        if not text:
            raise ClipboardError("Nothing to copy")
        self.text = text
