"""User-facing toast notifications raised by dashboard actions."""

from dataclasses import dataclass
from typing import Any, Literal

ToastVariant = Literal["default", "destructive"]


@dataclass(frozen=True)
class Toast:
    title: str
    description: str | None = None
    variant: ToastVariant = "default"

    def to_dict(self) -> dict[str, str | None]:
        return {
            "title": self.title,
            "description": self.description,
            "variant": self.variant,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Toast | None":
        """Rebuild a toast from ``to_dict`` output; None if it is not one."""
        if not isinstance(data, dict) or not isinstance(data.get("title"), str):
            return None
        description = data.get("description")
        return cls(
            title=data["title"],
            description=description if isinstance(description, str) else None,
            variant="destructive" if data.get("variant") == "destructive" else "default",
        )


class Notifier:
    """Ordered queue of toasts waiting to be shown."""

    def __init__(self) -> None:
        self._toasts: list[Toast] = []

    def notify(
        self,
        title: str,
        description: str | None = None,
        variant: ToastVariant = "default",
    ) -> Toast:
        toast = Toast(title=title, description=description, variant=variant)
        self._toasts.append(toast)
        return toast

    def push(self, toast: Toast) -> None:
        self._toasts.append(toast)

    def error(self, description: str) -> Toast:
        """Push the standard destructive "Error" toast."""
        return self.notify("Error", description, variant="destructive")

    @property
    def pending(self) -> list[Toast]:
        return list(self._toasts)

    def drain(self) -> list[Toast]:
        """Return and clear all pending toasts."""
        toasts, self._toasts = self._toasts, []
        return toasts
