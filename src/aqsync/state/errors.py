"""Single-slot user-visible error message."""

from __future__ import annotations

from aqsync.state.events import FetchCategory
from aqsync.state.policy import clears_error


class ErrorSurface:
    """Holds the most recent failure's message, or nothing.

    There is no queue: a new error replaces an older unrelated one. The
    category is tracked only so that a later success of the same
    category can clear the banner.
    """

    def __init__(self) -> None:
        self._message: str | None = None
        self._category: FetchCategory | None = None

    @property
    def message(self) -> str | None:
        return self._message

    def report(self, category: FetchCategory, message: str) -> None:
        self._message = message
        self._category = category

    def resolve(self, category: FetchCategory) -> bool:
        """Clear the message if it came from *category*. Returns whether it changed."""
        if not clears_error(error_category=self._category, success_category=category):
            return False
        self._message = None
        self._category = None
        return True
