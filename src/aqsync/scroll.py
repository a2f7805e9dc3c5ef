"""Viewport scroll stability across state-mutating refreshes."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Hashable
from dataclasses import dataclass
from typing import Protocol, TypeVar

from aqsync._constants import DEFAULT_SCROLL_RESTORE_PASSES

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class Viewport(Protocol):
    """Scroll surface owned by the view layer."""

    @property
    def scroll_offset(self) -> float:
        ...

    def scroll_to(self, offset: float) -> None:
        ...


@dataclass(slots=True)
class _PendingCallback:
    remaining: int
    callback: Callable[[], None]
    key: Hashable | None = None


class RenderCommitHook:
    """Post-commit callbacks driven by the view layer.

    The state store calls :meth:`notify_commit` on every published
    change and the view calls :meth:`notify_render_complete` once per
    finished render pass. A callback registered with :meth:`after_commit`
    runs once *passes* render passes have completed since the most
    recent commit, by which point the layout reflects the latest state.
    Passes already rendered for that commit count towards the total.
    """

    def __init__(self, passes: int = DEFAULT_SCROLL_RESTORE_PASSES) -> None:
        if passes < 1:
            raise ValueError(f"passes must be at least 1, got {passes}")
        self._passes = passes
        self._renders_since_commit = 0
        self._pending: list[_PendingCallback] = []

    @property
    def pending(self) -> int:
        return len(self._pending)

    def after_commit(
        self,
        callback: Callable[[], None],
        *,
        passes: int | None = None,
        key: Hashable | None = None,
    ) -> bool:
        """Run *callback* after the latest commit has rendered *passes* times.

        A callback registered under *key* replaces one still pending
        under the same key. Returns ``True`` if it already ran.
        """
        if key is not None:
            self.cancel(key)
        remaining = (passes or self._passes) - self._renders_since_commit
        if remaining <= 0:
            self._run(callback)
            return True
        self._pending.append(_PendingCallback(remaining=remaining, callback=callback, key=key))
        return False

    def cancel(self, key: Hashable) -> None:
        self._pending = [item for item in self._pending if item.key != key]

    def notify_commit(self) -> None:
        self._renders_since_commit = 0

    def notify_render_complete(self) -> None:
        self._renders_since_commit += 1
        due: list[_PendingCallback] = []
        waiting: list[_PendingCallback] = []
        for item in self._pending:
            item.remaining -= 1
            (due if item.remaining <= 0 else waiting).append(item)
        self._pending = waiting
        for item in due:
            self._run(item.callback)

    @staticmethod
    def _run(callback: Callable[[], None]) -> None:
        try:
            callback()
        except Exception:
            _logger.debug("Post-commit callback failed", exc_info=True)


class ScrollPositionGuard:
    """Capture the scroll offset before *work* and reapply it once the view settles.

    Overlapping guarded work shares the offset captured by the outermost
    entry, and the restore is scheduled when the last of it finishes.
    *request_render* is called when the restore still waits on render
    passes, so the view renders the settled state at least once more.
    """

    def __init__(
        self,
        viewport: Viewport,
        hook: RenderCommitHook,
        *,
        request_render: Callable[[], None] | None = None,
    ) -> None:
        self._viewport = viewport
        self._hook = hook
        self._request_render = request_render
        self._depth = 0
        self._saved = 0.0

    async def guard(self, work: Callable[[], Awaitable[T]]) -> T:
        if self._depth == 0:
            self._hook.cancel(self)
            self._saved = self._viewport.scroll_offset
        self._depth += 1
        try:
            return await work()
        finally:
            self._depth -= 1
            if self._depth == 0:
                self._schedule_restore(self._saved)

    def _schedule_restore(self, offset: float) -> None:
        if self._hook.after_commit(lambda: self._restore(offset), key=self):
            return
        if self._request_render is not None:
            self._request_render()

    def _restore(self, offset: float) -> None:
        if self._viewport.scroll_offset != offset:
            _logger.debug("Restoring scroll offset %s", offset)
        self._viewport.scroll_to(offset)
