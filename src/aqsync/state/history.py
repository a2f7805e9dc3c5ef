"""Bounded rolling log of readings for trend charting."""

from __future__ import annotations

from collections import deque

from aqsync._constants import DEFAULT_HISTORY_CAPACITY
from aqsync.models.history import MetricsHistoryEntry


class MetricsHistoryBuffer:
    """FIFO buffer keeping the most recent *capacity* entries in append order."""

    def __init__(self, capacity: int = DEFAULT_HISTORY_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self._entries: deque[MetricsHistoryEntry] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen or 0

    def append(self, entry: MetricsHistoryEntry) -> None:
        self._entries.append(entry)

    def entries(self) -> tuple[MetricsHistoryEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
