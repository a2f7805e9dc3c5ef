"""Lifecycle of a single policy what-if request."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum

from aqsync.models.simulation import SimulationResult

_logger = logging.getLogger(__name__)


class SimulationPhase(StrEnum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass(slots=True)
class SimulationToken:
    """Cancellation token scoped to the selection generation at request time.

    A cancelled token's request is allowed to finish, but its outcome is
    never committed.
    """

    sector_id: int
    policy_name: str
    generation: int
    cancelled: bool = field(default=False)

    def cancel(self) -> None:
        self.cancelled = True


class SimulationController:
    """``Idle → Running → {Complete, Failed} → Idle``.

    ``phase`` is ``RUNNING`` while a request is outstanding and ``IDLE``
    otherwise; ``last_outcome`` records how the most recent committed
    request ended.
    """

    def __init__(self) -> None:
        self._active: SimulationToken | None = None
        self._result: SimulationResult | None = None
        self._last_outcome: SimulationPhase | None = None

    @property
    def phase(self) -> SimulationPhase:
        return SimulationPhase.RUNNING if self._active is not None else SimulationPhase.IDLE

    @property
    def result(self) -> SimulationResult | None:
        return self._result

    @property
    def last_outcome(self) -> SimulationPhase | None:
        return self._last_outcome

    def begin(self, *, sector_id: int, policy_name: str, generation: int) -> SimulationToken | None:
        """Enter ``RUNNING``. Returns ``None`` if a request is already outstanding."""
        if self._active is not None:
            return None
        token = SimulationToken(sector_id=sector_id, policy_name=policy_name, generation=generation)
        self._active = token
        return token

    def complete(self, token: SimulationToken, result: SimulationResult) -> bool:
        """Store *result* if *token* is still the active, uncancelled request."""
        if not self._owns(token):
            return False
        self._active = None
        self._result = result
        self._last_outcome = SimulationPhase.COMPLETE
        return True

    def fail(self, token: SimulationToken) -> bool:
        """Return to ``IDLE`` without touching a previously stored result."""
        if not self._owns(token):
            return False
        self._active = None
        self._last_outcome = SimulationPhase.FAILED
        return True

    def reset(self) -> None:
        """Drop the stored result and abandon any outstanding request."""
        if self._active is not None:
            _logger.debug(
                "Abandoning simulation policy=%r sector_id=%s",
                self._active.policy_name,
                self._active.sector_id,
            )
            self._active.cancel()
        self._active = None
        self._result = None
        self._last_outcome = None

    def _owns(self, token: SimulationToken) -> bool:
        return token is self._active and not token.cancelled
