"""In-memory dashboard state record.

This is the only component allowed to mutate dashboard state. Views see
it as immutable :class:`DashboardSnapshot` values delivered to
subscribed listeners after every mutation.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable, Iterable
from datetime import datetime

from pydantic import BaseModel, ConfigDict

from aqsync._constants import DEFAULT_HISTORY_CAPACITY
from aqsync.exceptions import AqSelectionError
from aqsync.models.history import MetricsHistoryEntry
from aqsync.models.policy import Policy
from aqsync.models.sector import Sector
from aqsync.models.simulation import SimulationResult
from aqsync.models.status import SectorStatus
from aqsync.state.errors import ErrorSurface
from aqsync.state.events import FetchCategory
from aqsync.state.history import MetricsHistoryBuffer
from aqsync.state.registry import SectorRegistryCache
from aqsync.state.selection import SelectionController
from aqsync.state.simulation import SimulationController, SimulationPhase, SimulationToken

_logger = logging.getLogger(__name__)

StateListener = Callable[["DashboardSnapshot"], None]


class DashboardSnapshot(BaseModel):
    """Read-only projection of the dashboard state."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: int = 0
    sectors: tuple[Sector, ...] = ()
    selected_sector_id: int | None = None
    status: SectorStatus | None = None
    policy: Policy | None = None
    simulation: SimulationResult | None = None
    simulation_phase: SimulationPhase = SimulationPhase.IDLE
    history: tuple[MetricsHistoryEntry, ...] = ()
    loading: bool = False
    error: str | None = None

    @property
    def selected_sector(self) -> Sector | None:
        for sector in self.sectors:
            if sector.id == self.selected_sector_id:
                return sector
        return None


class StateStore:
    """Owns every state slot and notifies listeners after each mutation."""

    def __init__(self, *, history_capacity: int = DEFAULT_HISTORY_CAPACITY) -> None:
        self.errors = ErrorSurface()
        self.registry = SectorRegistryCache()
        self.history = MetricsHistoryBuffer(history_capacity)
        self.selection = SelectionController()
        self.simulation = SimulationController()
        self._status: SectorStatus | None = None
        self._policy: Policy | None = None
        self._policy_generation: int | None = None
        self._loading = 0
        self._version = 0
        self._listeners: list[StateListener] = []

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def loading(self) -> bool:
        return self._loading > 0

    def policy_for(self, generation: int) -> Policy | None:
        """The stored policy, only if it was fetched for *generation*."""
        if self._policy_generation != generation:
            return None
        return self._policy

    def snapshot(self) -> DashboardSnapshot:
        return DashboardSnapshot(
            version=self._version,
            sectors=self.registry.sectors,
            selected_sector_id=self.selection.sector_id,
            status=self._status,
            policy=self._policy,
            simulation=self.simulation.result,
            simulation_phase=self.simulation.phase,
            history=self.history.entries(),
            loading=self.loading,
            error=self.errors.message,
        )

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register *listener* and return a callable that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                self._listeners.remove(listener)

        return _unsubscribe

    def publish(self) -> None:
        self._version += 1
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                _logger.debug("State listener failed", exc_info=True)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def replace_sectors(self, sectors: Iterable[Sector]) -> None:
        self.registry.replace(sectors)
        self.errors.resolve(FetchCategory.REGISTRY)
        self.publish()

    def select(self, sector_id: int) -> int:
        """Change the selection, discard the simulation, return the new generation.

        Raises :class:`AqSelectionError` once the registry has loaded if
        *sector_id* has never been part of it.
        """
        if self.registry.loaded and not self.registry.has_seen(sector_id):
            raise AqSelectionError(sector_id)
        generation = self.selection.select(sector_id)
        self.simulation.reset()
        self.publish()
        return generation

    def commit_status(self, status: SectorStatus, *, resolved_at: datetime) -> None:
        self._status = status
        self.history.append(MetricsHistoryEntry.from_status(status, resolved_at))
        self.errors.resolve(FetchCategory.STATUS)
        self.publish()

    def commit_policy(self, policy: Policy, *, generation: int) -> None:
        self._policy = policy
        self._policy_generation = generation
        self.errors.resolve(FetchCategory.POLICY)
        self.publish()

    def begin_simulation(self, *, sector_id: int, policy_name: str, generation: int) -> SimulationToken | None:
        token = self.simulation.begin(sector_id=sector_id, policy_name=policy_name, generation=generation)
        if token is not None:
            self.publish()
        return token

    def commit_simulation(self, token: SimulationToken, result: SimulationResult) -> bool:
        if not self.simulation.complete(token, result):
            return False
        self.errors.resolve(FetchCategory.SIMULATION)
        self.publish()
        return True

    def fail_simulation(self, token: SimulationToken, message: str) -> bool:
        if not self.simulation.fail(token):
            return False
        self.errors.report(FetchCategory.SIMULATION, message)
        self.publish()
        return True

    def report_error(self, category: FetchCategory, message: str) -> None:
        self.errors.report(category, message)
        self.publish()

    def begin_loading(self) -> None:
        self._loading += 1
        self.publish()

    def end_loading(self) -> None:
        self._loading = max(0, self._loading - 1)
        self.publish()
