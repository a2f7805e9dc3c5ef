"""Fetch/refresh policy for the air-quality dashboard.

:class:`SyncOrchestrator` decides when to fetch, commits results into the
:class:`~aqsync.state.store.StateStore`, and keeps the viewport stable
across background updates. Views subscribe to snapshots and send
intents back; they never touch state directly.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any, TypeVar

from aqsync._constants import (
    POLICY_ERROR_MESSAGE,
    REGISTRY_ERROR_MESSAGE,
    SIMULATION_ERROR_MESSAGE,
    STATUS_ERROR_MESSAGE,
)
from aqsync.client import AqClient
from aqsync.exceptions import AqError, AqSimulationError
from aqsync.models.simulation import SimulationResult
from aqsync.scheduler import PollingScheduler
from aqsync.scroll import RenderCommitHook, ScrollPositionGuard, Viewport
from aqsync.state.events import FetchCategory, Intent, RequestRefresh, RequestSimulation, SelectSector
from aqsync.state.policy import should_commit
from aqsync.state.simulation import SimulationPhase
from aqsync.state.store import DashboardSnapshot, StateListener, StateStore

_logger = logging.getLogger(__name__)

T = TypeVar("T")


def _local_now() -> datetime:
    return datetime.now().astimezone()


class SyncOrchestrator:
    """Composes the dashboard state components into one refresh policy.

    Usage::

        async with AqClient(config) as client:
            async with SyncOrchestrator(client, viewport=view) as dashboard:
                dashboard.subscribe(view.render)
                await dashboard.select_sector(3)

    Parameters
    ----------
    client
        Entered :class:`AqClient` used for every fetch.
    viewport
        Scroll surface to keep stable across refreshes. Without one,
        refreshes are not scroll-guarded.
    render_hook
        Post-commit hook the view notifies after each render pass.
    clock
        Source of the wall-clock time stamped on history entries.
    """

    def __init__(
        self,
        client: AqClient,
        *,
        viewport: Viewport | None = None,
        render_hook: RenderCommitHook | None = None,
        clock: Callable[[], datetime] = _local_now,
    ) -> None:
        config = client.config
        self._client = client
        self._config = config
        self._clock = clock
        self._store = StateStore(history_capacity=config.history_capacity)
        self._render_hook = render_hook or RenderCommitHook(config.scroll_restore_passes)
        self._store.subscribe(lambda _snapshot: self._render_hook.notify_commit())
        self._scroll_guard = (
            ScrollPositionGuard(viewport, self._render_hook, request_render=self._store.publish)
            if viewport is not None
            else None
        )
        self._scheduler = PollingScheduler(self.poll_once, config.poll_interval)
        self._in_flight: set[FetchCategory] = set()
        self._started = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> SyncOrchestrator:
        await self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()

    async def start(self) -> None:
        """Load the registry, select the initial sector and start polling."""
        if self._started:
            return
        self._started = True
        await self.refresh_sectors()

        initial = self._config.initial_sector_id
        registry = self._store.registry
        if initial is not None and registry.loaded and not registry.has_seen(initial):
            fallback = registry.sectors[0].id if registry.sectors else None
            _logger.debug("Initial sector %s not in registry; using %s", initial, fallback)
            initial = fallback

        if initial is None:
            self._scheduler.start()
            return
        await self.select_sector(initial)

    async def stop(self) -> None:
        self._started = False
        await self._scheduler.stop()

    # ------------------------------------------------------------------
    # View-facing surface
    # ------------------------------------------------------------------

    @property
    def store(self) -> StateStore:
        return self._store

    @property
    def scheduler(self) -> PollingScheduler:
        return self._scheduler

    @property
    def render_hook(self) -> RenderCommitHook:
        return self._render_hook

    def snapshot(self) -> DashboardSnapshot:
        return self._store.snapshot()

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        return self._store.subscribe(listener)

    async def dispatch(self, intent: Intent) -> None:
        """Route an intent object to the matching operation."""
        if isinstance(intent, SelectSector):
            await self.select_sector(intent.sector_id)
        elif isinstance(intent, RequestSimulation):
            await self.request_simulation(intent.policy_name)
        elif isinstance(intent, RequestRefresh):
            await self.request_refresh()
        else:
            raise TypeError(f"Unsupported intent: {intent!r}")

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    async def select_sector(self, sector_id: int) -> None:
        """Select *sector_id* and refresh its status and policy in the foreground.

        The simulation result is discarded and the poll timer restarts
        so the next background tick is a full period away.
        """
        generation = self._store.select(sector_id)
        if self._started:
            self._scheduler.restart()
        await asyncio.gather(
            self._refresh_status(sector_id, generation, foreground=True),
            self._refresh_policy(sector_id, generation),
        )

    async def request_refresh(self) -> None:
        """Foreground reload of the selected sector's status."""
        sector_id = self._store.selection.sector_id
        if sector_id is None:
            return
        await self._refresh_status(sector_id, self._store.selection.generation, foreground=True)

    async def request_simulation(self, policy_name: str) -> SimulationResult | None:
        """Simulate *policy_name* for the current selection.

        Returns the committed result, or ``None`` when the request was
        ignored (another simulation still running), failed, or was
        superseded by a selection change.

        Raises
        ------
        AqSimulationError
            If no sector is selected or it has no policy recommendation.
        """
        selection = self._store.selection
        sector_id = selection.sector_id
        if sector_id is None:
            raise AqSimulationError("No sector selected")
        generation = selection.generation
        policy = self._store.policy_for(generation)
        if policy is None or not policy.has_policy:
            raise AqSimulationError(f"No policy recommendation for sector {sector_id}")
        if self._store.simulation.phase is SimulationPhase.RUNNING:
            _logger.debug("Simulation already running; ignoring request for %r", policy_name)
            return None

        async def _work() -> SimulationResult | None:
            token = self._store.begin_simulation(sector_id=sector_id, policy_name=policy_name, generation=generation)
            assert token is not None
            self._store.begin_loading()
            try:
                result = await self._client.simulate_policy(sector_id, policy_name)
            except AqError as exc:
                _logger.warning("Failed to simulate policy %r: %s", policy_name, exc)
                if not self._store.fail_simulation(token, SIMULATION_ERROR_MESSAGE):
                    _logger.debug("Dropping failure of superseded simulation for sector_id=%s", sector_id)
                return None
            finally:
                self._store.end_loading()

            if not should_commit(
                category=FetchCategory.SIMULATION,
                issued_generation=token.generation,
                current_generation=self._store.selection.generation,
            ) or not self._store.commit_simulation(token, result):
                _logger.debug("Dropping superseded simulation result for sector_id=%s", sector_id)
                return None
            return result

        return await self._guarded(_work)

    # ------------------------------------------------------------------
    # Refresh operations
    # ------------------------------------------------------------------

    async def refresh_sectors(self) -> None:
        """Replace the registry with a fresh sector list.

        On failure the previous list is kept and the error banner shows
        a connectivity message.
        """
        try:
            sectors = await self._client.get_sectors()
        except AqError as exc:
            _logger.warning("Failed to fetch sectors: %s", exc)
            self._store.report_error(FetchCategory.REGISTRY, REGISTRY_ERROR_MESSAGE)
            return
        self._store.replace_sectors(sectors)

    async def poll_once(self) -> None:
        """One background tick: registry, then status and policy of the selection."""

        async def _work() -> None:
            await self._background(FetchCategory.REGISTRY, self.refresh_sectors)
            sector_id = self._store.selection.sector_id
            if sector_id is None:
                return
            generation = self._store.selection.generation
            await self._background(
                FetchCategory.STATUS,
                lambda: self._refresh_status(sector_id, generation, foreground=False),
            )
            await self._background(
                FetchCategory.POLICY,
                lambda: self._refresh_policy(sector_id, generation),
            )

        await self._guarded(_work)

    async def _refresh_status(self, sector_id: int, generation: int, *, foreground: bool) -> None:
        if foreground:
            self._store.begin_loading()
        try:
            status = await self._client.get_sector_status(sector_id)
        except AqError as exc:
            if not self._is_current(FetchCategory.STATUS, generation):
                _logger.debug("Dropping status failure for superseded sector_id=%s", sector_id)
                return
            _logger.warning("Failed to fetch sector status for %s: %s", sector_id, exc)
            self._store.report_error(FetchCategory.STATUS, STATUS_ERROR_MESSAGE)
            return
        finally:
            if foreground:
                self._store.end_loading()

        if not self._is_current(FetchCategory.STATUS, generation):
            _logger.debug("Dropping status for superseded sector_id=%s", sector_id)
            return
        self._store.commit_status(status, resolved_at=self._clock())

    async def _refresh_policy(self, sector_id: int, generation: int) -> None:
        try:
            policy = await self._client.get_sector_policy(sector_id)
        except AqError as exc:
            if not self._is_current(FetchCategory.POLICY, generation):
                _logger.debug("Dropping policy failure for superseded sector_id=%s", sector_id)
                return
            _logger.warning("Failed to fetch policy for %s: %s", sector_id, exc)
            self._store.report_error(FetchCategory.POLICY, POLICY_ERROR_MESSAGE)
            return

        if not self._is_current(FetchCategory.POLICY, generation):
            _logger.debug("Dropping policy for superseded sector_id=%s", sector_id)
            return
        self._store.commit_policy(policy, generation=generation)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _is_current(self, category: FetchCategory, generation: int) -> bool:
        return should_commit(
            category=category,
            issued_generation=generation,
            current_generation=self._store.selection.generation,
        )

    async def _background(self, category: FetchCategory, fn: Callable[[], Awaitable[None]]) -> None:
        """Run a tick refresh unless the previous one for *category* is still outstanding."""
        if category in self._in_flight:
            _logger.debug("Skipping %s refresh; previous one still in flight", category)
            return
        self._in_flight.add(category)
        try:
            await fn()
        finally:
            self._in_flight.discard(category)

    async def _guarded(self, work: Callable[[], Awaitable[T]]) -> T:
        if self._scroll_guard is None:
            return await work()
        return await self._scroll_guard.guard(work)
