"""High-level async client for the air-quality service API."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from aqsync._api.sector import fetch_sector_policy, fetch_sector_status
from aqsync._api.sectors import fetch_sectors
from aqsync._api.simulate import simulate_policy
from aqsync._transport import HttpTransport, Transport
from aqsync.config import AqConfig
from aqsync.exceptions import AqError
from aqsync.models.policy import Policy
from aqsync.models.sector import Sector
from aqsync.models.simulation import SimulationResult
from aqsync.models.status import SectorStatus

_logger = logging.getLogger(__name__)


class AqClient:
    """Async client for the air-quality service.

    Usage::

        async with AqClient(config) as client:
            sectors = await client.get_sectors()

    Parameters
    ----------
    config
        Client configuration.
    session
        Externally owned ``aiohttp`` session. It is not closed on exit.
    transport
        Pre-built transport. When given, no HTTP session is created.
    """

    def __init__(
        self,
        config: AqConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._external_transport = transport is not None
        self._transport: Transport | None = transport

    @property
    def config(self) -> AqConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> AqClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise AqError("Client not initialized. Use 'async with AqClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Read endpoints
    # ------------------------------------------------------------------

    async def get_sectors(self) -> list[Sector]:
        """Fetch the full sector list with summary metrics."""
        return await fetch_sectors(self._require_transport())

    async def get_sector_status(self, sector_id: int) -> SectorStatus:
        """Fetch detailed readings for one sector."""
        return await fetch_sector_status(self._require_transport(), sector_id)

    async def get_sector_policy(self, sector_id: int) -> Policy:
        """Fetch the policy recommendation for one sector."""
        return await fetch_sector_policy(self._require_transport(), sector_id)

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    async def simulate_policy(self, sector_id: int, policy_name: str) -> SimulationResult:
        """Project the effect of *policy_name* on *sector_id*."""
        _logger.debug("Simulating policy=%r for sector_id=%s", policy_name, sector_id)
        return await simulate_policy(self._require_transport(), sector_id, policy_name)
