"""Cache of the latest full sector list."""

from __future__ import annotations

from collections.abc import Iterable

from aqsync.models.sector import Sector


class SectorRegistryCache:
    """Latest sector list, replaced wholesale on every successful fetch."""

    def __init__(self) -> None:
        self._sectors: tuple[Sector, ...] = ()
        self._loaded = False
        self._seen_ids: set[int] = set()

    @property
    def sectors(self) -> tuple[Sector, ...]:
        return self._sectors

    @property
    def loaded(self) -> bool:
        """Whether at least one registry fetch has succeeded."""
        return self._loaded

    def replace(self, sectors: Iterable[Sector]) -> None:
        self._sectors = tuple(sectors)
        self._loaded = True
        self._seen_ids.update(sector.id for sector in self._sectors)

    def get(self, sector_id: int) -> Sector | None:
        for sector in self._sectors:
            if sector.id == sector_id:
                return sector
        return None

    def has_seen(self, sector_id: int) -> bool:
        """Whether *sector_id* is, or was at some point, in the registry."""
        return sector_id in self._seen_ids
