"""Metrics history entry model."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from aqsync.models.status import SectorStatus


class MetricsHistoryEntry(BaseModel):
    """One reading appended to the trend history per resolved status fetch."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    time: str
    """Display label (local wall-clock time of resolution)."""
    pm25: float
    pm10: float
    no2: float
    co: float
    sector: str

    @classmethod
    def from_status(cls, status: SectorStatus, resolved_at: datetime) -> MetricsHistoryEntry:
        readings = status.readings
        return cls(
            time=resolved_at.strftime("%H:%M:%S"),
            pm25=readings.pm25,
            pm10=readings.pm10,
            no2=readings.no2,
            co=readings.co,
            sector=status.sector_name,
        )
