"""Sector status (detail) model."""

from __future__ import annotations

from aqsync.models._base import AqBaseModel, AqEnum


class Severity(AqEnum):
    """Pollution severity classification reported by the service."""

    MODERATE = "moderate"
    UNHEALTHY_FOR_SENSITIVE = "unhealthy_for_sensitive"
    UNHEALTHY = "unhealthy"
    VERY_UNHEALTHY = "very_unhealthy"
    HAZARDOUS = "hazardous"
    UNKNOWN = "unknown"


class Readings(AqBaseModel):
    """Pollutant and environmental measurements for one sector."""

    pm25: float = 0.0
    pm10: float = 0.0
    no2: float = 0.0
    co: float = 0.0
    traffic_index: float = 0.0
    wind_speed: float = 0.0


class SectorStatus(AqBaseModel):
    """Detail for the selected sector from ``GET /sector/{id}/status``."""

    sector_id: int
    sector_name: str = ""
    severity: Severity = Severity.UNKNOWN
    readings: Readings = Readings()
    pollution_cause: str = ""
    data_source: str | None = None
    last_update: str | None = None
    timestamp: str | None = None

    @property
    def is_safe(self) -> bool:
        """Whether the service classifies the sector as moderate."""
        return self.severity is Severity.MODERATE
