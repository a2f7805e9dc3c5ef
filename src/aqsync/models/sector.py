"""Sector summary model."""

from __future__ import annotations

from pydantic import AliasChoices, Field

from aqsync.models._base import AqBaseModel


class Sector(AqBaseModel):
    """A monitored area as listed by ``GET /sectors``.

    The backend emits ``sector_id``/``sector_name``; ``id``/``name`` are
    accepted as well.
    """

    id: int = Field(validation_alias=AliasChoices("id", "sector_id"))
    name: str = Field(default="", validation_alias=AliasChoices("name", "sector_name"))
    pm25: float = 0.0
    pm10: float = 0.0
    traffic_index: float = 0.0
    wind_speed: float = 0.0
    timestamp: str | None = None
