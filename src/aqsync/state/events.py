"""Fetch categories and inbound user intents.

Presentation collaborators emit intents; only the orchestrator turns
them into state mutations.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class FetchCategory(StrEnum):
    REGISTRY = "registry"
    STATUS = "status"
    POLICY = "policy"
    SIMULATION = "simulation"


class SelectSector(BaseModel):
    """User picked a sector from the list or the map."""

    model_config = ConfigDict(frozen=True)

    sector_id: int


class RequestSimulation(BaseModel):
    """User asked to simulate the recommended policy."""

    model_config = ConfigDict(frozen=True)

    policy_name: str = Field(..., min_length=1)


class RequestRefresh(BaseModel):
    """User asked to reload the selected sector's status."""

    model_config = ConfigDict(frozen=True)


Intent = SelectSector | RequestSimulation | RequestRefresh
