"""Data models for air-quality service responses."""

from aqsync.models._base import AqBaseModel, AqEnum
from aqsync.models.history import MetricsHistoryEntry
from aqsync.models.policy import Policy, PolicyDetail, PolicyPriority
from aqsync.models.sector import Sector
from aqsync.models.simulation import Confidence, Pm25Range, ReductionRange, SimulationResult
from aqsync.models.status import Readings, SectorStatus, Severity

__all__ = [
    "AqBaseModel",
    "AqEnum",
    "Confidence",
    "MetricsHistoryEntry",
    "Pm25Range",
    "Policy",
    "PolicyDetail",
    "PolicyPriority",
    "Readings",
    "ReductionRange",
    "Sector",
    "SectorStatus",
    "Severity",
    "SimulationResult",
]
