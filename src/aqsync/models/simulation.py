"""Policy simulation result model."""

from __future__ import annotations

from aqsync.models._base import AqBaseModel, AqEnum


class Confidence(AqEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    UNKNOWN = "unknown"


class ReductionRange(AqBaseModel):
    min: float
    max: float
    expected: float | None = None


class Pm25Range(AqBaseModel):
    best_case: float
    expected: float
    worst_case: float


class SimulationResult(AqBaseModel):
    """Projected outcome of applying a policy, from ``POST /simulate``."""

    policy_name: str
    current_pm25: float
    simulated_pm25_after: float
    reduction_percentage: float
    explanation: str = ""
    reduction_range: ReductionRange | None = None
    pm25_range: Pm25Range | None = None
    confidence: Confidence | None = None
    met_adjustment_factor: float | None = None
    methodology: str | None = None
    sector_id: int | None = None
    sector_name: str | None = None
    wind_speed: float | None = None
    timestamp: str | None = None
