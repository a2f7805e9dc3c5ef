"""Policy recommendation model."""

from __future__ import annotations

from aqsync.models._base import AqBaseModel, AqEnum


class PolicyPriority(AqEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"
    UNKNOWN = "unknown"


class PolicyDetail(AqBaseModel):
    """A recommended intervention with expected impact."""

    name: str
    priority: PolicyPriority = PolicyPriority.UNKNOWN
    reason: str = ""
    expected_pm25_reduction_percentage: float = 0.0
    estimated_time_hours: float = 0.0


class Policy(AqBaseModel):
    """Recommendation for a sector from ``GET /sector/{id}/policy``.

    When ``has_policy`` is false the service sends a ``message`` instead
    of a ``policy`` body.
    """

    has_policy: bool = False
    policy: PolicyDetail | None = None
    message: str | None = None
    sector_id: int | None = None
    sector_name: str | None = None
    timestamp: str | None = None

    @property
    def policy_name(self) -> str | None:
        """Name of the recommended policy, if one can be simulated."""
        if self.has_policy and self.policy is not None:
            return self.policy.name
        return None
