"""Derived presentation values.

Pure functions over the state produced by the orchestrator. List, map,
chart and card collaborators use these to pick colours, labels and bar
widths without re-deriving thresholds themselves.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

from aqsync._constants import (
    DANGER_THRESHOLD,
    POOR_DISPERSION_FACTOR,
    SENSITIVE_THRESHOLD,
    VERY_UNHEALTHY_THRESHOLD,
    WARN_THRESHOLD,
)
from aqsync.models.history import MetricsHistoryEntry
from aqsync.models.status import Severity

SeverityTier = Literal["danger", "warn", "safe"]
TrendDirection = Literal["up", "down"]
WeatherImpact = Literal["reduced", "good"]
TrendField = Literal["pm25", "pm10", "no2", "co"]

_SEVERITY_LABELS: dict[Severity, str] = {
    Severity.MODERATE: "Moderate",
    Severity.UNHEALTHY_FOR_SENSITIVE: "Unhealthy for Sensitive Groups",
    Severity.UNHEALTHY: "Unhealthy",
    Severity.VERY_UNHEALTHY: "Very Unhealthy",
    Severity.HAZARDOUS: "Hazardous",
}


def severity_tier(pm25: float) -> SeverityTier:
    """Three-tier classification of a PM2.5 concentration.

    >>> severity_tier(260), severity_tier(200), severity_tier(100)
    ('danger', 'warn', 'safe')
    """
    if pm25 > DANGER_THRESHOLD:
        return "danger"
    if pm25 > WARN_THRESHOLD:
        return "warn"
    return "safe"


def pm10_tier(pm10: float) -> SeverityTier:
    """PM10 is judged against the PM2.5 thresholds on half its value."""
    return severity_tier(pm10 / 2)


def severity_level(pm25: float) -> Severity:
    """Five-level classification used to colour-code sector rows and markers."""
    if pm25 > DANGER_THRESHOLD:
        return Severity.HAZARDOUS
    if pm25 > VERY_UNHEALTHY_THRESHOLD:
        return Severity.VERY_UNHEALTHY
    if pm25 > WARN_THRESHOLD:
        return Severity.UNHEALTHY
    if pm25 > SENSITIVE_THRESHOLD:
        return Severity.UNHEALTHY_FOR_SENSITIVE
    return Severity.MODERATE


def severity_label(severity: Severity | str) -> str:
    """Human-readable label; unmapped values are echoed back."""
    parsed = Severity(severity)
    label = _SEVERITY_LABELS.get(parsed)
    if label is None:
        return str(severity)
    return label


def reduction_magnitude(reduction_percentage: float) -> float:
    """Bar width (percent) for a reduction, clamped to ``[0, 100]``."""
    return max(0.0, min(reduction_percentage, 100.0))


def weather_impact(met_adjustment_factor: float | None) -> WeatherImpact | None:
    """Whether weather is limiting a simulated policy's effectiveness."""
    if met_adjustment_factor is None:
        return None
    if met_adjustment_factor < POOR_DISPERSION_FACTOR:
        return "reduced"
    return "good"


def traffic_percent(traffic_index: float) -> int:
    """Traffic index (0..1) as a whole percentage."""
    return round(traffic_index * 100)


def trend_direction(history: Sequence[MetricsHistoryEntry], field: TrendField = "pm25") -> TrendDirection | None:
    """Direction of the latest change in *field*.

    A single entry counts as ``"up"``; an empty history has no trend.
    """
    if not history:
        return None
    latest = getattr(history[-1], field)
    if len(history) < 2:
        return "up"
    previous = getattr(history[-2], field)
    return "up" if latest >= previous else "down"
