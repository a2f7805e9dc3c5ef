"""Tests for pydantic response models."""

from __future__ import annotations

from datetime import datetime

import pytest

from aqsync.models.history import MetricsHistoryEntry
from aqsync.models.policy import Policy, PolicyPriority
from aqsync.models.sector import Sector
from aqsync.models.simulation import Confidence, SimulationResult
from aqsync.models.status import SectorStatus, Severity

# ------------------------------------------------------------------
# Enums
# ------------------------------------------------------------------


class TestAqEnum:
    def test_unknown_value_falls_back(self) -> None:
        assert Severity("smoggy") == Severity.UNKNOWN

    def test_case_insensitive_match(self) -> None:
        assert PolicyPriority("HIGH") == PolicyPriority.HIGH

    def test_all_enums_have_unknown(self) -> None:
        for cls in (Severity, PolicyPriority, Confidence):
            assert cls.UNKNOWN == "unknown", f"{cls.__name__}.UNKNOWN != 'unknown'"


# ------------------------------------------------------------------
# Sector
# ------------------------------------------------------------------


class TestSector:
    def test_backend_field_names(self) -> None:
        sector = Sector.model_validate(
            {
                "sector_id": 2,
                "sector_name": "Gurgaon Industrial Hub",
                "pm25": 180.4,
                "pm10": 260.0,
                "traffic_index": 0.45,
                "wind_speed": 2.1,
                "timestamp": "2026-10-19T10:00:00",
            }
        )
        assert sector.id == 2
        assert sector.name == "Gurgaon Industrial Hub"
        assert sector.raw["sector_id"] == 2

    def test_short_field_names(self) -> None:
        sector = Sector.model_validate(
            {"id": 1, "name": "A", "pm25": 300, "pm10": 150, "traffic_index": 0.8, "wind_speed": 1.0}
        )
        assert sector.id == 1
        assert sector.pm25 == pytest.approx(300.0)
        assert sector.timestamp is None


# ------------------------------------------------------------------
# SectorStatus
# ------------------------------------------------------------------


class TestSectorStatus:
    SAMPLE_PAYLOAD: dict = {
        "sector_id": 1,
        "sector_name": "South Delhi Commercial",
        "readings": {
            "pm25": 212.3,
            "pm10": 301.0,
            "no2": None,
            "co": 1.25,
            "traffic_index": 0.75,
            "wind_speed": 1.4,
        },
        "severity": "very_unhealthy",
        "pollution_cause": "Vehicular emissions",
        "data_source": "waqi",
    }

    def test_parses_nested_readings(self) -> None:
        status = SectorStatus.model_validate(self.SAMPLE_PAYLOAD)
        assert status.severity == Severity.VERY_UNHEALTHY
        assert status.readings.pm25 == pytest.approx(212.3)
        assert status.readings.co == pytest.approx(1.25)
        assert status.is_safe is False

    def test_null_no2_defaults_to_zero(self) -> None:
        status = SectorStatus.model_validate(self.SAMPLE_PAYLOAD)
        assert status.readings.no2 == 0.0

    def test_unknown_severity(self) -> None:
        status = SectorStatus.model_validate({**self.SAMPLE_PAYLOAD, "severity": "apocalyptic"})
        assert status.severity == Severity.UNKNOWN

    def test_models_are_frozen(self) -> None:
        status = SectorStatus.model_validate(self.SAMPLE_PAYLOAD)
        with pytest.raises(ValueError):
            status.sector_name = "other"  # type: ignore[misc]


# ------------------------------------------------------------------
# Policy
# ------------------------------------------------------------------


class TestPolicy:
    def test_with_recommendation(self) -> None:
        policy = Policy.model_validate(
            {
                "sector_id": 1,
                "has_policy": True,
                "policy": {
                    "name": "Odd-Even Vehicle Restriction",
                    "reason": "PM2.5 above 250",
                    "expected_pm25_reduction_percentage": 18.0,
                    "estimated_time_hours": 6,
                    "priority": "critical",
                },
            }
        )
        assert policy.policy is not None
        assert policy.policy.priority == PolicyPriority.CRITICAL
        assert policy.policy_name == "Odd-Even Vehicle Restriction"

    def test_without_recommendation(self) -> None:
        policy = Policy.model_validate(
            {"has_policy": False, "message": "Pollution levels acceptable. Continue monitoring."}
        )
        assert policy.policy is None
        assert policy.policy_name is None
        assert policy.message is not None


# ------------------------------------------------------------------
# SimulationResult
# ------------------------------------------------------------------


class TestSimulationResult:
    def test_full_payload(self) -> None:
        result = SimulationResult.model_validate(
            {
                "policy_name": "Construction Dust Control",
                "current_pm25": 220.0,
                "simulated_pm25_after": 180.4,
                "reduction_percentage": 18.0,
                "reduction_range": {"min": 10.2, "expected": 18.0, "max": 25.5},
                "pm25_range": {"best_case": 163.9, "expected": 180.4, "worst_case": 197.6},
                "confidence": "medium",
                "met_adjustment_factor": 0.72,
                "explanation": "Based on peer-reviewed studies.",
                "methodology": "Based on CPCB/DPCC/IIT Delhi studies",
            }
        )
        assert result.confidence == Confidence.MEDIUM
        assert result.reduction_range is not None
        assert result.reduction_range.max == pytest.approx(25.5)
        assert result.pm25_range is not None
        assert result.pm25_range.worst_case == pytest.approx(197.6)

    def test_minimal_payload(self) -> None:
        result = SimulationResult.model_validate(
            {
                "policy_name": "Truck Entry Ban",
                "current_pm25": 120.0,
                "simulated_pm25_after": 110.0,
                "reduction_percentage": 8.3,
                "explanation": "",
                "confidence": None,
            }
        )
        assert result.confidence is None
        assert result.reduction_range is None
        assert result.met_adjustment_factor is None


# ------------------------------------------------------------------
# MetricsHistoryEntry
# ------------------------------------------------------------------


def test_history_entry_from_status() -> None:
    status = SectorStatus.model_validate(
        {
            "sector_id": 3,
            "sector_name": "Noida Residential Sector",
            "readings": {"pm25": 90.0, "pm10": 140.0, "no2": 31.0, "co": 0.8},
        }
    )
    entry = MetricsHistoryEntry.from_status(status, datetime(2026, 10, 19, 14, 5, 9))
    assert entry.time == "14:05:09"
    assert entry.pm25 == 90.0
    assert entry.no2 == 31.0
    assert entry.sector == "Noida Residential Sector"
