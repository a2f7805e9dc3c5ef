from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import pytest
from aiohttp import test_utils, web

from aqsync.client import AqClient
from aqsync.config import AqConfig
from aqsync.exceptions import AqError, AqPayloadError, AqTransportError
from aqsync.orchestrator import SyncOrchestrator

_SECTORS: list[dict[str, Any]] = [
    {
        "sector_id": 1,
        "sector_name": "South Delhi Commercial",
        "pm25": 268.4,
        "pm10": 410.2,
        "traffic_index": 0.75,
        "wind_speed": 1.2,
        "timestamp": "2026-10-19 12:00:00",
    },
    {
        "sector_id": 2,
        "sector_name": "Gurgaon Industrial Hub",
        "pm25": 96.0,
        "pm10": 150.3,
        "traffic_index": 0.45,
        "wind_speed": 3.4,
        "timestamp": "2026-10-19 12:00:00",
    },
]


def _build_app(seen_queries: list[dict[str, str]]) -> web.Application:
    async def sectors(_request: web.Request) -> web.Response:
        return web.json_response(_SECTORS)

    async def status(request: web.Request) -> web.Response:
        sector_id = int(request.match_info["sector_id"])
        if sector_id == 99:
            return web.json_response([{"error": "Sector not found"}, 404])
        sector = _SECTORS[sector_id - 1]
        return web.json_response(
            {
                "sector_id": sector_id,
                "sector_name": sector["sector_name"],
                "readings": {
                    "pm25": sector["pm25"],
                    "pm10": sector["pm10"],
                    "no2": 48.2,
                    "co": 1.35,
                    "traffic_index": sector["traffic_index"],
                    "wind_speed": sector["wind_speed"],
                },
                "severity": "hazardous",
                "pollution_cause": "Vehicular emissions with poor dispersion",
                "data_source": "waqi",
            }
        )

    async def policy(request: web.Request) -> web.Response:
        return web.json_response(
            {
                "sector_id": int(request.match_info["sector_id"]),
                "has_policy": True,
                "policy": {
                    "name": "Odd-Even Vehicle Restriction",
                    "reason": "PM2.5 above hazardous threshold",
                    "expected_pm25_reduction_percentage": 18.0,
                    "estimated_time_hours": 6,
                    "priority": "critical",
                },
            }
        )

    async def simulate(request: web.Request) -> web.Response:
        seen_queries.append(dict(request.query))
        return web.json_response(
            {
                "sector_id": int(request.query["sector_id"]),
                "policy_name": request.query["policy_name"],
                "current_pm25": 268.4,
                "simulated_pm25_after": 220.1,
                "pm25_range": {"best_case": 201.3, "expected": 220.1, "worst_case": 238.9},
                "reduction_percentage": 18.0,
                "reduction_range": {"min": 11.0, "expected": 18.0, "max": 25.0},
                "confidence": "high",
                "methodology": "Based on CPCB/DPCC/IIT Delhi studies",
                "explanation": "Effectiveness reduced due to poor atmospheric dispersion.",
                "met_adjustment_factor": 0.72,
            }
        )

    async def broken(_request: web.Request) -> web.Response:
        return web.Response(status=500, text="internal error")

    async def not_json(_request: web.Request) -> web.Response:
        return web.Response(status=200, text="<html>maintenance</html>")

    app = web.Application()
    app.router.add_get("/sectors", sectors)
    app.router.add_get("/sector/{sector_id}/status", status)
    app.router.add_get("/sector/{sector_id}/policy", policy)
    app.router.add_post("/simulate", simulate)
    app.router.add_get("/broken", broken)
    app.router.add_get("/maintenance", not_json)
    return app


@asynccontextmanager
async def _serve(seen_queries: list[dict[str, str]]) -> AsyncIterator[AqConfig]:
    async with test_utils.TestServer(_build_app(seen_queries)) as server:
        yield AqConfig(base_url=str(server.make_url("/")), poll_interval=3600.0)


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_client_reads_every_endpoint() -> None:
    seen: list[dict[str, str]] = []
    async with _serve(seen) as config, AqClient(config) as client:
        sectors = await client.get_sectors()
        assert [s.id for s in sectors] == [1, 2]

        status = await client.get_sector_status(1)
        assert status.readings.no2 == pytest.approx(48.2)

        policy = await client.get_sector_policy(1)
        assert policy.policy_name == "Odd-Even Vehicle Restriction"

        result = await client.simulate_policy(1, "Odd-Even Vehicle Restriction")
        assert result.pm25_range is not None
        assert result.pm25_range.best_case == pytest.approx(201.3)

    assert seen == [{"sector_id": "1", "policy_name": "Odd-Even Vehicle Restriction"}]


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_transport_errors() -> None:
    async with _serve([]) as config, AqClient(config) as client:
        transport = client._require_transport()  # noqa: SLF001

        with pytest.raises(AqTransportError) as exc_info:
            await transport.request_json("GET", "/broken")
        assert exc_info.value.status_code == 500
        assert exc_info.value.endpoint == "/broken"

        with pytest.raises(AqTransportError, match="Invalid JSON"):
            await transport.request_json("GET", "/maintenance")

        with pytest.raises(AqPayloadError, match="expected object"):
            await client.get_sector_status(99)


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_unreachable_backend_raises_transport_error() -> None:
    config = AqConfig(base_url="http://127.0.0.1:9", request_timeout=2.0)
    async with AqClient(config) as client:
        with pytest.raises(AqTransportError):
            await client.get_sectors()


@pytest.mark.asyncio
async def test_client_requires_context_manager() -> None:
    client = AqClient(AqConfig())
    with pytest.raises(AqError, match="not initialized"):
        await client.get_sectors()


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_orchestrator_against_http_backend() -> None:
    async with _serve([]) as config, AqClient(config) as client, SyncOrchestrator(client) as dashboard:
        await dashboard.poll_once()
        result = await dashboard.request_simulation("Odd-Even Vehicle Restriction")

        snapshot = dashboard.snapshot()
        assert snapshot.selected_sector is not None
        assert snapshot.selected_sector.name == "South Delhi Commercial"
        assert len(snapshot.history) == 2
        assert snapshot.simulation == result
        assert snapshot.error is None
