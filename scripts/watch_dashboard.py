#!/usr/bin/env python3
"""Run the dashboard state orchestrator headless and print every change.

Handy for checking a backend without the web UI: the script loads the
sector list, selects a sector, polls on the configured period and prints
a line for each published snapshot that differs from the previous one.

Usage
-----
Point it at a running backend and run::

    export AQSYNC_API_URL="http://localhost:8000"
    python scripts/watch_dashboard.py

Options::

    --sector N          Select sector N on start (default: AQSYNC_INITIAL_SECTOR or 1)
    --interval SECONDS  Poll period override
    --simulate          Simulate the recommended policy once it arrives
    --ticks N           Stop after N poll periods (default: run until Ctrl-C)
    --json              Print snapshots as JSON lines
"""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
from typing import Any

from aqsync import AqClient, AqConfig, SyncOrchestrator
from aqsync.derive import severity_label, severity_tier, trend_direction
from aqsync.exceptions import AqError
from aqsync.state.store import DashboardSnapshot


def _summary(snapshot: DashboardSnapshot) -> str:
    parts: list[str] = [f"v{snapshot.version}"]
    sector = snapshot.selected_sector
    parts.append(f"sector={sector.name if sector else snapshot.selected_sector_id}")
    if snapshot.status is not None:
        pm25 = snapshot.status.readings.pm25
        parts.append(f"pm25={pm25:.1f} ({severity_label(snapshot.status.severity)}, {severity_tier(pm25)})")
    trend = trend_direction(snapshot.history)
    if trend is not None:
        parts.append(f"trend={trend}")
    parts.append(f"history={len(snapshot.history)}")
    if snapshot.policy is not None and snapshot.policy.policy_name:
        parts.append(f"policy={snapshot.policy.policy_name!r}")
    if snapshot.simulation is not None:
        parts.append(f"simulated_pm25={snapshot.simulation.simulated_pm25_after:.1f}")
    parts.append(f"simulation={snapshot.simulation_phase}")
    if snapshot.loading:
        parts.append("loading")
    if snapshot.error:
        parts.append(f"error={snapshot.error!r}")
    return "  ".join(parts)


class _Printer:
    """Snapshot listener that prints only when the visible state changed."""

    def __init__(self, *, json_mode: bool) -> None:
        self._json_mode = json_mode
        self._last: dict[str, Any] | None = None

    def __call__(self, snapshot: DashboardSnapshot) -> None:
        current = snapshot.model_dump(mode="json", exclude={"version"})
        if current == self._last:
            return
        self._last = current
        if self._json_mode:
            print(snapshot.model_dump_json())
        else:
            print(_summary(snapshot))


async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Watch the air-quality dashboard state against a live backend.",
    )
    parser.add_argument("--sector", type=int, help="Sector id to select on start")
    parser.add_argument("--interval", type=float, help="Poll period in seconds")
    parser.add_argument("--simulate", action="store_true", help="Simulate the recommended policy")
    parser.add_argument("--ticks", type=int, help="Stop after this many poll periods")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output JSON lines")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, Any] = {}
    if args.sector is not None:
        overrides["initial_sector_id"] = args.sector
    if args.interval is not None:
        overrides["poll_interval"] = args.interval
    config = AqConfig.from_env(**overrides)
    print(f"backend   : {config.base_url}")
    print(f"interval  : {config.poll_interval}s")

    printer = _Printer(json_mode=args.json_mode)
    async with AqClient(config) as client:
        dashboard = SyncOrchestrator(client)
        dashboard.subscribe(printer)
        async with dashboard:
            if args.simulate:
                policy = dashboard.snapshot().policy
                if policy is None or not policy.policy_name:
                    print("No policy recommendation to simulate")
                else:
                    try:
                        await dashboard.request_simulation(policy.policy_name)
                    except AqError as exc:
                        print(f"Simulation not started: {exc}")

            if args.ticks is not None:
                await asyncio.sleep(args.ticks * config.poll_interval)
            else:
                await asyncio.Event().wait()


if __name__ == "__main__":
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(main())
