"""Policy simulation endpoint.

Endpoint:
  - POST /simulate?sector_id={id}&policy_name={name}
"""

from __future__ import annotations

from aqsync._api._common import parse_model
from aqsync._constants import SIMULATE_ENDPOINT
from aqsync._transport import Transport
from aqsync.models.simulation import SimulationResult


async def simulate_policy(transport: Transport, sector_id: int, policy_name: str) -> SimulationResult:
    """Request a one-shot projection of *policy_name* applied to *sector_id*.

    Both values travel as query parameters; the request has no body.
    """
    payload = await transport.request_json(
        "POST",
        SIMULATE_ENDPOINT,
        params={"sector_id": str(sector_id), "policy_name": policy_name},
    )
    return parse_model(SimulationResult, payload, endpoint=SIMULATE_ENDPOINT)
