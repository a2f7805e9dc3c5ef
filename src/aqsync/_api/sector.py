"""Per-sector detail endpoints.

Endpoints:
  - GET /sector/{id}/status
  - GET /sector/{id}/policy
"""

from __future__ import annotations

from aqsync._api._common import parse_model
from aqsync._constants import SECTOR_POLICY_ENDPOINT, SECTOR_STATUS_ENDPOINT
from aqsync._transport import Transport
from aqsync.models.policy import Policy
from aqsync.models.status import SectorStatus


async def fetch_sector_status(transport: Transport, sector_id: int) -> SectorStatus:
    endpoint = SECTOR_STATUS_ENDPOINT.format(sector_id=sector_id)
    payload = await transport.request_json("GET", endpoint)
    return parse_model(SectorStatus, payload, endpoint=endpoint)


async def fetch_sector_policy(transport: Transport, sector_id: int) -> Policy:
    endpoint = SECTOR_POLICY_ENDPOINT.format(sector_id=sector_id)
    payload = await transport.request_json("GET", endpoint)
    return parse_model(Policy, payload, endpoint=endpoint)
