"""Sector registry endpoint.

Endpoint:
  - GET /sectors
"""

from __future__ import annotations

from aqsync._api._common import parse_model_list
from aqsync._constants import SECTORS_ENDPOINT
from aqsync._transport import Transport
from aqsync.models.sector import Sector


async def fetch_sectors(transport: Transport) -> list[Sector]:
    """Fetch the full list of monitored sectors."""
    payload = await transport.request_json("GET", SECTORS_ENDPOINT)
    return parse_model_list(Sector, payload, endpoint=SECTORS_ENDPOINT)
