"""Shared helpers for air-quality service endpoint modules.

It is internal to aqsync and may change at any time.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from aqsync.exceptions import AqPayloadError

M = TypeVar("M", bound=BaseModel)


def parse_model(model_cls: type[M], payload: Any, *, endpoint: str) -> M:
    """Validate *payload* into *model_cls*, raising :class:`AqPayloadError` on mismatch."""
    if not isinstance(payload, dict):
        raise AqPayloadError(
            f"{endpoint} returned {type(payload).__name__}, expected object",
            endpoint=endpoint,
        )
    if "error" in payload and len(payload) == 1:
        raise AqPayloadError(f"{endpoint} failed: {payload['error']}", endpoint=endpoint)
    try:
        return model_cls.model_validate(payload)
    except ValidationError as exc:
        raise AqPayloadError(f"Unexpected payload from {endpoint}: {exc}", endpoint=endpoint) from exc


def parse_model_list(model_cls: type[M], payload: Any, *, endpoint: str) -> list[M]:
    """Validate a JSON array of objects into a list of *model_cls*."""
    if not isinstance(payload, list):
        raise AqPayloadError(
            f"{endpoint} returned {type(payload).__name__}, expected array",
            endpoint=endpoint,
        )
    return [parse_model(model_cls, item, endpoint=endpoint) for item in payload]
