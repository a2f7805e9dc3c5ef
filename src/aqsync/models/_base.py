"""Base model and enum for air-quality service responses.

Every response model inherits from :class:`AqBaseModel` which
provides:

* frozen, ``extra="ignore"`` models so new backend fields never break
  parsing.
* A ``model_validator(mode="before")`` that drops ``null`` values so the
  field default is used instead.
* A ``raw`` dict that captures the original payload.

Categorical fields use :class:`AqEnum`, a string enum with an
``UNKNOWN`` member and a ``_missing_`` hook that matches values
case-insensitively and returns ``UNKNOWN`` for anything unmapped.
"""

from __future__ import annotations

import enum
import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class AqEnum(enum.StrEnum):
    """Base for categorical response values.

    Every subclass **must** define ``UNKNOWN = "unknown"``.
    """

    @classmethod
    def _missing_(cls, value: object) -> AqEnum:
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        # pylint: disable=no-member
        unknown: AqEnum = cls.UNKNOWN  # type: ignore[attr-defined]
        return unknown


class AqBaseModel(BaseModel):
    """Base for air-quality service response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict, exclude=True)
    """Original API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, values: Any) -> Any:
        """Drop ``null``/NaN values and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, float) and math.isnan(value):
                continue
            cleaned[key] = value
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned
