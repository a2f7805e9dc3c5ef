"""Client configuration for aqsync."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from aqsync._constants import (
    BASE_URL,
    DEFAULT_HISTORY_CAPACITY,
    DEFAULT_INITIAL_SECTOR_ID,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SCROLL_RESTORE_PASSES,
)
from aqsync.exceptions import AqConfigError


def _env_number(env_key: str, value: str, cast: type) -> Any:
    try:
        return cast(value.strip())
    except ValueError as exc:
        raise AqConfigError(f"{env_key} must be a {cast.__name__}, got {value!r}") from exc


def _env_optional_int(env_key: str, value: str) -> int | None:
    normalized = value.strip().lower()
    if normalized in {"", "none", "null"}:
        return None
    return int(_env_number(env_key, normalized, int))


@dataclasses.dataclass(frozen=True)
class AqConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Air-quality service base URL. A trailing ``/`` is stripped.
    poll_interval : float
        Seconds between background refresh ticks.
    history_capacity : int
        Maximum number of entries kept in the metrics history buffer.
    request_timeout : float
        Total timeout in seconds for a single HTTP request.
    initial_sector_id : int or None
        Sector selected when the orchestrator starts. ``None`` starts
        with no selection.
    scroll_restore_passes : int
        Render-completion notifications to wait before the scroll offset
        is reapplied after a refresh.
    """

    base_url: str = BASE_URL
    poll_interval: float = DEFAULT_POLL_INTERVAL
    history_capacity: int = DEFAULT_HISTORY_CAPACITY
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    initial_sector_id: int | None = DEFAULT_INITIAL_SECTOR_ID
    scroll_restore_passes: int = DEFAULT_SCROLL_RESTORE_PASSES

    def __post_init__(self) -> None:
        if not self.base_url:
            raise AqConfigError("base_url must be non-empty")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        if self.poll_interval <= 0:
            raise AqConfigError(f"poll_interval must be positive, got {self.poll_interval}")
        if self.history_capacity < 1:
            raise AqConfigError(f"history_capacity must be at least 1, got {self.history_capacity}")
        if self.request_timeout <= 0:
            raise AqConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        if self.scroll_restore_passes < 1:
            raise AqConfigError(f"scroll_restore_passes must be at least 1, got {self.scroll_restore_passes}")

    @classmethod
    def from_env(cls, **overrides: Any) -> AqConfig:
        """Create configuration from environment variables.

        Reads ``AQSYNC_API_URL`` (falling back to the dashboard's
        ``REACT_APP_API_URL``) and the optional ``AQSYNC_*`` tuning
        variables. Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        AqConfig
            Populated configuration.

        Raises
        ------
        AqConfigError
            If an environment value cannot be parsed.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        base_url = env.get("AQSYNC_API_URL") or env.get("REACT_APP_API_URL")
        if base_url:
            config_kwargs["base_url"] = base_url

        _ENV_NUMERIC_MAP: dict[str, tuple[str, type]] = {
            "AQSYNC_POLL_INTERVAL": ("poll_interval", float),
            "AQSYNC_HISTORY_CAPACITY": ("history_capacity", int),
            "AQSYNC_REQUEST_TIMEOUT": ("request_timeout", float),
        }
        for env_key, (field_name, cast) in _ENV_NUMERIC_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_number(env_key, val, cast)

        sector_env = env.get("AQSYNC_INITIAL_SECTOR")
        if sector_env is not None and "initial_sector_id" not in overrides:
            config_kwargs["initial_sector_id"] = _env_optional_int("AQSYNC_INITIAL_SECTOR", sector_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
