"""Custom exception hierarchy for aqsync."""

from __future__ import annotations


class AqError(Exception):
    """Base exception for all aqsync errors."""


class AqConfigError(AqError):
    """Invalid or missing configuration."""


class AqTransportError(AqError):
    """HTTP-level failure (network, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class AqPayloadError(AqError):
    """Response body did not match the expected shape."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class AqSelectionError(AqError, ValueError):
    """Selected sector id was never present in the sector registry."""

    def __init__(self, sector_id: int) -> None:
        self.sector_id = sector_id
        super().__init__(f"Unknown sector id {sector_id}")


class AqSimulationError(AqError):
    """A simulation cannot be started for the current selection.

    Raised when no sector is selected or when the current selection has
    no policy recommendation to simulate.
    """
