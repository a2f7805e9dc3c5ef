"""Identity of the sector under inspection."""

from __future__ import annotations


class SelectionController:
    """Tracks the selected sector id and a monotonically increasing generation.

    Every selection change bumps the generation. In-flight requests are
    tagged with the generation at issue time so late responses for a
    superseded selection can be recognised and dropped.
    """

    def __init__(self) -> None:
        self._sector_id: int | None = None
        self._generation = 0

    @property
    def sector_id(self) -> int | None:
        return self._sector_id

    @property
    def generation(self) -> int:
        return self._generation

    def select(self, sector_id: int) -> int:
        """Make *sector_id* the active selection and return the new generation."""
        self._sector_id = sector_id
        self._generation += 1
        return self._generation
