"""Scrollable window over the ranked process list."""

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

HEADER_ROW = ("PID", "Name", "CPU%", "Memory%")


class Viewport:
    """
    Scroll offset and window size for the process table.

    The offset always stays within ``[0, max(0, total - visible_rows)]`` for
    the list length it was last moved or clamped against.
    """

    def __init__(self, visible_rows: int, offset: int = 0) -> None:
        if visible_rows < 1:
            raise ValueError("visible_rows must be at least 1")
        self._visible_rows = visible_rows
        self._offset = max(0, offset)

    @property
    def visible_rows(self) -> int:
        """Number of data rows shown at once."""
        return self._visible_rows

    @property
    def offset(self) -> int:
        """Index of the first visible data row."""
        return self._offset

    def max_offset(self, total: int) -> int:
        """Largest offset that still shows a full page of ``total`` rows."""
        return max(0, total - self._visible_rows)

    def scroll_up(self) -> bool:
        """Move one row up. Returns False when already at the top."""
        new_offset = max(0, self._offset - 1)
        moved = new_offset != self._offset
        self._offset = new_offset
        return moved

    def scroll_down(self, total: int) -> bool:
        """Move one row down. Returns False when already at the bottom."""
        new_offset = min(self._offset + 1, self.max_offset(total))
        moved = new_offset != self._offset
        self._offset = new_offset
        return moved

    def clamp(self, total: int) -> None:
        """Pull the offset back into range after the list was replaced."""
        self._offset = min(max(0, self._offset), self.max_offset(total))


def visible_slice(
    rows: Sequence[T],
    offset: int,
    visible_rows: int,
    header: T = HEADER_ROW,
) -> list[T]:
    """Return the header followed by ``rows[offset:offset + visible_rows]``."""
    start = max(0, offset)
    return [header, *rows[start : start + visible_rows]]
