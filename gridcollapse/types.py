"""Foundational types for gridcollapse."""

from __future__ import annotations

from typing import NamedTuple


class Position(NamedTuple):
    """
    A cell position in the grid.

    x increases to the right, y increases downward, (0, 0) is the top-left
    cell. Row-major index is y * width + x.
    """

    x: int
    y: int

    def in_bounds(self, width: int, height: int) -> bool:
        """Check if position is within grid bounds (0 to width-1, 0 to height-1)."""
        return 0 <= self.x < width and 0 <= self.y < height

    def to_index(self, width: int) -> int:
        """Row-major index of this position in a grid of the given width."""
        return self.y * width + self.x

    @classmethod
    def from_index(cls, index: int, width: int) -> Position:
        """Position of a row-major index in a grid of the given width."""
        return cls(index % width, index // width)
