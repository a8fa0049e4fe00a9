"""
Windowed views over the WFC grid.

Rule sets never see the grid directly. They get a View positioned at the
cell being evaluated, and build Spans from it: whole rows and columns,
1-D slices, arbitrary rectangles, or the fixed block that tiles the grid.

A Span copies no tiles. It keeps a reference to the engine's flat tile
list plus a (start, stop) index pair per row, and reads through them
lazily. Views and Spans are only valid for the call they were handed to:
the engine replaces tiles between phases of a step, and a Span held across
that would read the new tiles.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator, Sequence

from ..errors import OutOfBoundsError
from ..types import Position
from .tile import Tile

if TYPE_CHECKING:
    from .solver import Wfc


def _check_range(span: range, limit: int, axis: str) -> None:
    """Reject ranges that are empty, strided, or leave [0, limit)."""
    if not isinstance(span, range):
        raise OutOfBoundsError(f"{axis}-range must be a range, got {type(span).__name__}")
    if span.step != 1:
        raise OutOfBoundsError(f"{axis}-range must have step 1, got {span!r}")
    if len(span) == 0:
        raise OutOfBoundsError(f"{axis}-range cannot be empty, got {span!r}")
    if span.start < 0 or span.stop > limit:
        raise OutOfBoundsError(f"{axis}-range {span!r} must lie inside 0..{limit}")


class Span:
    """
    A read-only rectangular window of tiles.

    Each entry of `bounds` is one row of the window, given as a
    (start, stop) pair of indices into the flat tile list. All rows have
    the same width.
    """

    __slots__ = ("_tiles", "_bounds")

    def __init__(self, tiles: Sequence[Tile], bounds: Sequence[tuple[int, int]]):
        self._tiles = tiles
        self._bounds = tuple(bounds)

    @property
    def width(self) -> int:
        """Length of each row in this span."""
        if not self._bounds:
            return 0
        start, stop = self._bounds[0]
        return stop - start

    @property
    def height(self) -> int:
        """Number of rows in this span."""
        return len(self._bounds)

    def __len__(self) -> int:
        return self.width * self.height

    def __iter__(self) -> Iterator[Tile]:
        return self.row_iter()

    def row_iter(self) -> Iterator[Tile]:
        """Yield tiles row by row, left to right."""
        tiles = self._tiles
        for start, stop in self._bounds:
            for idx in range(start, stop):
                yield tiles[idx]

    def col_iter(self) -> Iterator[Tile]:
        """Yield tiles column by column, top to bottom."""
        tiles = self._tiles
        for offset in range(self.width):
            for start, _ in self._bounds:
                yield tiles[start + offset]

    def definite_values(self) -> Iterator[Any]:
        """Yield the values of the Definite tiles, row-major."""
        for tile in self.row_iter():
            if tile.is_definite:
                yield tile.as_definite()

    def __repr__(self) -> str:
        return f"Span({self.width}x{self.height}, {list(self.row_iter())!r})"


class View:
    """
    A cursor into the grid at one position.

    Usage inside a rule set:
        def get_states(self, view):
            taken = set(view.row().definite_values())
            taken |= set(view.col().definite_values())
            ...
    """

    __slots__ = ("_wfc", "_pos")

    def __init__(self, wfc: Wfc, pos: Position):
        self._wfc = wfc
        self._pos = Position(*pos)

    @property
    def width(self) -> int:
        return self._wfc.width

    @property
    def height(self) -> int:
        return self._wfc.height

    @property
    def pos(self) -> Position:
        """The (x, y) position this view is centered on."""
        return self._pos

    @property
    def x(self) -> int:
        return self._pos[0]

    @property
    def y(self) -> int:
        return self._pos[1]

    @property
    def _tiles(self) -> Sequence[Tile]:
        return self._wfc._tiles

    def get(self) -> Tile:
        """The tile at this view's own position."""
        return self.get_at(*self._pos)

    def get_at(self, x: int, y: int) -> Tile:
        """The tile at (x, y)."""
        pos = Position(x, y)
        if not pos.in_bounds(self.width, self.height):
            raise OutOfBoundsError(f"Position ({x}, {y}) is outside the grid", pos)
        return self._tiles[pos.to_index(self.width)]

    def row(self, row: int | None = None) -> Span:
        """
        The full row at `row` (default: this view's row).

        Raises:
            OutOfBoundsError: If row is not in 0..height
        """
        if row is None:
            row = self.y
        if not 0 <= row < self.height:
            raise OutOfBoundsError(f"Row {row} must be inside the grid's height {self.height}")
        start = row * self.width
        return Span(self._tiles, [(start, start + self.width)])

    def col(self, col: int | None = None) -> Span:
        """
        The full column at `col` (default: this view's column).

        Raises:
            OutOfBoundsError: If col is not in 0..width
        """
        if col is None:
            col = self.x
        if not 0 <= col < self.width:
            raise OutOfBoundsError(f"Column {col} must be inside the grid's width {self.width}")
        width = self.width
        return Span(
            self._tiles,
            [(y * width + col, y * width + col + 1) for y in range(self.height)],
        )

    def span(self, x: range, y: range) -> Span:
        """
        The rectangle covering columns `x` and rows `y`.

        Raises:
            OutOfBoundsError: If either range is empty or leaves the grid
        """
        _check_range(x, self.width, "x")
        _check_range(y, self.height, "y")
        width = self.width
        return Span(
            self._tiles,
            [(row * width + x.start, row * width + x.stop) for row in y],
        )

    def row_span(self, row: int, x: range) -> Span:
        """The columns `x` of row `row`."""
        if not 0 <= row < self.height:
            raise OutOfBoundsError(f"Row {row} must be inside the grid's height {self.height}")
        _check_range(x, self.width, "x")
        start = row * self.width
        return Span(self._tiles, [(start + x.start, start + x.stop)])

    def col_span(self, col: int, y: range) -> Span:
        """The rows `y` of column `col`."""
        if not 0 <= col < self.width:
            raise OutOfBoundsError(f"Column {col} must be inside the grid's width {self.width}")
        _check_range(y, self.height, "y")
        width = self.width
        return Span(
            self._tiles,
            [(row * width + col, row * width + col + 1) for row in y],
        )

    def section_at(
        self,
        block_width: int,
        block_height: int,
        x: int | None = None,
        y: int | None = None,
    ) -> Span:
        """
        The block of a block_width x block_height tiling that contains (x, y).

        This is the tiling block, not a window centered on (x, y): the
        corner is (x // block_width * block_width, y // block_height * block_height).
        Blocks at the right/bottom edge are clipped when the grid is not an
        exact multiple of the block size.

        Defaults to this view's own position.
        """
        if block_width <= 0 or block_height <= 0:
            raise OutOfBoundsError(
                f"Block size must be positive, got {block_width}x{block_height}"
            )
        if x is None:
            x = self.x
        if y is None:
            y = self.y
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBoundsError(f"Position ({x}, {y}) is outside the grid", Position(x, y))

        x0 = x // block_width * block_width
        y0 = y // block_height * block_height
        return self.span(
            range(x0, min(x0 + block_width, self.width)),
            range(y0, min(y0 + block_height, self.height)),
        )

    def __repr__(self) -> str:
        return f"View(pos={self._pos}, grid={self.width}x{self.height})"
