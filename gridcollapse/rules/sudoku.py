"""
Sudoku as a WFC rule set.

Each cell holds one of the nine digits. A digit is legal at a cell when it
does not already appear, as a committed value, in the cell's row, column or
3x3 box.

Puzzles are written as 81 characters, row by row: digits 1-9 are givens,
'0' or '.' are blanks, whitespace is ignored.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable, Sequence

from ..errors import PuzzleFormatError
from ..wfc import Definite, Indefinite, Tile, View, Wfc, WfcRules

SIZE = 9
BOX = 3
BLANKS = frozenset("0.")
DIGITS = frozenset("123456789")


class SudokuNum(IntEnum):
    """The nine Sudoku digits."""

    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9

    @classmethod
    def full_set(cls) -> frozenset[SudokuNum]:
        """Every digit."""
        return frozenset(cls)

    def __str__(self) -> str:
        return str(self.value)


class SudokuRules(WfcRules):
    """Row, column and box uniqueness."""

    def get_states(self, view: View) -> set[SudokuNum]:
        taken = set(view.row().definite_values())
        taken.update(view.col().definite_values())
        taken.update(view.section_at(BOX, BOX).definite_values())
        return set(SudokuNum.full_set() - taken)

    def entropy(self, tile: Tile) -> float:
        """Fewer candidates = lower entropy = collapsed first."""
        return float(len(tile.as_indefinite()))


def parse_puzzle(text: str) -> list[Tile]:
    """
    Parse puzzle text into 81 row-major tiles.

    Raises:
        PuzzleFormatError: On unknown characters or the wrong cell count
    """
    tiles: list[Tile] = []
    for char in text:
        if char.isspace():
            continue
        if char in BLANKS:
            tiles.append(Indefinite(SudokuNum.full_set()))
        elif char in DIGITS:
            tiles.append(Definite(SudokuNum(int(char))))
        else:
            raise PuzzleFormatError(f"Unexpected character {char!r} in puzzle")
    if len(tiles) != SIZE * SIZE:
        raise PuzzleFormatError(f"Puzzle must have {SIZE * SIZE} cells, got {len(tiles)}")
    return tiles


def empty_puzzle() -> list[Tile]:
    """81 blank cells."""
    return [Indefinite(SudokuNum.full_set()) for _ in range(SIZE * SIZE)]


def new_sudoku(puzzle: str | Sequence[Tile] | None = None, *, seed: int | None = None) -> Wfc:
    """
    Build an engine for a Sudoku puzzle.

    Args:
        puzzle: Puzzle text, pre-parsed tiles, or None for an empty grid
        seed: Seed for the engine's random source

    The blanks start out as the full digit set and are narrowed once
    against the givens before the engine is returned.

    Raises:
        PuzzleFormatError: If the puzzle text is malformed, a given repeats
            in a unit, or the givens leave some blank with no legal digit
    """
    if puzzle is None:
        tiles = empty_puzzle()
    elif isinstance(puzzle, str):
        tiles = parse_puzzle(puzzle)
    else:
        tiles = list(puzzle)
    repeated = _repeated_given(tiles)
    if repeated is not None:
        raise PuzzleFormatError(f"Digit {repeated} appears twice in one row, column or box")
    wfc = Wfc(SIZE, SIZE, tiles, SudokuRules(), seed=seed)
    if not wfc.narrow():
        raise PuzzleFormatError("Puzzle givens contradict each other")
    return wfc


def _groups() -> Iterable[list[int]]:
    """Index groups that must each hold all nine digits: rows, columns, boxes."""
    for i in range(SIZE):
        yield [i * SIZE + x for x in range(SIZE)]
        yield [y * SIZE + i for y in range(SIZE)]
    for by in range(0, SIZE, BOX):
        for bx in range(0, SIZE, BOX):
            yield [(by + dy) * SIZE + bx + dx for dy in range(BOX) for dx in range(BOX)]


def _repeated_given(tiles: Sequence[Tile]) -> SudokuNum | None:
    """A digit given twice in some row, column or box, if any."""
    if len(tiles) != SIZE * SIZE:
        return None
    for group in _groups():
        seen: set[SudokuNum] = set()
        for idx in group:
            tile = tiles[idx]
            if not tile.is_definite:
                continue
            digit = tile.as_definite()
            if digit in seen:
                return digit
            seen.add(digit)
    return None


def is_valid_solution(tiles: Sequence[Tile]) -> bool:
    """True if all 81 tiles are definite and every row, column and box is 1-9."""
    if len(tiles) != SIZE * SIZE or not all(tile.is_definite for tile in tiles):
        return False
    digits = SudokuNum.full_set()
    return all({tiles[idx].as_definite() for idx in group} == digits for group in _groups())


def format_grid(tiles: Sequence[Tile], blank: str = ".") -> str:
    """Nine lines of digits with box separators."""
    lines = []
    for y in range(SIZE):
        if y and y % BOX == 0:
            lines.append("------+-------+------")
        row = []
        for x in range(SIZE):
            if x and x % BOX == 0:
                row.append("|")
            tile = tiles[y * SIZE + x]
            row.append(str(tile.as_definite()) if tile.is_definite else blank)
        lines.append(" ".join(row))
    return "\n".join(lines)
