"""
Wave Function Collapse engine.

The engine owns a fixed width x height grid of tiles and a rule set, and
drives the collapse one step at a time:

1. Score every indefinite cell with the rule set's entropy
2. Pick one of the lowest-entropy cells at random
3. Collapse it to a random candidate value
4. Re-ask the rule set for every other indefinite cell
5. Commit everything, or undo the pick if some cell was left with nothing

The undo in step 5 is shallow: only the value just tried is taken back,
and it is excluded from that cell for good. A contradiction that an
earlier, already committed choice made inevitable ends in STUCK.
"""

from __future__ import annotations

from enum import Enum, auto
import logging
import math
import random
from typing import Any, Callable, Sequence

from ..errors import InvalidGridError, OutOfBoundsError, StepLimitExceeded, WfcError
from ..logging_config import log_step
from ..types import Position
from .rules import WfcRules
from .tile import Definite, Indefinite, Tile, from_states
from .view import View

logger = logging.getLogger(__name__)


class StepResult(Enum):
    """The outcome of one call to Wfc.step()."""
    RUNNING = auto()      # A cell was collapsed and propagation succeeded
    ROLLED_BACK = auto()  # Contradiction; the tried value was excluded, nothing else changed
    SOLVED = auto()       # No indefinite cells remain
    STUCK = auto()        # Contradiction with no alternative value left

    @property
    def is_terminal(self) -> bool:
        """True when further steps cannot change the grid."""
        return self in (StepResult.SOLVED, StepResult.STUCK)


class Wfc:
    """
    The WFC engine.

    Usage:
        wfc = Wfc(9, 9, tiles, SudokuRules(), seed=7)
        while True:
            result = wfc.step()
            if result.is_terminal:
                break

    Or for bulk solving:
        wfc.solve()  # Returns StepResult.SOLVED or StepResult.STUCK
    """

    def __init__(
        self,
        width: int,
        height: int,
        tiles: Sequence[Tile],
        rules: WfcRules,
        *,
        seed: int | None = None,
        rng: random.Random | None = None,
    ):
        """
        Initialize the engine.

        Args:
            width: Number of cells horizontally (> 0)
            height: Number of cells vertically (> 0)
            tiles: width * height tiles in row-major order
            rules: Rule set deciding legal values and entropy
            seed: Seed for a private random source (reproducible runs)
            rng: An explicit random source; mutually exclusive with seed

        Raises:
            InvalidGridError: If the dimensions or tile list are malformed
        """
        if width <= 0:
            raise InvalidGridError(f"width must be > 0, got {width}")
        if height <= 0:
            raise InvalidGridError(f"height must be > 0, got {height}")
        tiles = list(tiles)
        if len(tiles) != width * height:
            raise InvalidGridError(
                f"Expected width*height = {width * height} tiles, got {len(tiles)}"
            )
        for idx, tile in enumerate(tiles):
            if not isinstance(tile, Tile) or type(tile) is Tile:
                raise InvalidGridError(f"Element {idx} is not a Definite or Indefinite tile: {tile!r}")
        if seed is not None and rng is not None:
            raise InvalidGridError("Pass either seed or rng, not both")

        self._width = width
        self._height = height
        self._tiles: list[Tile] = tiles
        self._rules = rules
        self._rng = rng if rng is not None else random.Random(seed)

        self.step_count = 0
        self.rollback_count = 0
        self._stuck = False

        # Cells touched by the last step (for visualization/debugging)
        self.last_collapsed: Position | None = None
        self.last_propagated: set[Position] = set()

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def rules(self) -> WfcRules:
        return self._rules

    @property
    def tiles(self) -> tuple[Tile, ...]:
        """Snapshot of the grid in row-major order."""
        return tuple(self._tiles)

    @property
    def indefinite_count(self) -> int:
        return sum(1 for tile in self._tiles if tile.is_indefinite)

    @property
    def is_solved(self) -> bool:
        return not self._stuck and all(tile.is_definite for tile in self._tiles)

    @property
    def is_stuck(self) -> bool:
        return self._stuck

    def index_of(self, x: int, y: int) -> int:
        """Row-major index of (x, y)."""
        pos = Position(x, y)
        if not pos.in_bounds(self._width, self._height):
            raise OutOfBoundsError(f"Position ({x}, {y}) is outside the grid", pos)
        return pos.to_index(self._width)

    def position_of(self, index: int) -> Position:
        """(x, y) of a row-major index."""
        if not 0 <= index < len(self._tiles):
            raise OutOfBoundsError(f"Index {index} is outside the grid")
        return Position.from_index(index, self._width)

    def tile(self, x: int, y: int) -> Tile:
        return self._tiles[self.index_of(x, y)]

    def view(self, x: int, y: int | None = None) -> View:
        """
        A view positioned at (x, y), or at row-major index x when y is omitted.

        The view reads the live grid; don't keep it past the current call.
        """
        if y is None:
            return View(self, self.position_of(x))
        self.index_of(x, y)
        return View(self, Position(x, y))

    # -------------------------------------------------------------------------
    # Algorithm
    # -------------------------------------------------------------------------

    def _score(self) -> list[tuple[int, float]]:
        """Entropy of every indefinite cell, sorted ascending (stable by index)."""
        scored = []
        for idx, tile in enumerate(self._tiles):
            if not tile.is_indefinite:
                continue
            entropy = float(self._rules.entropy(tile))
            if math.isnan(entropy):
                raise WfcError(f"Entropy for cell {self.position_of(idx)} is NaN; unable to compare tiles")
            scored.append((idx, entropy))
        scored.sort(key=lambda item: item[1])
        return scored

    def _select(self, scored: list[tuple[int, float]]) -> int:
        """
        Choose the cell to collapse.

        Takes the run of cells sharing the lowest entropy and picks one
        uniformly at random.
        """
        lowest = scored[0][1]
        pool = []
        for idx, entropy in scored:
            if entropy != lowest:
                break
            pool.append(idx)
        return self._rng.choice(pool)

    def _propagate(self, scored: list[tuple[int, float]], selected: int | None) -> dict[int, Tile] | None:
        """
        Recompute the scored cells, except `selected`, against the current grid.

        Nothing is written here: all queries see the grid as it is right
        after the single commit. Returns the new tiles, or None on the
        first cell left with no legal value.
        """
        updates: dict[int, Tile] = {}
        for idx, _ in scored:
            if idx == selected:
                continue
            current = self._tiles[idx].as_indefinite()
            # Narrow only: values excluded earlier (e.g. by rollback) stay excluded
            legal = current.intersection(self._rules.get_states(View(self, self.position_of(idx))))
            if not legal:
                logger.debug(f"Contradiction at {self.position_of(idx)}")
                return None
            if legal != current or len(legal) == 1:
                updates[idx] = from_states(legal)
        return updates

    def narrow(self) -> bool:
        """
        Re-derive every indefinite cell once without collapsing anything.

        Useful right after construction, when the initial candidate sets
        don't yet reflect the Definite cells around them. Follows the same
        rules as propagation in step(): one snapshot, sets only shrink,
        single legal values become Definite, and nothing is committed if
        any cell is left empty.

        Returns:
            False on a contradiction (grid untouched), True otherwise
        """
        if self._stuck:
            return False
        indefinite = [(idx, 0.0) for idx, tile in enumerate(self._tiles) if tile.is_indefinite]
        updates = self._propagate(indefinite, None)
        if updates is None:
            logger.warning("Contradiction while narrowing the initial grid")
            return False
        for idx, tile in updates.items():
            self._tiles[idx] = tile
        logger.debug(f"Narrowed {len(updates)} of {len(indefinite)} indefinite cells")
        return True

    def step(self) -> StepResult:
        """
        Perform one collapse-and-propagate step.

        Returns:
            SOLVED when every cell is definite, STUCK once a contradiction
            leaves no alternative (latched), ROLLED_BACK when the tried
            value was undone, RUNNING otherwise.
        """
        if self._stuck:
            return StepResult.STUCK

        self.last_collapsed = None
        self.last_propagated = set()

        scored = self._score()
        if not scored:
            return StepResult.SOLVED

        self.step_count += 1
        selected = self._select(scored)
        position = self.position_of(selected)

        previous = self._tiles[selected]
        candidates = previous.sorted_states()
        value = self._rng.choice(candidates)
        remaining = frozenset(c for c in candidates if c != value)
        self._tiles[selected] = Definite(value)

        updates = self._propagate(scored, selected)

        if updates is None:
            if not remaining:
                # No alternative for the selected cell; leave the grid as it was
                self._tiles[selected] = previous
                self._stuck = True
                log_step(logger, self.step_count, "STUCK", f"cell={position} value={value!r}")
                logger.warning(
                    f"Stuck after {self.step_count} steps: every value at {position} leads to a contradiction"
                )
                return StepResult.STUCK

            self._tiles[selected] = Indefinite(remaining)
            self.rollback_count += 1
            log_step(
                logger, self.step_count, "ROLLED_BACK",
                f"cell={position} value={value!r} remaining={len(remaining)}",
            )
            logger.info(f"Rolled back {value!r} at {position} ({len(remaining)} alternatives left)")
            return StepResult.ROLLED_BACK

        for idx, tile in updates.items():
            self._tiles[idx] = tile
            self.last_propagated.add(self.position_of(idx))
        self.last_collapsed = position

        log_step(
            logger, self.step_count, "RUNNING",
            f"cell={position} value={value!r} propagated={len(updates)}",
        )
        return StepResult.RUNNING

    def solve(
        self,
        max_steps: int | None = None,
        progress_callback: Callable[[Wfc, StepResult], None] | None = None,
    ) -> StepResult:
        """
        Run step() until SOLVED or STUCK.

        Args:
            max_steps: Optional budget of step() calls
            progress_callback: Optional callback(wfc, result) after each step

        Raises:
            StepLimitExceeded: If max_steps runs out first
        """
        steps = 0
        while True:
            if max_steps is not None and steps >= max_steps:
                raise StepLimitExceeded(f"No result after {steps} steps", steps)
            result = self.step()
            steps += 1
            if progress_callback is not None:
                progress_callback(self, result)
            if result.is_terminal:
                return result

    def render(self, fmt: Callable[[Any], str] = str, unknown: str = ".") -> str:
        """Text dump of the grid, one line per row."""
        cells = [fmt(tile.as_definite()) if tile.is_definite else unknown for tile in self._tiles]
        pad = max(len(cell) for cell in cells)
        lines = []
        for y in range(self._height):
            row = cells[y * self._width:(y + 1) * self._width]
            lines.append(" ".join(cell.rjust(pad) for cell in row))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"Wfc({self._width}x{self._height}, indefinite={self.indefinite_count}, "
            f"steps={self.step_count}, stuck={self._stuck})"
        )
