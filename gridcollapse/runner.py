"""
Driving loops for the WFC engine.

The engine only ever performs one step. Deciding how many steps to allow,
and what to do after STUCK, belongs to the caller. These helpers cover the
common policy: run one engine to the end, or rebuild a fresh engine and try
again until an attempt solves or the restart budget is spent.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable

from .errors import StepLimitExceeded
from .logging_config import log_attempt
from .wfc import StepResult, Tile, Wfc

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, Wfc, StepResult], None]


@dataclass(frozen=True)
class SolveOutcome:
    """
    Result of a solve run.

    Attributes:
        solved: True if the last attempt reached SOLVED
        attempts: Number of engines that were run
        steps: step() calls made by the last attempt
        rollbacks: Single-value rollbacks made by the last attempt
        tiles: Final grid of the last attempt, row-major
    """

    solved: bool
    attempts: int
    steps: int
    rollbacks: int
    tiles: tuple[Tile, ...]


def solve(
    wfc: Wfc,
    max_steps: int | None = None,
    progress_callback: ProgressCallback | None = None,
    attempt: int = 1,
    accept: Callable[[tuple[Tile, ...]], bool] | None = None,
) -> SolveOutcome:
    """
    Run one engine until SOLVED or STUCK.

    Args:
        wfc: The engine to drive
        max_steps: Budget of step() calls; exhausting it counts as a failure
        progress_callback: Optional callback(attempt, wfc, result) after each step
        attempt: Attempt number reported to the callback
        accept: Optional check of the final grid; a SOLVED grid it rejects
                counts as a failure

    Returns:
        SolveOutcome for this engine
    """
    def on_step(engine: Wfc, result: StepResult) -> None:
        if progress_callback is not None:
            progress_callback(attempt, engine, result)

    try:
        result = wfc.solve(max_steps=max_steps, progress_callback=on_step)
    except StepLimitExceeded as e:
        logger.warning(f"Step budget exhausted after {e.steps} steps")
        result = StepResult.STUCK

    solved = result is StepResult.SOLVED
    if solved and accept is not None and not accept(wfc.tiles):
        logger.warning("Engine reported SOLVED but the grid was rejected")
        solved = False

    return SolveOutcome(
        solved=solved,
        attempts=attempt,
        steps=wfc.step_count,
        rollbacks=wfc.rollback_count,
        tiles=wfc.tiles,
    )


def solve_with_restarts(
    factory: Callable[[int], Wfc],
    max_restarts: int = 10,
    max_steps: int | None = None,
    progress_callback: ProgressCallback | None = None,
    accept: Callable[[tuple[Tile, ...]], bool] | None = None,
) -> SolveOutcome:
    """
    Solve with fresh engines until one succeeds.

    The engine only undoes the single value it just tried, so a run can
    get STUCK on grids that need deeper backtracking. Restarting from the
    initial grid with new random choices is the cheap way around that.

    Args:
        factory: Builds a fresh engine; receives the attempt number (1-based)
        max_restarts: Maximum number of engines to run
        max_steps: Step budget per attempt
        progress_callback: Optional callback(attempt, wfc, result) after each step
        accept: Optional check of each final grid (see solve)

    Returns:
        The outcome of the first solved attempt, or of the last one tried
    """
    if max_restarts < 1:
        raise ValueError(f"max_restarts must be >= 1, got {max_restarts}")

    outcome: SolveOutcome | None = None
    for attempt in range(1, max_restarts + 1):
        wfc = factory(attempt)
        log_attempt(logger, attempt, max_restarts, "START", f"indefinite={wfc.indefinite_count}")
        outcome = solve(wfc, max_steps, progress_callback, attempt, accept)
        status = "SOLVED" if outcome.solved else "STUCK"
        log_attempt(
            logger, attempt, max_restarts, status,
            f"steps={outcome.steps} rollbacks={outcome.rollbacks}",
        )
        if outcome.solved:
            return outcome

    logger.warning(f"No solution after {max_restarts} attempts")
    return outcome
