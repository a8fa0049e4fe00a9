"""Exceptions for gridcollapse.

Precondition violations are programmer errors and raise immediately.
Contradictions during propagation are NOT exceptions - they are reported
through StepResult values by the engine.
"""

from __future__ import annotations


class WfcError(Exception):
    """Base exception for gridcollapse errors."""

    pass


class InvalidGridError(WfcError, ValueError):
    """Engine construction arguments are malformed."""

    pass


class OutOfBoundsError(WfcError, IndexError):
    """A position, row, column or range lies outside the grid."""

    def __init__(self, message: str, position: tuple[int, int] | None = None):
        super().__init__(message)
        self.position = position


class TileStateError(WfcError, TypeError):
    """A tile was accessed as the wrong variant, or built with no states."""

    pass


class StepLimitExceeded(WfcError):
    """A solve loop ran out of its step budget before terminating."""

    def __init__(self, message: str, steps: int):
        super().__init__(message)
        self.steps = steps


class PuzzleFormatError(WfcError, ValueError):
    """Puzzle text could not be parsed into an initial grid."""

    pass
