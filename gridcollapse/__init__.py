"""gridcollapse - a grid-based Wave Function Collapse engine."""

__version__ = "0.1.0"

from .errors import (
    WfcError,
    InvalidGridError,
    OutOfBoundsError,
    TileStateError,
    StepLimitExceeded,
    PuzzleFormatError,
)
from .types import Position
from .wfc import Tile, Definite, Indefinite, Span, View, WfcRules, Wfc, StepResult

__all__ = [
    "__version__",
    "WfcError",
    "InvalidGridError",
    "OutOfBoundsError",
    "TileStateError",
    "StepLimitExceeded",
    "PuzzleFormatError",
    "Position",
    "Tile",
    "Definite",
    "Indefinite",
    "Span",
    "View",
    "WfcRules",
    "Wfc",
    "StepResult",
]
