"""Wave Function Collapse engine: tiles, views, rule sets and the solver."""

from .tile import Tile, Definite, Indefinite, from_states
from .view import Span, View
from .rules import WfcRules
from .solver import Wfc, StepResult

__all__ = [
    "Tile",
    "Definite",
    "Indefinite",
    "from_states",
    "Span",
    "View",
    "WfcRules",
    "Wfc",
    "StepResult",
]
