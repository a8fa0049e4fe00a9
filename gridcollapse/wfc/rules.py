"""
Rule sets for Wave Function Collapse.

A rule set is the only domain-specific part of a WFC run. Given a View
centered at a cell, it answers "which values are still legal here?".
The engine calls it for every indefinite cell after each collapse.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .tile import Tile
    from .view import View


class WfcRules(ABC):
    """
    Base class for rule sets.

    get_states() must be a pure function of the grid as seen through the
    view: no hidden state, no side effects. All queries within one
    propagation pass read the same snapshot.
    """

    @abstractmethod
    def get_states(self, view: View) -> set[Any]:
        """
        Return the values still legal at view.pos.

        An empty set means the position has no legal value (a contradiction).
        """
        ...

    def entropy(self, tile: Tile) -> float:
        """
        Score an indefinite tile for selection. Lower collapses first.

        The default gives every tile the same score, so selection is
        uniformly random.
        """
        return 0.0
