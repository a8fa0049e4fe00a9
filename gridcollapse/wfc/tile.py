"""
Tile definition for Wave Function Collapse.

A Tile is the state of one grid cell. It is either Definite (collapsed to a
single committed value) or Indefinite (still in superposition over a set of
candidate values). A tile moves from Indefinite to Definite at most once.

Values can be any hashable, totally ordered type - ints, enums, strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from ..errors import TileStateError


@dataclass(frozen=True)
class Tile:
    """Base class for the two tile variants. Never instantiated directly."""

    @property
    def is_definite(self) -> bool:
        return False

    @property
    def is_indefinite(self) -> bool:
        return False

    def as_definite(self) -> Any:
        """The committed value. Raises TileStateError on an Indefinite tile."""
        raise TileStateError(f"as_definite called on {self!r}, which is not Definite")

    def as_indefinite(self) -> frozenset:
        """The candidate set. Raises TileStateError on a Definite tile."""
        raise TileStateError(f"as_indefinite called on {self!r}, which is not Indefinite")


@dataclass(frozen=True)
class Definite(Tile):
    """A cell that has collapsed to one value."""

    value: Any

    @property
    def is_definite(self) -> bool:
        return True

    def as_definite(self) -> Any:
        return self.value


@dataclass(frozen=True)
class Indefinite(Tile):
    """
    A cell still in superposition.

    The candidate set is stored as a frozenset. An empty set would mean a
    contradiction, so it is refused here - the engine detects contradictions
    before it would ever build one.
    """

    states: frozenset

    def __post_init__(self):
        states = frozenset(self.states)
        if not states:
            raise TileStateError("Indefinite tile needs at least one candidate state")
        object.__setattr__(self, "states", states)

    @property
    def is_indefinite(self) -> bool:
        return True

    def as_indefinite(self) -> frozenset:
        return self.states

    def sorted_states(self) -> list:
        """Candidates in ascending order."""
        return sorted(self.states)

    def __len__(self) -> int:
        return len(self.states)


def from_states(states: Iterable[Any]) -> Tile:
    """
    Build the tile for a freshly computed set of legal states.

    One state collapses for free to Definite; several stay Indefinite.
    """
    states = frozenset(states)
    if not states:
        raise TileStateError("Cannot build a tile from an empty state set")
    if len(states) == 1:
        return Definite(next(iter(states)))
    return Indefinite(states)
