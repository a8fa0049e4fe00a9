"""Tests for Position."""

import pytest

from gridcollapse.types import Position


class TestPosition:
    @pytest.mark.parametrize("x, y, inside", [(0, 0, True), (3, 2, True), (4, 0, False), (0, 3, False), (-1, 0, False)])
    def test_in_bounds(self, x, y, inside):
        assert Position(x, y).in_bounds(4, 3) is inside

    def test_index_round_trip(self):
        assert Position(2, 3).to_index(4) == 14
        assert Position.from_index(14, 4) == Position(2, 3)
