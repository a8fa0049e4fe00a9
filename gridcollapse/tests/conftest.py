"""Shared test fixtures for gridcollapse."""

import tempfile
from pathlib import Path

import pytest

from gridcollapse.wfc import Definite, Indefinite, Wfc, WfcRules


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow (skipped by default, run with --run-slow)")


def pytest_addoption(parser):
    """Add --run-slow option to pytest."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="Run slow tests (skipped by default)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is passed."""
    if config.getoption("--run-slow"):
        return

    skip_slow = pytest.mark.skip(reason="Slow test (use --run-slow to run)")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


class ContextFreeRules(WfcRules):
    """Rules that ignore the grid and always allow the same states."""

    def __init__(self, states=frozenset({0})):
        self.states = frozenset(states)
        self.calls = []

    def get_states(self, view):
        self.calls.append(view.pos)
        return set(self.states)


class CountEntropyRules(ContextFreeRules):
    """Context-free rules that collapse the fewest-candidate cell first."""

    def entropy(self, tile):
        return float(len(tile.as_indefinite()))


@pytest.fixture
def temp_data_dir() -> Path:
    """Create a temporary data directory for tests."""
    with tempfile.TemporaryDirectory(prefix="gridcollapse_test_") as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def counting_wfc() -> Wfc:
    """4x4 grid of Definite(0..15), row-major."""
    return Wfc(4, 4, [Definite(i) for i in range(16)], ContextFreeRules())


@pytest.fixture
def counting_view(counting_wfc: Wfc):
    """View at the origin of the 4x4 counting grid."""
    return counting_wfc.view(0, 0)


def values(span_iter):
    """Committed values of an iterator of Definite tiles."""
    return [tile.as_definite() for tile in span_iter]


def open_grid(width: int, height: int, states) -> list:
    """width*height Indefinite tiles over the same states."""
    return [Indefinite(states) for _ in range(width * height)]
