"""Shared constants for gridcollapse.

Centralizes defaults used by the config layer and the CLI.
"""

from pathlib import Path

# Environment variables read by SolveConfig.from_env()
ENV_SEED = "GRIDCOLLAPSE_SEED"
ENV_MAX_RESTARTS = "GRIDCOLLAPSE_MAX_RESTARTS"
ENV_MAX_STEPS = "GRIDCOLLAPSE_MAX_STEPS"
ENV_DATA_DIR = "GRIDCOLLAPSE_DATA"

# Solve defaults
DEFAULT_MAX_RESTARTS = 10  # Fresh engines to try after STUCK
DEFAULT_MAX_STEPS = 10_000  # Per attempt; a 9x9 Sudoku needs < 81 + rollbacks
DEFAULT_DATA_DIR = Path("data")
