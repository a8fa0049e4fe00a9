"""Example rule sets built on the WFC engine."""

from .sudoku import (
    SudokuNum,
    SudokuRules,
    parse_puzzle,
    empty_puzzle,
    new_sudoku,
    is_valid_solution,
    format_grid,
)

__all__ = [
    "SudokuNum",
    "SudokuRules",
    "parse_puzzle",
    "empty_puzzle",
    "new_sudoku",
    "is_valid_solution",
    "format_grid",
]
