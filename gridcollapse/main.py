"""gridcollapse - solve grid puzzles with Wave Function Collapse."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from pydantic import ValidationError
from rich.console import Console
from rich.text import Text

from . import __version__
from .config import SolveConfig
from .errors import PuzzleFormatError
from .logging_config import setup_logging
from .rules.sudoku import BOX, SIZE, empty_puzzle, is_valid_solution, new_sudoku, parse_puzzle
from .runner import SolveOutcome, solve_with_restarts
from .wfc import StepResult, Tile, Wfc

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_STUCK = 1
EXIT_BAD_INPUT = 2


def render_sudoku(tiles: Sequence[Tile], givens: Sequence[Tile]) -> Text:
    """Render a Sudoku grid: givens in bold white, solved cells in green."""
    text = Text()
    for y in range(SIZE):
        if y and y % BOX == 0:
            text.append("------+-------+------\n", style="bright_black")
        for x in range(SIZE):
            if x and x % BOX == 0:
                text.append("| ", style="bright_black")
            idx = y * SIZE + x
            tile = tiles[idx]
            if not tile.is_definite:
                text.append(". ", style="red")
            elif givens[idx].is_definite:
                text.append(f"{tile.as_definite()} ", style="bold white")
            else:
                text.append(f"{tile.as_definite()} ", style="green")
        text.append("\n")
    return text


def run_sudoku(console: Console, givens: list[Tile], config: SolveConfig) -> int:
    """Solve one puzzle and print the result."""

    def factory(attempt: int) -> Wfc:
        seed = None if config.seed is None else config.seed + attempt - 1
        return new_sudoku(givens, seed=seed)

    def progress(attempt: int, wfc: Wfc, result: StepResult) -> None:
        if result is StepResult.ROLLED_BACK:
            logger.debug(f"Attempt {attempt}: rollback #{wfc.rollback_count}")

    outcome: SolveOutcome = solve_with_restarts(
        factory,
        max_restarts=config.max_restarts,
        max_steps=config.max_steps,
        progress_callback=progress,
        accept=is_valid_solution,
    )

    console.print(render_sudoku(outcome.tiles, givens))
    summary = (
        f"attempts={outcome.attempts} steps={outcome.steps} rollbacks={outcome.rollbacks}"
    )
    if outcome.solved:
        console.print(f"[green]Solved[/green] ({summary})")
        return EXIT_OK

    console.print(f"[red]Stuck[/red] ({summary})")
    return EXIT_STUCK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gridcollapse",
        description="gridcollapse - solve grid puzzles with Wave Function Collapse",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  gridcollapse sudoku 53..7....6..195....98....6.8...6...34..8.3..17...2...6.6....28....419..5....8..79
  gridcollapse --seed 7 sudoku --file puzzle.txt
  gridcollapse --max-restarts 50 demo   # Fill an empty Sudoku grid
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--data",
        type=Path,
        default=None,
        help="Data directory for debug.log (default: data/)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible runs")
    parser.add_argument(
        "--max-restarts",
        type=int,
        default=None,
        metavar="N",
        help="Fresh attempts to make after getting stuck",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        metavar="N",
        help="Step budget per attempt",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to console",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    sudoku = subparsers.add_parser("sudoku", help="Solve a Sudoku puzzle")
    sudoku.add_argument(
        "puzzle",
        nargs="?",
        help="81 characters, row by row; 0 or . for blanks",
    )
    sudoku.add_argument("--file", type=Path, help="Read the puzzle from a file")

    subparsers.add_parser("demo", help="Fill an empty Sudoku grid")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for gridcollapse."""
    parser = build_parser()
    args = parser.parse_args(argv)
    console = Console()

    try:
        config = SolveConfig.from_env(
            seed=args.seed,
            max_restarts=args.max_restarts,
            max_steps=args.max_steps,
            data_dir=args.data,
            debug=args.debug or None,
        )
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        return EXIT_BAD_INPUT

    console_level = logging.DEBUG if config.debug else logging.WARNING
    log_path = setup_logging(config.data_dir, console_level=console_level)
    logger.info(f"gridcollapse v{__version__} | command={args.command} | log={log_path}")

    if args.command == "demo":
        return run_sudoku(console, empty_puzzle(), config)

    if args.file is not None:
        try:
            text = args.file.read_text(encoding="utf-8")
        except OSError as e:
            console.print(f"[red]Cannot read {args.file}:[/red] {e}")
            return EXIT_BAD_INPUT
    elif args.puzzle is not None:
        text = args.puzzle
    else:
        text = sys.stdin.read()

    try:
        givens = parse_puzzle(text)
        new_sudoku(givens)
    except PuzzleFormatError as e:
        console.print(f"[red]Invalid puzzle:[/red] {e}")
        return EXIT_BAD_INPUT

    return run_sudoku(console, givens, config)


if __name__ == "__main__":
    sys.exit(main())
