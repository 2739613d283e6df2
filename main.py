"""CLI entrypoint for the Sudoku generator, solver and hint engine."""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from pathlib import Path
from typing import Any, Dict, List, Tuple

from sudoku.core.constants import Difficulty
from sudoku.core.exceptions import SudokuError
from sudoku.core.models import Coord, Grid
from sudoku.engine.generator import GeneratorConfig, SudokuGenerator
from sudoku.engine.grid import from_wire, given_cells_of, to_wire
from sudoku.engine.hints import find_hint
from sudoku.engine.validator import BACKENDS, BoardValidator
from sudoku.utils.logger import configure_logging
from sudoku.utils.pretty import pretty_print_grid, print_puzzle_stats


def load_board_file(path: Path) -> Tuple[int, Grid, List[Coord]]:
    """Read a board document.

    The file holds either a bare matrix or an object with ``board`` and an
    optional ``initial`` matrix whose filled cells are the given cells. Empty
    cells are ``0``.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, list):
        data = {"board": data}
    matrix = data["board"]
    size = len(matrix)
    board = from_wire(matrix, size)
    initial = from_wire(data["initial"], size) if data.get("initial") else board
    return size, board, given_cells_of(initial)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate, solve and get hints for Sudoku puzzles",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    generate = commands.add_parser("generate", help="Generate a new puzzle")
    group = generate.add_mutually_exclusive_group()
    group.add_argument("--size", type=int, help="Board size (6 or 9)")
    group.add_argument(
        "--difficulty",
        type=str,
        choices=[d.value for d in Difficulty],
        help="Difficulty level (EASY is 6x6, NORMAL is 9x9)",
    )
    generate.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    generate.add_argument(
        "--filled-cells",
        type=int,
        default=None,
        help="Override the number of given cells",
    )
    generate.add_argument(
        "--max-attempts",
        type=int,
        default=5,
        help="Carve-and-verify attempts before giving up (default 5)",
    )
    generate.add_argument(
        "--allow-unverified",
        action="store_true",
        help="Return the last candidate instead of failing when no attempt verifies",
    )
    generate.add_argument("--output", type=Path, help="Optional path to JSON output")
    generate.add_argument("--pretty", action="store_true", help="Print grids and stats instead of JSON")

    solve = commands.add_parser("solve", help="Validate and solve a submitted puzzle")
    solve.add_argument("board", type=Path, help="JSON board file (0 for empty cells)")
    solve.add_argument("--backend", choices=BACKENDS, default="backtracking", help="Solver backend")
    solve.add_argument("--timeout", type=float, default=10.0, help="CP-SAT time limit in seconds")
    solve.add_argument("--pretty", action="store_true", help="Print the solution grid instead of JSON")

    hint = commands.add_parser("hint", help="Find one forced cell on a board")
    hint.add_argument("board", type=Path, help="JSON board file with optional 'initial' matrix")
    hint.add_argument("--seed", type=int, default=None, help="Random seed for tie-breaking")
    hint.add_argument(
        "--max-trial-cells",
        type=int,
        default=None,
        help="Limit the number of cells examined by trial placement",
    )

    check = commands.add_parser("check", help="Report completion and rule violations")
    check.add_argument("board", type=Path, help="JSON board file with optional 'initial' matrix")
    return parser


def run_generate(args: argparse.Namespace) -> Dict[str, Any]:
    if args.difficulty:
        config = GeneratorConfig.for_difficulty(
            args.difficulty,
            seed=args.seed,
            filled_cells=args.filled_cells,
            max_attempts=args.max_attempts,
            allow_unverified=args.allow_unverified,
        )
    else:
        config = GeneratorConfig(
            size=args.size or 9,
            seed=args.seed,
            filled_cells=args.filled_cells,
            max_attempts=args.max_attempts,
            allow_unverified=args.allow_unverified,
        )
    result = SudokuGenerator(config).generate()
    if args.pretty:
        print_puzzle_stats(result)
    return result.to_jsonable()


def run_solve(args: argparse.Namespace) -> Dict[str, Any]:
    size, board, _ = load_board_file(args.board)
    validator = BoardValidator(size, backend=args.backend, timeout=args.timeout)
    validation = validator.validate_custom(board)
    if validation.ok and args.pretty:
        pretty_print_grid(validation.solution, size, label="Solution:")
    return {
        "ok": validation.ok,
        "messages": validation.messages,
        "solution": to_wire(validation.solution) if validation.solution else None,
    }


def run_hint(args: argparse.Namespace) -> Dict[str, Any]:
    size, board, given = load_board_file(args.board)
    found = find_hint(
        board,
        size,
        given,
        rng=random.Random(args.seed),
        max_trial_cells=args.max_trial_cells,
    )
    if found is None:
        return {"hint": None}
    return {"hint": {"row": found.row, "col": found.col, "value": found.value}}


def run_check(args: argparse.Namespace) -> Dict[str, Any]:
    size, board, given = load_board_file(args.board)
    status = BoardValidator(size).status(board, given)
    return {
        "complete": status.complete,
        "invalidCells": [list(coord) for coord in status.invalid_cells],
    }


COMMANDS = {
    "generate": run_generate,
    "solve": run_solve,
    "hint": run_hint,
    "check": run_check,
}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    try:
        payload = COMMANDS[args.command](args)
    except (SudokuError, KeyError, ValueError) as exc:
        logging.getLogger("sudoku").error("%s failed: %s", args.command, exc)
        return 1

    output_text = json.dumps(payload, indent=2)
    output = getattr(args, "output", None)
    if output:
        output.write_text(output_text, encoding="utf-8")
    elif not getattr(args, "pretty", False):
        print(output_text)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
