"""Pretty-print helpers for Sudoku grids."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, List

from ..core.constants import get_board_config

if TYPE_CHECKING:
    from ..core.models import Grid, PuzzleResult


def cell_symbol(value) -> str:
    return "." if value is None else str(value)


def format_grid(grid: Grid, size: int) -> str:
    """Render the grid with separators between subgrids."""

    config = get_board_config(size)
    separator = "+".join("-" * (2 * config.width + 1) for _ in range(config.height))
    lines: List[str] = []
    for r, row in enumerate(grid):
        if r and r % config.height == 0:
            lines.append(separator)
        groups = [
            " ".join(cell_symbol(v) for v in row[c:c + config.width])
            for c in range(0, size, config.width)
        ]
        lines.append(" " + " | ".join(groups))
    return "\n".join(lines)


def pretty_print_grid(grid: Grid, size: int, *, label: str | None = None, stream=None) -> None:
    """Print the grid in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(grid, size), file=stream)


def print_puzzle_stats(result: PuzzleResult, *, stream=None) -> None:
    """Print puzzle + solution grids and generation stats."""

    stream = stream or sys.stdout
    pretty_print_grid(result.puzzle, result.size, label="Puzzle:", stream=stream)
    print(file=stream)
    pretty_print_grid(result.solution, result.size, label="Solution:", stream=stream)

    total = result.size * result.size
    print(file=stream)
    print("--- Puzzle ---", file=stream)
    print(f"  Size:          {result.size} x {result.size} ({total} cells)", file=stream)
    print(f"  Given cells:   {result.filled_cells} ({result.filled_cells / total * 100:.0f}%)", file=stream)
    print(f"  Attempts:      {result.attempts}", file=stream)
    print(f"  Verified:      {'yes' if result.verified else 'NO'}", file=stream)
    if result.difficulty is not None:
        print(f"  Difficulty:    {result.difficulty.value}", file=stream)
    if result.seed is not None:
        print(file=stream)
        print(f"Seed: {result.seed}", file=stream)
