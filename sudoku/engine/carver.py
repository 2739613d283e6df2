"""Progressive cell removal that keeps the puzzle uniquely solvable."""

from __future__ import annotations

import random
from typing import Optional

from ..core.constants import EMPTY, get_board_config
from ..core.models import CarveResult, Grid
from .builder import shuffled
from .grid import deep_copy
from .solver import count_solutions
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


def carve_puzzle(
    solved: Grid,
    size: int,
    filled_cells: int,
    rng: Optional[random.Random] = None,
) -> CarveResult:
    """Empty cells of ``solved`` until ``filled_cells`` remain or no cell can go.

    Cells are visited in a random order. A removal is kept only when the
    puzzle still has exactly one solution; otherwise the value is restored.
    The solved grid itself is never mutated.
    """

    config = get_board_config(size)
    rng = rng or random.Random()
    target_removed = max(0, config.cell_count - filled_cells)

    puzzle = deep_copy(solved)
    coordinates = shuffled([(r, c) for r in range(size) for c in range(size)], rng)
    max_attempts = len(coordinates) * 3

    removed = 0
    attempts = 0
    for row, col in coordinates:
        if removed >= target_removed or attempts >= max_attempts:
            break

        original = puzzle[row][col]
        puzzle[row][col] = EMPTY
        if count_solutions(puzzle, size, 2) == 1:
            removed += 1
        else:
            puzzle[row][col] = original
        attempts += 1

    result = CarveResult(
        puzzle=puzzle,
        removed=removed,
        target_removed=target_removed,
        attempts=attempts,
    )
    if result.exhausted:
        LOGGER.debug(
            "Carve stopped early: removed %d/%d after %d attempts",
            removed,
            target_removed,
            attempts,
        )
    return result
