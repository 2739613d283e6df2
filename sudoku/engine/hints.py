"""Hint engine: find one cell whose value is forced on the current board."""

from __future__ import annotations

import random
from typing import Iterable, List, Optional, Set

from ..core.constants import EMPTY
from ..core.models import Coord, Grid, Hint
from .builder import shuffled
from .grid import deep_copy, is_valid_placement
from .solver import count_solutions
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


def _open_cells(board: Grid, size: int, given: Set[Coord]) -> List[Coord]:
    return [
        (r, c)
        for r in range(size)
        for c in range(size)
        if board[r][c] is EMPTY and (r, c) not in given
    ]


def _candidates(board: Grid, row: int, col: int, size: int) -> List[int]:
    return [v for v in range(1, size + 1) if is_valid_placement(board, row, col, v, size)]


def _naked_singles(board: Grid, size: int, cells: List[Coord]) -> List[Hint]:
    hints: List[Hint] = []
    for row, col in cells:
        values = _candidates(board, row, col, size)
        if len(values) == 1:
            hints.append(Hint(row, col, values[0]))
    return hints


def _forced_value(board: Grid, row: int, col: int, size: int) -> Optional[int]:
    """The only candidate that still admits a completion, if it completes uniquely."""

    trial = deep_copy(board)
    viable: Optional[int] = None
    viable_count = 0
    for value in _candidates(board, row, col, size):
        trial[row][col] = value
        count = count_solutions(trial, size, 2)
        if count == 0:
            continue
        if viable is not None:
            return None
        viable, viable_count = value, count
    if viable is not None and viable_count == 1:
        return viable
    return None


def _forced_cells(
    board: Grid,
    size: int,
    cells: List[Coord],
    rng: random.Random,
    max_trial_cells: Optional[int],
) -> List[Hint]:
    if max_trial_cells is not None:
        cells = shuffled(cells, rng)[:max_trial_cells]
    hints: List[Hint] = []
    for row, col in cells:
        value = _forced_value(board, row, col, size)
        if value is not None:
            hints.append(Hint(row, col, value))
    return hints


def find_hint(
    board: Grid,
    size: int,
    given_cells: Iterable[Coord],
    rng: Optional[random.Random] = None,
    max_trial_cells: Optional[int] = None,
) -> Optional[Hint]:
    """Return one forced ``Hint`` for ``board`` or ``None``.

    Naked singles are tried first. Only when there are none does the engine
    fall back to trial placement, where a cell is forced when exactly one of
    its candidates still lets the board be completed, and completed in only
    one way. Ties are broken uniformly at random.

    ``max_trial_cells`` bounds the number of cells examined by trial
    placement. With a bound, a hint may be missed even though one exists.
    """

    rng = rng or random.Random()
    given = {tuple(coord) for coord in given_cells}
    cells = _open_cells(board, size, given)

    singles = _naked_singles(board, size, cells)
    if singles:
        LOGGER.debug("Found %d naked single(s)", len(singles))
        return rng.choice(singles)

    forced = _forced_cells(board, size, cells, rng, max_trial_cells)
    if forced:
        LOGGER.debug("Found %d forced cell(s) by trial", len(forced))
        return rng.choice(forced)

    LOGGER.debug("No hint available")
    return None
