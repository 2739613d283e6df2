"""Backtracking solver and solution counter.

Both entry points walk the empty cells in row-major order and try values in
ascending order, so results are deterministic for a given input grid. The
search always runs on a private copy of the caller's grid.
"""

from __future__ import annotations

from typing import List, Optional

from ..core.constants import DEFAULT_SOLUTION_CAP, EMPTY, get_board_config
from ..core.models import Coord, Grid
from .grid import deep_copy
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


class _Search:
    """Backtracking state over one private board copy.

    Row, column and box occupancy are kept as bitmasks (bit ``v`` set when
    digit ``v`` is used) so candidate checks stay constant time.
    """

    def __init__(self, grid: Grid, size: int) -> None:
        config = get_board_config(size)
        self.size = size
        self.height = config.height
        self.width = config.width
        self.board = deep_copy(grid)
        self.rows: List[int] = [0] * size
        self.cols: List[int] = [0] * size
        self.boxes: List[int] = [0] * size
        self.empties: List[Coord] = []
        self.consistent = True

        for r in range(size):
            for c in range(size):
                value = self.board[r][c]
                if value is EMPTY:
                    self.empties.append((r, c))
                    continue
                assert 1 <= value <= size, f"value {value} outside 1..{size}"
                box = self._box(r, c)
                bit = 1 << value
                if (self.rows[r] | self.cols[c] | self.boxes[box]) & bit:
                    self.consistent = False
                self.rows[r] |= bit
                self.cols[c] |= bit
                self.boxes[box] |= bit

    def _box(self, row: int, col: int) -> int:
        return (row // self.height) * self.height + col // self.width

    def _place(self, row: int, col: int, box: int, value: int) -> None:
        bit = 1 << value
        self.board[row][col] = value
        self.rows[row] |= bit
        self.cols[col] |= bit
        self.boxes[box] |= bit

    def _unplace(self, row: int, col: int, box: int, value: int) -> None:
        mask = ~(1 << value)
        self.board[row][col] = EMPTY
        self.rows[row] &= mask
        self.cols[col] &= mask
        self.boxes[box] &= mask

    def _candidates(self, row: int, col: int, box: int) -> List[int]:
        used = self.rows[row] | self.cols[col] | self.boxes[box]
        return [value for value in range(1, self.size + 1) if not used & (1 << value)]

    def count(self, cap: int) -> int:
        found = 0

        def search(index: int) -> bool:
            # Returns True once the cap is reached so every frame unwinds.
            nonlocal found
            if index == len(self.empties):
                found += 1
                return found >= cap
            row, col = self.empties[index]
            box = self._box(row, col)
            for value in self._candidates(row, col, box):
                self._place(row, col, box, value)
                stop = search(index + 1)
                self._unplace(row, col, box, value)
                if stop:
                    return True
            return False

        search(0)
        return found

    def first(self) -> Optional[Grid]:
        def search(index: int) -> bool:
            if index == len(self.empties):
                return True
            row, col = self.empties[index]
            box = self._box(row, col)
            for value in self._candidates(row, col, box):
                self._place(row, col, box, value)
                if search(index + 1):
                    return True
                self._unplace(row, col, box, value)
            return False

        if search(0):
            return deep_copy(self.board)
        return None


def count_solutions(grid: Grid, size: int, cap: int = DEFAULT_SOLUTION_CAP) -> int:
    """Count completions of ``grid``, stopping as soon as ``cap`` are found.

    Callers only need to tell 0, 1 and "several" apart, so the default cap of
    2 abandons the search the moment a second solution is confirmed. Grids
    whose givens already conflict have no solutions.
    """

    if cap < 1:
        raise ValueError(f"cap must be at least 1, got {cap}")
    search = _Search(grid, size)
    if not search.consistent:
        LOGGER.debug("Grid has conflicting givens; no solutions")
        return 0
    return search.count(cap)


def solve(grid: Grid, size: int) -> Optional[Grid]:
    """Return the first completion in search order, or ``None``."""

    search = _Search(grid, size)
    if not search.consistent:
        return None
    return search.first()


def has_unique_solution(grid: Grid, size: int) -> bool:
    return count_solutions(grid, size, DEFAULT_SOLUTION_CAP) == 1
