"""Grid algebra: placement checks, copies and board-state helpers."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Set

from ..core.constants import EMPTY, WIRE_EMPTY, get_board_config
from ..core.exceptions import InvalidBoardError
from ..core.models import Coord, Grid, to_wire

__all__ = [
    "check_grid",
    "deep_copy",
    "empty_grid",
    "from_wire",
    "get_invalid_cells",
    "given_cells_of",
    "is_board_complete",
    "is_cell_valid",
    "is_valid_placement",
    "to_wire",
]


def empty_grid(size: int) -> Grid:
    get_board_config(size)
    return [[EMPTY for _ in range(size)] for _ in range(size)]


def deep_copy(grid: Grid) -> Grid:
    return [list(row) for row in grid]


def is_valid_placement(grid: Grid, row: int, col: int, value: int, size: int) -> bool:
    """Return whether ``value`` fits at ``(row, col)``.

    The cell itself is excluded from the scan, so this also answers whether a
    hypothetical replacement of an already-filled cell would conflict.
    """

    config = get_board_config(size)
    assert 1 <= value <= size, f"value {value} outside 1..{size}"

    for c in range(size):
        if c != col and grid[row][c] == value:
            return False

    for r in range(size):
        if r != row and grid[r][col] == value:
            return False

    top = (row // config.height) * config.height
    left = (col // config.width) * config.width
    for r in range(top, top + config.height):
        for c in range(left, left + config.width):
            if (r != row or c != col) and grid[r][c] == value:
                return False
    return True


def is_cell_valid(board: Grid, row: int, col: int, size: int) -> bool:
    value = board[row][col]
    if value is EMPTY:
        return True
    return is_valid_placement(board, row, col, value, size)


def is_board_complete(board: Grid, size: int) -> bool:
    """True when every cell is filled and no rule is violated."""

    for r in range(size):
        for c in range(size):
            if board[r][c] is EMPTY:
                return False
            if not is_cell_valid(board, r, c, size):
                return False
    return True


def get_invalid_cells(board: Grid, size: int, given_cells: Iterable[Coord] = ()) -> List[Coord]:
    """Coordinates of player-entered cells that break a rule.

    Given cells are never reported, even when a player entry conflicts with
    them; the conflicting player cell is reported instead.
    """

    given: Set[Coord] = {tuple(coord) for coord in given_cells}
    invalid: List[Coord] = []
    for r in range(size):
        for c in range(size):
            if (r, c) in given:
                continue
            if board[r][c] is not EMPTY and not is_cell_valid(board, r, c, size):
                invalid.append((r, c))
    return invalid


def given_cells_of(puzzle: Grid) -> List[Coord]:
    return [
        (r, c)
        for r, row in enumerate(puzzle)
        for c, value in enumerate(row)
        if value is not EMPTY
    ]


def check_grid(grid: Sequence[Sequence[Optional[int]]], size: int) -> None:
    """Sanitise a board coming from outside the engine."""

    get_board_config(size)
    if len(grid) != size:
        raise InvalidBoardError(f"Expected {size} rows, got {len(grid)}")
    for r, row in enumerate(grid):
        if len(row) != size:
            raise InvalidBoardError(f"Row {r} has {len(row)} cells, expected {size}")
        for c, value in enumerate(row):
            if value is EMPTY:
                continue
            if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= size:
                raise InvalidBoardError(f"Invalid value {value!r} at ({r},{c})")


def from_wire(matrix: Sequence[Sequence[int]], size: int) -> Grid:
    """Convert a stored board (``0`` for empty) into the internal form."""

    grid: Grid = [
        [EMPTY if value in (WIRE_EMPTY, None) else value for value in row]
        for row in matrix
    ]
    check_grid(grid, size)
    return grid
