"""Shared constants and board configurations for the Sudoku engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from .exceptions import ConfigurationError


EMPTY: Optional[int] = None
"""Internal empty-cell sentinel. ``0`` only appears in the wire form."""

WIRE_EMPTY = 0

DEFAULT_SOLUTION_CAP = 2


class Difficulty(str, Enum):
    """Difficulty levels offered to players."""

    EASY = "EASY"
    NORMAL = "NORMAL"


@dataclass(frozen=True)
class BoardConfig:
    """Subgrid dimensions and filled-cell policy for one board size.

    ``height`` is the number of rows in a subgrid and ``width`` the number of
    columns, so a board holds ``width`` row bands and ``height`` column bands.
    """

    height: int
    width: int
    filled_cells_min: int
    filled_cells_max: int

    @property
    def size(self) -> int:
        return self.height * self.width

    @property
    def cell_count(self) -> int:
        return self.size * self.size


BOARD_CONFIGS: Dict[int, BoardConfig] = {
    6: BoardConfig(height=2, width=3, filled_cells_min=18, filled_cells_max=18),
    9: BoardConfig(height=3, width=3, filled_cells_min=28, filled_cells_max=30),
}

DIFFICULTY_SIZES: Dict[Difficulty, int] = {
    Difficulty.EASY: 6,
    Difficulty.NORMAL: 9,
}


def get_board_config(size: int) -> BoardConfig:
    config = BOARD_CONFIGS.get(size)
    if config is None:
        supported = ", ".join(str(s) for s in sorted(BOARD_CONFIGS))
        raise ConfigurationError(f"Unsupported size: {size}. Supported sizes: {supported}")
    return config


def parse_difficulty(difficulty: Difficulty | str) -> Difficulty:
    if isinstance(difficulty, Difficulty):
        return difficulty
    try:
        return Difficulty(difficulty.upper())
    except ValueError as exc:
        raise ConfigurationError(f"Unknown difficulty: {difficulty}") from exc


def size_for_difficulty(difficulty: Difficulty | str) -> int:
    return DIFFICULTY_SIZES[parse_difficulty(difficulty)]
