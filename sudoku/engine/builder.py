"""Solved-grid construction by formula plus band-preserving permutations."""

from __future__ import annotations

import random
from typing import List, Optional, Sequence, TypeVar

from ..core.constants import get_board_config
from ..core.models import Grid
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)

T = TypeVar("T")


def shuffled(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """Return a uniformly shuffled copy (Fisher-Yates) of ``items``."""

    rng = rng or random.Random()
    result = list(items)
    rng.shuffle(result)
    return result


def build_standard_grid(size: int, height: int, width: int) -> Grid:
    """Cyclic base grid that already respects the subgrid partition."""

    return [
        [((row % height) * width + row // height + col) % size + 1 for col in range(size)]
        for row in range(size)
    ]


def shuffle_rows(height: int, width: int, rng: Optional[random.Random] = None) -> List[int]:
    """Row order: shuffle the ``width`` bands, then the ``height`` rows inside each."""

    order: List[int] = []
    for band in shuffled(range(width), rng):
        order.extend(shuffled(range(band * height, band * height + height), rng))
    return order


def shuffle_columns(height: int, width: int, rng: Optional[random.Random] = None) -> List[int]:
    """Column order: shuffle the ``height`` bands, then the ``width`` columns inside each."""

    order: List[int] = []
    for band in shuffled(range(height), rng):
        order.extend(shuffled(range(band * width, band * width + width), rng))
    return order


def build_solved_grid(size: int, rng: Optional[random.Random] = None) -> Grid:
    """Build a random complete grid without any search."""

    config = get_board_config(size)
    rng = rng or random.Random()
    standard = build_standard_grid(size, config.height, config.width)
    rows_order = shuffle_rows(config.height, config.width, rng)
    cols_order = shuffle_columns(config.height, config.width, rng)
    LOGGER.debug("Row order %s, column order %s", rows_order, cols_order)
    return [[standard[r][c] for c in cols_order] for r in rows_order]
