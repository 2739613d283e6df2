"""Puzzle generation orchestration.

Two-phase approach:
  1. Build: produce a complete grid by formula and band permutations.
  2. Carve: remove cells while the puzzle keeps a single solution, then
     verify that the solution is the grid it was carved from.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from ..core.constants import (BoardConfig, Difficulty, get_board_config,
                              parse_difficulty, size_for_difficulty)
from ..core.exceptions import ExhaustedAttempts, ValidationError
from ..core.models import CarveResult, Grid, PuzzleResult
from .builder import build_solved_grid
from .carver import carve_puzzle
from .grid import given_cells_of
from .solver import count_solutions, solve
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class GeneratorConfig:
    size: int = 9
    seed: Optional[int] = None
    filled_cells: Optional[int] = None
    max_attempts: int = 5
    allow_unverified: bool = False
    difficulty: Optional[Difficulty] = None

    def __post_init__(self) -> None:
        board = self.board_config()
        if self.filled_cells is not None and not 0 <= self.filled_cells <= board.cell_count:
            raise ValueError(
                f"filled_cells must be within 0..{board.cell_count}, got {self.filled_cells}"
            )
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")

    @classmethod
    def for_difficulty(cls, difficulty: Difficulty | str, **overrides) -> "GeneratorConfig":
        level = parse_difficulty(difficulty)
        return cls(size=size_for_difficulty(level), difficulty=level, **overrides)

    def board_config(self) -> BoardConfig:
        return get_board_config(self.size)


class SudokuGenerator:
    """Builds a solved grid and carves a uniquely solvable puzzle from it."""

    def __init__(self, config: GeneratorConfig) -> None:
        self.config = config
        self.rng = random.Random(config.seed)

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self) -> PuzzleResult:
        size = self.config.size
        filled_cells = self._resolve_filled_cells()
        solved = build_solved_grid(size, self.rng)
        LOGGER.info("Generating %dx%d puzzle with %d filled cells", size, size, filled_cells)

        best: Optional[CarveResult] = None
        max_attempts = self.config.max_attempts
        for attempt in range(1, max_attempts + 1):
            LOGGER.debug("Carve attempt %s/%s", attempt, max_attempts)
            carved = carve_puzzle(solved, size, filled_cells, self.rng)
            best = carved
            try:
                self._verify(carved.puzzle, solved)
            except ValidationError as exc:
                LOGGER.warning("Carve attempt %s/%s failed: %s", attempt, max_attempts, exc)
                continue
            LOGGER.info(
                "Puzzle generated with %d given cells after %d attempt(s)",
                size * size - carved.removed,
                attempt,
            )
            return self._result(carved, solved, verified=True, attempts=attempt)

        if self.config.allow_unverified and best is not None:
            LOGGER.warning(
                "No verified puzzle after %d attempts; returning unverified candidate",
                max_attempts,
            )
            return self._result(best, solved, verified=False, attempts=max_attempts)
        raise ExhaustedAttempts(
            f"Unable to carve a uniquely solvable puzzle after {max_attempts} attempts"
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _resolve_filled_cells(self) -> int:
        if self.config.filled_cells is not None:
            return self.config.filled_cells
        board = self.config.board_config()
        return self.rng.randint(board.filled_cells_min, board.filled_cells_max)

    def _verify(self, puzzle: Grid, solved: Grid) -> None:
        size = self.config.size
        count = count_solutions(puzzle, size, 2)
        if count != 1:
            raise ValidationError(f"Puzzle has {count if count < 2 else '2+'} solutions")
        if solve(puzzle, size) != solved:
            raise ValidationError("Puzzle solution differs from the carved grid")

    def _result(
        self,
        carved: CarveResult,
        solved: Grid,
        *,
        verified: bool,
        attempts: int,
    ) -> PuzzleResult:
        given = given_cells_of(carved.puzzle)
        return PuzzleResult(
            size=self.config.size,
            puzzle=carved.puzzle,
            solution=solved,
            given_cells=given,
            filled_cells=len(given),
            verified=verified,
            attempts=attempts,
            seed=self.config.seed,
            difficulty=self.config.difficulty,
        )


def generate_puzzle(size: int, seed: Optional[int] = None) -> PuzzleResult:
    """Generate a puzzle for ``size`` using the registered filled-cell policy."""

    return SudokuGenerator(GeneratorConfig(size=size, seed=seed)).generate()
