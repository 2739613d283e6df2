"""Deterministic checks for live boards and user-submitted puzzles."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..core.constants import DEFAULT_SOLUTION_CAP, get_board_config
from ..core.exceptions import InvalidBoardError, SolverTimeout, ValidationError
from ..core.models import BoardStatus, Coord, Grid
from .cpsat import count_solutions_cpsat, solve_cpsat
from .grid import check_grid, get_invalid_cells, given_cells_of, is_board_complete
from .solver import count_solutions, solve
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

BACKENDS = ("backtracking", "cpsat")


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]
    solution: Optional[Grid] = field(default=None, repr=False)


class BoardValidator:
    """Runs rule and uniqueness checks for one board size."""

    def __init__(self, size: int, backend: str = "backtracking", timeout: float = 10.0) -> None:
        get_board_config(size)
        if backend not in BACKENDS:
            raise ValueError(f"Unknown backend '{backend}', expected one of {BACKENDS}")
        self.size = size
        self.backend = backend
        self.timeout = timeout

    def status(self, board: Grid, given_cells: Iterable[Coord] = ()) -> BoardStatus:
        return BoardStatus(
            complete=is_board_complete(board, self.size),
            invalid_cells=get_invalid_cells(board, self.size, given_cells),
        )

    def validate_custom(self, board: Grid) -> ValidationResult:
        """Accept a submitted puzzle only if it has exactly one solution."""

        try:
            check_grid(board, self.size)
            self._check_givens(board)
            count = self._count(board)
            if count == 0:
                raise ValidationError("Puzzle has no solution")
            if count > 1:
                raise ValidationError("Puzzle has more than one solution")
            solution = self._solve(board)
            if solution is None:
                raise ValidationError("Puzzle could not be solved")
        except (InvalidBoardError, SolverTimeout, ValidationError) as exc:
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[], solution=solution)

    def _check_givens(self, board: Grid) -> None:
        conflicts = get_invalid_cells(board, self.size)
        if conflicts:
            raise ValidationError(f"Conflicting given values at {conflicts}")
        if not given_cells_of(board):
            raise ValidationError("Puzzle has no given values")

    def _count(self, board: Grid) -> int:
        if self.backend == "cpsat":
            return count_solutions_cpsat(board, self.size, DEFAULT_SOLUTION_CAP, self.timeout)
        return count_solutions(board, self.size, DEFAULT_SOLUTION_CAP)

    def _solve(self, board: Grid) -> Optional[Grid]:
        if self.backend == "cpsat":
            return solve_cpsat(board, self.size, self.timeout)
        return solve(board, self.size)
