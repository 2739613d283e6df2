"""CP-SAT Sudoku model using OR-Tools.

An alternative to the backtracking search for boards whose search cost is
not bounded, such as user-submitted puzzles with few givens. The time limit
keeps every call bounded; a count that times out before reaching a
verdict raises :class:`SolverTimeout`.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from ortools.sat.python import cp_model

from ..core.constants import DEFAULT_SOLUTION_CAP, EMPTY, get_board_config
from ..core.exceptions import SolverTimeout
from ..core.models import Grid
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)

CellVars = Dict[Tuple[int, int], cp_model.IntVar]


def _build_model(grid: Grid, size: int) -> Tuple[cp_model.CpModel, CellVars]:
    config = get_board_config(size)
    model = cp_model.CpModel()
    cell_vars: CellVars = {}

    for r in range(size):
        for c in range(size):
            value = grid[r][c]
            if value is EMPTY:
                cell_vars[(r, c)] = model.new_int_var(1, size, f"v_{r}_{c}")
            else:
                cell_vars[(r, c)] = model.new_int_var(value, value, f"v_{r}_{c}")

    for r in range(size):
        model.add_all_different([cell_vars[(r, c)] for c in range(size)])
    for c in range(size):
        model.add_all_different([cell_vars[(r, c)] for r in range(size)])
    for top in range(0, size, config.height):
        for left in range(0, size, config.width):
            model.add_all_different(
                [
                    cell_vars[(r, c)]
                    for r in range(top, top + config.height)
                    for c in range(left, left + config.width)
                ]
            )
    return model, cell_vars


class _SolutionCollector(cp_model.CpSolverSolutionCallback):
    """Records solutions and stops the search once ``cap`` are seen."""

    def __init__(self, cell_vars: CellVars, size: int, cap: int) -> None:
        super().__init__()
        self._cell_vars = cell_vars
        self._size = size
        self._cap = cap
        self.solutions: List[Grid] = []

    def on_solution_callback(self) -> None:
        self.solutions.append(
            [
                [self.value(self._cell_vars[(r, c)]) for c in range(self._size)]
                for r in range(self._size)
            ]
        )
        if len(self.solutions) >= self._cap:
            self.stop_search()


def _new_solver(timeout: float) -> cp_model.CpSolver:
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.num_workers = 1
    return solver


def count_solutions_cpsat(
    grid: Grid,
    size: int,
    cap: int = DEFAULT_SOLUTION_CAP,
    timeout: float = 10.0,
) -> int:
    """Count solutions up to ``cap`` by enumerating with CP-SAT."""

    if cap < 1:
        raise ValueError(f"cap must be at least 1, got {cap}")
    model, cell_vars = _build_model(grid, size)
    solver = _new_solver(timeout)
    solver.parameters.enumerate_all_solutions = True
    collector = _SolutionCollector(cell_vars, size, cap)
    status = solver.solve(model, collector)

    found = len(collector.solutions)
    if status == cp_model.UNKNOWN and found < cap:
        LOGGER.warning(
            "CP-SAT: enumeration hit the %.1fs limit after %d solution(s)", timeout, found
        )
        raise SolverTimeout(f"No verdict within {timeout:.1f}s ({found} solution(s) so far)")
    return found


def solve_cpsat(grid: Grid, size: int, timeout: float = 10.0) -> Optional[Grid]:
    """Return one completion found by CP-SAT, or ``None``."""

    model, cell_vars = _build_model(grid, size)
    solver = _new_solver(timeout)
    status = solver.solve(model)

    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        if status == cp_model.UNKNOWN:
            LOGGER.warning("CP-SAT: no solution within %.1fs", timeout)
        return None

    LOGGER.debug("CP-SAT: solution found in %.2fs", solver.wall_time)
    return [[solver.value(cell_vars[(r, c)]) for c in range(size)] for r in range(size)]
