"""Data models shared by the Sudoku engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .constants import Difficulty, WIRE_EMPTY

Cell = Optional[int]
Grid = List[List[Cell]]
Coord = Tuple[int, int]


@dataclass(frozen=True)
class Hint:
    """A single forced cell value."""

    row: int
    col: int
    value: int


@dataclass
class CarveResult:
    """Outcome of one carving pass over a solved grid."""

    puzzle: Grid
    removed: int
    target_removed: int
    attempts: int

    @property
    def exhausted(self) -> bool:
        return self.removed < self.target_removed


@dataclass
class BoardStatus:
    complete: bool
    invalid_cells: List[Coord] = field(default_factory=list)


@dataclass
class PuzzleResult:
    """A playable puzzle paired with the solved grid it was carved from."""

    size: int
    puzzle: Grid
    solution: Grid
    given_cells: List[Coord]
    filled_cells: int
    verified: bool = True
    attempts: int = 1
    seed: Optional[int] = None
    difficulty: Optional[Difficulty] = None

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "size": self.size,
            "difficulty": self.difficulty.value if self.difficulty else None,
            "boardInitial": to_wire(self.puzzle),
            "boardSolution": to_wire(self.solution),
            "givenCells": [list(coord) for coord in self.given_cells],
            "filledCells": self.filled_cells,
            "verified": self.verified,
            "attempts": self.attempts,
            "seed": self.seed,
        }


def to_wire(grid: Grid) -> List[List[int]]:
    """Map the internal empty sentinel to ``0`` for storage and transport."""

    return [[WIRE_EMPTY if value is None else value for value in row] for row in grid]
