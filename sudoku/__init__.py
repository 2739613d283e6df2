"""Sudoku puzzle generator, solver and hint engine.

This package exposes the public API surface via:

- ``sudoku.engine.generator.SudokuGenerator``: builds and carves puzzles.
- ``sudoku.engine.solver``: backtracking ``solve`` and ``count_solutions``.
- ``sudoku.engine.hints.find_hint``: forced-cell hints for a live board.
- ``sudoku.engine.validator.BoardValidator``: play-time and submission checks.
"""

from .engine.generator import GeneratorConfig, SudokuGenerator, generate_puzzle
from .engine.hints import find_hint
from .engine.solver import count_solutions, solve
from .engine.validator import BoardValidator

__all__ = [
    "BoardValidator",
    "GeneratorConfig",
    "SudokuGenerator",
    "count_solutions",
    "find_hint",
    "generate_puzzle",
    "solve",
]

__version__ = "0.1.0"
