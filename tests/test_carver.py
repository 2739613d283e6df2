import random
import unittest
from unittest.mock import patch

from sudoku.core.constants import EMPTY
from sudoku.engine.builder import build_solved_grid
from sudoku.engine.carver import carve_puzzle
from sudoku.engine.grid import deep_copy, given_cells_of
from sudoku.engine.solver import count_solutions, solve

from boards import SOLVED_6, SOLVED_9


class CarvePuzzleTests(unittest.TestCase):
    def test_six_by_six_carves_to_eighteen_givens(self) -> None:
        result = carve_puzzle(SOLVED_6, 6, 18, random.Random(3))
        self.assertEqual(result.target_removed, 18)
        self.assertLessEqual(result.removed, 18)
        self.assertEqual(len(given_cells_of(result.puzzle)), 36 - result.removed)
        if not result.exhausted:
            self.assertEqual(len(given_cells_of(result.puzzle)), 18)

    def test_carved_puzzle_is_unique_and_round_trips(self) -> None:
        rng = random.Random(9)
        for _ in range(5):
            solved = build_solved_grid(6, rng)
            result = carve_puzzle(solved, 6, 18, rng)
            self.assertEqual(count_solutions(result.puzzle, 6, 2), 1)
            self.assertEqual(solve(result.puzzle, 6), solved)

    def test_nine_by_nine_carve(self) -> None:
        result = carve_puzzle(SOLVED_9, 9, 30, random.Random(21))
        self.assertEqual(count_solutions(result.puzzle, 9, 2), 1)
        self.assertEqual(solve(result.puzzle, 9), SOLVED_9)
        self.assertEqual(len(given_cells_of(result.puzzle)), 81 - result.removed)

    def test_remaining_givens_match_solution(self) -> None:
        result = carve_puzzle(SOLVED_6, 6, 18, random.Random(4))
        for r, c in given_cells_of(result.puzzle):
            self.assertEqual(result.puzzle[r][c], SOLVED_6[r][c])

    def test_solved_grid_is_not_mutated(self) -> None:
        solved = deep_copy(SOLVED_6)
        carve_puzzle(solved, 6, 18, random.Random(1))
        self.assertEqual(solved, SOLVED_6)

    def test_target_above_cell_count_removes_nothing(self) -> None:
        result = carve_puzzle(SOLVED_6, 6, 40, random.Random(1))
        self.assertEqual(result.target_removed, 0)
        self.assertEqual(result.removed, 0)
        self.assertEqual(result.puzzle, SOLVED_6)

    def test_removal_rejected_when_uniqueness_breaks(self) -> None:
        with patch("sudoku.engine.carver.count_solutions", return_value=2):
            result = carve_puzzle(SOLVED_6, 6, 18, random.Random(1))
        self.assertEqual(result.removed, 0)
        self.assertTrue(result.exhausted)
        self.assertEqual(result.attempts, 36)
        self.assertNotIn(EMPTY, [v for row in result.puzzle for v in row])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
