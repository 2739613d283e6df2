import unittest
from unittest.mock import patch

from sudoku.core.constants import Difficulty
from sudoku.core.exceptions import ConfigurationError, ExhaustedAttempts, GenerationFailed
from sudoku.engine.generator import GeneratorConfig, SudokuGenerator, generate_puzzle
from sudoku.engine.solver import count_solutions, solve

from boards import assert_complete


class GeneratorConfigTests(unittest.TestCase):
    def test_for_difficulty_maps_to_size(self) -> None:
        easy = GeneratorConfig.for_difficulty("easy", seed=1)
        self.assertEqual(easy.size, 6)
        self.assertEqual(easy.difficulty, Difficulty.EASY)
        normal = GeneratorConfig.for_difficulty(Difficulty.NORMAL)
        self.assertEqual(normal.size, 9)

    def test_unknown_difficulty(self) -> None:
        with self.assertRaises(ConfigurationError):
            GeneratorConfig.for_difficulty("extreme")

    def test_unsupported_size(self) -> None:
        with self.assertRaises(ConfigurationError):
            GeneratorConfig(size=5)

    def test_filled_cells_out_of_range(self) -> None:
        with self.assertRaises(ValueError):
            GeneratorConfig(size=6, filled_cells=37)
        with self.assertRaises(ValueError):
            GeneratorConfig(size=6, filled_cells=-1)

    def test_max_attempts_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            GeneratorConfig(size=6, max_attempts=0)


class SudokuGeneratorTests(unittest.TestCase):
    def test_easy_puzzle_invariants(self) -> None:
        result = SudokuGenerator(GeneratorConfig.for_difficulty("EASY", seed=12)).generate()
        self.assertEqual(result.size, 6)
        self.assertTrue(result.verified)
        assert_complete(self, result.solution, 6)
        self.assertEqual(count_solutions(result.puzzle, 6, 2), 1)
        self.assertEqual(solve(result.puzzle, 6), result.solution)
        self.assertEqual(result.filled_cells, len(result.given_cells))
        self.assertGreaterEqual(result.filled_cells, 18)
        for r, c in result.given_cells:
            self.assertEqual(result.puzzle[r][c], result.solution[r][c])

    def test_normal_puzzle_invariants(self) -> None:
        result = generate_puzzle(9, seed=2)
        self.assertEqual(result.size, 9)
        assert_complete(self, result.solution, 9)
        self.assertEqual(count_solutions(result.puzzle, 9, 2), 1)
        self.assertEqual(solve(result.puzzle, 9), result.solution)
        self.assertGreaterEqual(result.filled_cells, 28)

    def test_seed_is_reproducible(self) -> None:
        first = SudokuGenerator(GeneratorConfig(size=6, seed=99)).generate()
        second = SudokuGenerator(GeneratorConfig(size=6, seed=99)).generate()
        self.assertEqual(first.puzzle, second.puzzle)
        self.assertEqual(first.solution, second.solution)

    def test_filled_cells_override(self) -> None:
        result = SudokuGenerator(GeneratorConfig(size=6, seed=4, filled_cells=24)).generate()
        self.assertEqual(result.filled_cells, 24)

    def test_failed_verification_retries_then_raises(self) -> None:
        config = GeneratorConfig(size=6, seed=1, max_attempts=3)
        generator = SudokuGenerator(config)
        with patch("sudoku.engine.generator.count_solutions", return_value=2) as counter:
            with self.assertRaises(ExhaustedAttempts):
                generator.generate()
        self.assertEqual(counter.call_count, 3)

    def test_exhausted_attempts_is_a_generation_failure(self) -> None:
        self.assertTrue(issubclass(ExhaustedAttempts, GenerationFailed))

    def test_allow_unverified_returns_best_effort(self) -> None:
        config = GeneratorConfig(size=6, seed=1, max_attempts=2, allow_unverified=True)
        with patch("sudoku.engine.generator.count_solutions", return_value=0):
            with self.assertLogs("sudoku.engine.generator", level="WARNING"):
                result = SudokuGenerator(config).generate()
        self.assertFalse(result.verified)
        self.assertEqual(result.attempts, 2)

    def test_later_attempt_can_succeed(self) -> None:
        config = GeneratorConfig(size=6, seed=8, max_attempts=5)
        with patch("sudoku.engine.generator.count_solutions", side_effect=[2, 1]):
            result = SudokuGenerator(config).generate()
        self.assertTrue(result.verified)
        self.assertEqual(result.attempts, 2)

    def test_to_jsonable_uses_zero_for_empty(self) -> None:
        result = SudokuGenerator(GeneratorConfig.for_difficulty("EASY", seed=3)).generate()
        payload = result.to_jsonable()
        self.assertEqual(payload["difficulty"], "EASY")
        flat = [v for row in payload["boardInitial"] for v in row]
        self.assertEqual(flat.count(0), 36 - result.filled_cells)
        self.assertNotIn(None, flat)
        self.assertNotIn(0, [v for row in payload["boardSolution"] for v in row])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
