"""Custom exception hierarchy for Sudoku generation and solving."""


class SudokuError(Exception):
    """Base exception for engine failures."""


class ConfigurationError(SudokuError):
    """Raised when a board size has no registered subgrid configuration."""


class InvalidBoardError(SudokuError):
    """Raised when a board has the wrong shape or out-of-range values."""


class ValidationError(SudokuError):
    """Raised when a puzzle fails its uniqueness or solution checks."""


class GenerationFailed(SudokuError):
    """Raised when puzzle generation cannot produce a verified puzzle."""


class ExhaustedAttempts(GenerationFailed):
    """Raised when every carve attempt failed verification."""


class SolverTimeout(SudokuError):
    """Raised when a time-limited solver stops before reaching a verdict."""
