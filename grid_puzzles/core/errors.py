"""
Error types raised by the grid generation engines.

All engine failures derive from PuzzleGenerationError so that callers
(the batch builder, the CLI) can handle them in one place. The engines
themselves never catch these errors.
"""

__all__ = [
    "PuzzleGenerationError",
    "InvalidArgumentError",
    "SearchExhaustedError",
    "NoPlacementFoundError",
]


class PuzzleGenerationError(Exception):
    """Base class for all generation failures."""


class InvalidArgumentError(PuzzleGenerationError, ValueError):
    """
    An input is outside the range the engine supports.

    Raised for masking counts outside 0..81, words that are too short or
    too long for the grid, malformed pre-seeded grids and bad grid sizes.
    """


class SearchExhaustedError(PuzzleGenerationError):
    """
    The Sudoku backtracking search gave up without completing the grid.

    Attributes:
        attempts: Candidate attempts counted when the search stopped
    """

    def __init__(self, message: str, attempts: int = 0):
        super().__init__(message)
        self.attempts = attempts


class NoPlacementFoundError(PuzzleGenerationError):
    """
    A word has no legal anchor/direction combination in the grid.

    Attributes:
        word: The word that could not be placed
    """

    def __init__(self, message: str, word: str = ""):
        super().__init__(message)
        self.word = word
