"""
Core base interfaces for the grid puzzle generators.

This package contains minimal base classes that define the essential
interfaces for puzzles and generators, plus the shared error types.

Classes:
    BasePuzzle: Abstract base class for all puzzle types
    BaseGenerator: Abstract base class for all generators
    SudokuPuzzle: Masked Sudoku grid with its solution
    WordSearchPuzzle: Filled word-search grid with its hidden words
    HiddenWord: Individual word-search entry
"""

from .base_puzzle import BasePuzzle, SudokuPuzzle, WordSearchPuzzle, HiddenWord
from .base_generator import BaseGenerator
from .errors import (
    PuzzleGenerationError,
    InvalidArgumentError,
    SearchExhaustedError,
    NoPlacementFoundError,
)

__all__ = [
    'BasePuzzle',
    'BaseGenerator',
    'SudokuPuzzle',
    'WordSearchPuzzle',
    'HiddenWord',
    'PuzzleGenerationError',
    'InvalidArgumentError',
    'SearchExhaustedError',
    'NoPlacementFoundError',
]
