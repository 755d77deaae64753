"""
Grid Puzzle Generation Module

This module implements randomized generation of 9x9 Sudoku and rectangular
word-search puzzles.

Architecture:
- sudoku_generator: Randomized backtracking fill and cell masking
- wordsearch_generator: Randomized directional word placement and blank filling
- puzzle_entry: PuzzleEntry dataclass for JSON output
- puzzle_builder: Main orchestrator for batch puzzle generation

Key Features:
- Explicit random.Random handles for reproducible output
- Bounded backtracking with the grid restored on failure
- Multi-attempt batch generation with running statistics
"""

from .sudoku_generator import SudokuGrid, SudokuGenerator
from .wordsearch_generator import Direction, WordPlacement, WordSearchGrid, WordSearchGenerator
from .puzzle_entry import PuzzleEntry
from .puzzle_builder import PuzzleBuilder


__all__ = [
    "SudokuGrid",
    "SudokuGenerator",
    "Direction",
    "WordPlacement",
    "WordSearchGrid",
    "WordSearchGenerator",
    "PuzzleEntry",
    "PuzzleBuilder",
]
