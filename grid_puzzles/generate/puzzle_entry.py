"""
PuzzleEntry format for storing generated puzzles as JSON.

This module defines the flat, serialization-friendly record written for each
generated puzzle, different from the SudokuPuzzle/WordSearchPuzzle objects
handed to renderers.
"""

from dataclasses import dataclass, asdict, field
from typing import Dict, List, Any, Union
import json
import logging

from ..core.base_puzzle import SudokuPuzzle, WordSearchPuzzle, grid_to_list

logger = logging.getLogger(__name__)

PUZZLE_TYPES = ("sudoku", "wordsearch")


@dataclass
class PuzzleEntry:
    """
    Stored record of one generated puzzle.

    Attributes:
        id: Unique puzzle identifier (e.g., "sudoku_9x9_001")
        puzzle_type: "sudoku" or "wordsearch"
        grid: Grid presented to the player (masked Sudoku / filled word-search)
        solution_grid: Completed Sudoku grid; same as grid for word-search
        width: Grid width
        height: Grid height
        words: Word-search entries as dicts (empty for Sudoku)
        hidden_count: Masked cell count (0 for word-search)
        filled_cells: Cells showing a value to the player
        generation_metadata: Additional generation information
    """

    id: str
    puzzle_type: str
    grid: List[List[Union[int, str]]]
    solution_grid: List[List[Union[int, str]]]
    width: int
    height: int
    words: List[Dict[str, Any]] = field(default_factory=list)
    hidden_count: int = 0
    filled_cells: int = 0
    generation_metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate puzzle entry after initialization."""
        if not self.id:
            raise ValueError("Puzzle ID cannot be empty")

        if self.puzzle_type not in PUZZLE_TYPES:
            raise ValueError(f"Unknown puzzle type: {self.puzzle_type}")

        if not self.grid or not self.solution_grid:
            raise ValueError("Both grid and solution_grid are required")

        for name, grid in (("grid", self.grid), ("solution_grid", self.solution_grid)):
            rows = len(grid)
            cols = len(grid[0]) if grid else 0
            if rows != self.height or cols != self.width:
                raise ValueError(
                    f"{name} must match declared dimensions: expected "
                    f"{self.width}x{self.height}, got {cols}x{rows}"
                )

        if self.puzzle_type == "wordsearch" and not self.words:
            raise ValueError("Word-search entry must list at least one word")

        if not (0 <= self.hidden_count <= self.width * self.height):
            raise ValueError("Hidden count must fit within the grid")

    @classmethod
    def from_puzzle(cls, puzzle, generation_info: Dict[str, Any] = None):
        """
        Create PuzzleEntry from a generated puzzle object.

        Args:
            puzzle: SudokuPuzzle or WordSearchPuzzle from a generator
            generation_info: Additional generation metadata

        Returns:
            PuzzleEntry instance
        """
        width, height = puzzle.get_size()
        grid = grid_to_list(puzzle.get_grid())

        if isinstance(puzzle, SudokuPuzzle):
            filled_cells = sum(1 for row in grid for cell in row if cell != 0)
            return cls(
                id=puzzle.puzzle_id,
                puzzle_type="sudoku",
                grid=grid,
                solution_grid=grid_to_list(puzzle.get_solution_grid()),
                width=width,
                height=height,
                hidden_count=puzzle.hidden_count,
                filled_cells=filled_cells,
                generation_metadata=generation_info or {},
            )

        if isinstance(puzzle, WordSearchPuzzle):
            return cls(
                id=puzzle.puzzle_id,
                puzzle_type="wordsearch",
                grid=grid,
                solution_grid=grid,
                width=width,
                height=height,
                words=[word.to_dict() for word in puzzle.get_words()],
                filled_cells=width * height,
                generation_metadata=generation_info or {},
            )

        raise TypeError(f"Unsupported puzzle object: {type(puzzle).__name__}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def validate_grid_consistency(self) -> bool:
        """Validate that every revealed Sudoku value agrees with the solution."""
        if self.puzzle_type != "sudoku":
            return True
        try:
            for i, row in enumerate(self.grid):
                for j, cell in enumerate(row):
                    if cell != 0 and cell != self.solution_grid[i][j]:
                        logger.warning(
                            f"Inconsistency at [{i},{j}]: grid shows {cell}, "
                            f"solution has {self.solution_grid[i][j]}"
                        )
                        return False
            return True

        except IndexError as e:
            logger.error(f"Grid validation error: {e}")
            return False

    def get_statistics(self) -> Dict[str, Any]:
        """Get detailed statistics about this puzzle."""
        total_cells = self.width * self.height
        stats = {
            "puzzle_id": self.id,
            "puzzle_type": self.puzzle_type,
            "grid_size": f"{self.width}x{self.height}",
            "filled_cells": self.filled_cells,
            "fill_ratio": f"{self.filled_cells / total_cells:.1%}",
        }

        if self.puzzle_type == "sudoku":
            stats["hidden_count"] = self.hidden_count
            return stats

        direction_counts: Dict[str, int] = {}
        for word in self.words:
            direction = word.get("direction", "unknown")
            direction_counts[direction] = direction_counts.get(direction, 0) + 1

        stats["word_count"] = len(self.words)
        stats["direction_balance"] = direction_counts
        stats["letters_in_words"] = sum(word.get("length", 0) for word in self.words)
        return stats
