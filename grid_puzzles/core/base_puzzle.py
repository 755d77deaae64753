"""
Minimal base puzzle interface for Sudoku, word-search and future grid puzzles.

Puzzle objects are the finished, read-only hand-off produced by the
generators. Renderers and serializers only ever read from them.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Tuple
from dataclasses import dataclass


def grid_to_list(grid) -> List[List[Any]]:
    """Convert a numpy grid (or plain nested list) to nested Python lists."""
    return grid.tolist() if hasattr(grid, "tolist") else [list(row) for row in grid]


@dataclass
class BasePuzzle(ABC):
    """
    Base class for all puzzle types.

    Provides the minimal interface needed by serializers and renderers.
    """

    puzzle_id: str
    size: Tuple[int, int]

    @abstractmethod
    def get_size(self) -> Tuple[int, int]:
        """Return puzzle dimensions as (width, height)."""
        pass

    @abstractmethod
    def get_grid(self):
        """Return the grid presented to the player."""
        pass

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Convert puzzle to dictionary for serialization."""
        pass


class HiddenWord:
    """
    A word hidden in a word-search grid with its position and direction.

    Attributes:
        number: Placement order of the word (1-based)
        word: The word as written into the grid
        direction: Direction name (e.g. "right", "diagonal_down")
        start_row: Anchor row in grid
        start_col: Anchor column in grid
        length: Length of the word in characters
    """

    def __init__(
        self,
        number: int,
        word: str,
        direction: str,
        start_row: int,
        start_col: int,
    ):
        self.number = number
        self.word = word
        self.direction = direction
        self.start_row = start_row
        self.start_col = start_col
        self.length = len(word)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "number": self.number,
            "word": self.word,
            "direction": self.direction,
            "start_row": self.start_row,
            "start_col": self.start_col,
            "length": self.length,
        }


class SudokuPuzzle(BasePuzzle):
    """
    A 9x9 Sudoku puzzle with its full solution.

    Attributes:
        puzzle_id: Unique identifier for the puzzle
        size: Always (9, 9)
        grid: Masked grid, 0 marks a hidden cell
        solution_grid: Fully populated grid the puzzle was masked from
        hidden_count: Number of cells that were hidden
    """

    def __init__(self, puzzle_id: str, grid, solution_grid, hidden_count: int):
        """
        Initialize a Sudoku puzzle.

        Args:
            puzzle_id: Unique identifier for the puzzle
            grid: Masked 9x9 grid, 0 marks a hidden cell
            solution_grid: Completed 9x9 grid (required)
            hidden_count: Number of masked cells

        Raises:
            ValueError: If solution_grid is None
        """
        super().__init__(puzzle_id, (9, 9))
        if solution_grid is None:
            raise ValueError(
                f"SudokuPuzzle {puzzle_id} must be initialized with a valid solution_grid"
            )
        self.grid = grid
        self.solution_grid = solution_grid
        self.hidden_count = hidden_count

    def get_size(self) -> Tuple[int, int]:
        return self.size

    def get_grid(self):
        return self.grid

    def get_solution_grid(self):
        return self.solution_grid

    def to_dict(self) -> Dict[str, Any]:
        return {
            "puzzle_id": self.puzzle_id,
            "size": list(self.size),
            "grid": grid_to_list(self.grid),
            "solution_grid": grid_to_list(self.solution_grid),
            "hidden_count": self.hidden_count,
        }


class WordSearchPuzzle(BasePuzzle):
    """
    A filled word-search grid and the words hidden in it.

    Attributes:
        puzzle_id: Unique identifier for the puzzle
        size: Grid dimensions as (width, height)
        grid: Letter grid with every blank filled
        words: HiddenWord entries in placement order
    """

    def __init__(
        self,
        puzzle_id: str,
        grid,
        words: List[HiddenWord],
        size: Tuple[int, int],
    ):
        super().__init__(puzzle_id, size)
        self.grid = grid
        self.words = words

    def get_size(self) -> Tuple[int, int]:
        return self.size

    def get_grid(self):
        return self.grid

    def get_words(self) -> List[HiddenWord]:
        """
        Get all hidden words for this puzzle.

        Returns:
            List of HiddenWord objects in placement order
        """
        return self.words

    def to_dict(self) -> Dict[str, Any]:
        return {
            "puzzle_id": self.puzzle_id,
            "size": list(self.size),
            "grid": grid_to_list(self.grid),
            "words": [word.to_dict() for word in self.words],
        }
