"""
Sudoku Generator using Randomized Backtracking

This module fills a 9x9 Sudoku grid with a depth-first backtracking search
whose candidate digits are tried in a shuffled order, so every pass yields a
different valid grid. A filled grid is turned into a puzzle by hiding a
requested number of cells.
"""

import logging
import random
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

from ..core.base_generator import BaseGenerator
from ..core.base_puzzle import SudokuPuzzle
from ..core.errors import InvalidArgumentError, SearchExhaustedError
from ..utils.config_loader import get_config

logger = logging.getLogger(__name__)

GRID_SIZE = 9
BOX_SIZE = 3
TOTAL_CELLS = GRID_SIZE * GRID_SIZE
EMPTY = 0
DEFAULT_MAX_ATTEMPTS = 2000


class SudokuGrid:
    """
    A 9x9 Sudoku value grid.

    Values are held in a numpy int8 array; 0 marks an empty cell while
    solving and a hidden cell once the grid has been masked.
    """

    def __init__(self, values: Optional[Sequence[Sequence[int]]] = None):
        """
        Initialize a grid.

        Args:
            values: Optional pre-seeded 9x9 values (0 for empty). An empty
                grid is created when omitted.

        Raises:
            InvalidArgumentError: If the seeded values are not a conflict-free
                9x9 grid of digits 0..9
        """
        if values is None:
            self.values = np.zeros((GRID_SIZE, GRID_SIZE), dtype=np.int8)
        else:
            self.values = self._validate_values(values)
        self.attempts = 0

    @staticmethod
    def _validate_values(values) -> np.ndarray:
        try:
            grid = np.array(values, dtype=np.int64)
        except (ValueError, TypeError) as e:
            raise InvalidArgumentError(f"Sudoku grid must be a 9x9 grid of integers: {e}") from e

        if grid.shape != (GRID_SIZE, GRID_SIZE):
            raise InvalidArgumentError(
                f"Sudoku grid must be {GRID_SIZE}x{GRID_SIZE}, got shape {grid.shape}"
            )
        if ((grid < 0) | (grid > GRID_SIZE)).any():
            raise InvalidArgumentError("Sudoku grid values must be between 0 and 9")

        seeded = SudokuGrid()
        seeded.values = grid.astype(np.int8)
        if seeded.has_conflicts():
            raise InvalidArgumentError("Seeded Sudoku grid repeats a digit in a row, column or box")
        return seeded.values

    def copy(self) -> "SudokuGrid":
        """Create an independent copy of this grid."""
        clone = SudokuGrid()
        clone.values = self.values.copy()
        return clone

    def to_list(self) -> List[List[int]]:
        return self.values.tolist()

    def box(self, row: int, column: int) -> np.ndarray:
        """Return the 3x3 box containing (row, column)."""
        row_start = row // BOX_SIZE * BOX_SIZE
        col_start = column // BOX_SIZE * BOX_SIZE
        return self.values[row_start:row_start + BOX_SIZE, col_start:col_start + BOX_SIZE]

    def units(self) -> Iterator[np.ndarray]:
        """Yield every row, column and box as a flat array."""
        for i in range(GRID_SIZE):
            yield self.values[i, :]
            yield self.values[:, i]
        for row in range(0, GRID_SIZE, BOX_SIZE):
            for column in range(0, GRID_SIZE, BOX_SIZE):
                yield self.box(row, column).ravel()

    def has_conflicts(self) -> bool:
        """Check whether any row, column or box repeats a non-zero digit."""
        for unit in self.units():
            filled = unit[unit != EMPTY]
            if len(np.unique(filled)) != len(filled):
                return True
        return False

    def is_complete(self) -> bool:
        """Check that every cell is filled and no unit repeats a digit."""
        return not (self.values == EMPTY).any() and not self.has_conflicts()

    def empty_count(self) -> int:
        return int((self.values == EMPTY).sum())

    def get_next_empty(self) -> Optional[Tuple[int, int]]:
        """Return the first empty cell in row-major order, or None if full."""
        empty_cells = np.argwhere(self.values == EMPTY)
        if len(empty_cells) == 0:
            return None
        return int(empty_cells[0][0]), int(empty_cells[0][1])

    def can_place(self, row: int, column: int, digit: int) -> bool:
        """Check if digit can be written at (row, column)."""
        if self.values[row, column] != EMPTY:
            return False
        if digit in self.values[row, :]:
            return False
        if digit in self.values[:, column]:
            return False
        return digit not in self.box(row, column)

    def fill(
        self,
        rng: Optional[random.Random] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> "SudokuGrid":
        """
        Complete the grid with a randomized backtracking search.

        Args:
            rng: Random generator used to shuffle candidate digits
            max_attempts: Ceiling on candidate attempts over the whole search

        Returns:
            self, fully populated

        Raises:
            SearchExhaustedError: If the attempt ceiling is exceeded or the
                seeded values admit no completion. The grid is restored to
                its values from before the call.
        """
        rng = rng if rng is not None else random.Random()
        snapshot = self.values.copy()
        self.attempts = 0

        try:
            completed = self._fill_from(rng, max_attempts)
        except SearchExhaustedError:
            self.values[:, :] = snapshot
            logger.debug(f"Sudoku fill aborted after {self.attempts} attempts")
            raise

        if not completed:
            self.values[:, :] = snapshot
            raise SearchExhaustedError(
                "No completion exists for the seeded Sudoku grid", attempts=self.attempts
            )

        logger.debug(f"Sudoku grid filled after {self.attempts} candidate attempts")
        return self

    def _fill_from(self, rng: random.Random, max_attempts: int) -> bool:
        # self.attempts counts every candidate tried since fill() reset it
        next_cell = self.get_next_empty()
        if next_cell is None:
            return True
        row, column = next_cell

        candidates = list(range(1, GRID_SIZE + 1))
        rng.shuffle(candidates)

        for digit in candidates:
            self.attempts += 1
            if self.attempts > max_attempts:
                raise SearchExhaustedError(
                    f"Failed to fill grid: exceeded {max_attempts} attempts",
                    attempts=self.attempts,
                )

            if self.can_place(row, column, digit):
                self.values[row, column] = digit
                if self._fill_from(rng, max_attempts):
                    return True
                self.values[row, column] = EMPTY

        return False

    def hide_values(self, count: int, rng: Optional[random.Random] = None) -> "SudokuGrid":
        """
        Mask out cells to turn a filled grid into a puzzle.

        Args:
            count: Number of distinct cells to hide (0..81)
            rng: Random generator used to choose the cells

        Returns:
            self, with `count` cells set to 0

        Raises:
            InvalidArgumentError: If count is outside 0..81
        """
        if isinstance(count, bool) or not isinstance(count, (int, np.integer)):
            raise InvalidArgumentError(f"Hide count must be an integer, got {count!r}")
        if not 0 <= count <= TOTAL_CELLS:
            raise InvalidArgumentError(
                f"Cannot hide {count} values: must be between 0 and {TOTAL_CELLS}"
            )

        rng = rng if rng is not None else random.Random()
        for index in rng.sample(range(TOTAL_CELLS), int(count)):
            row, column = divmod(index, GRID_SIZE)
            self.values[row, column] = EMPTY
        return self


class SudokuGenerator(BaseGenerator):
    """
    Generates masked 9x9 Sudoku puzzles.

    Settings not passed explicitly come from the generation config
    (SUDOKU_HIDDEN_COUNT, SUDOKU_MAX_ATTEMPTS).
    """

    puzzle_type = "sudoku"

    def __init__(
        self,
        hidden_count: Optional[int] = None,
        max_attempts: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize Sudoku generator.

        Args:
            hidden_count: Cells to hide in each generated puzzle
            max_attempts: Backtracking attempt ceiling
            rng: Random generator shared by every pass of this generator
        """
        super().__init__(rng)
        self.config = get_config()
        self.generation_config = self.config.get_generation_config()

        self.hidden_count = (
            hidden_count
            if hidden_count is not None
            else self.generation_config["sudoku_hidden_count"]
        )
        self.max_attempts = (
            max_attempts
            if max_attempts is not None
            else self.generation_config["sudoku_max_attempts"]
        )

        logger.info(
            f"Initialized SudokuGenerator: hide {self.hidden_count} cells, "
            f"attempt ceiling {self.max_attempts}"
        )

    def create_solution(self) -> SudokuGrid:
        """Fill an empty grid."""
        return SudokuGrid().fill(self.rng, self.max_attempts)

    def solve(self, values: Sequence[Sequence[int]]) -> SudokuGrid:
        """Complete a pre-seeded grid."""
        return SudokuGrid(values).fill(self.rng, self.max_attempts)

    def generate_puzzle(self, puzzle_id: str, hidden_count: Optional[int] = None, **kwargs) -> SudokuPuzzle:
        """
        Fill a grid from empty and mask it.

        Args:
            puzzle_id: Identifier for the puzzle
            hidden_count: Overrides the generator's hide count for this pass

        Returns:
            SudokuPuzzle holding the masked grid and its solution
        """
        count = self.hidden_count if hidden_count is None else hidden_count

        solution = self.create_solution()
        puzzle_grid = solution.copy().hide_values(count, self.rng)

        logger.info(
            f"Generated Sudoku {puzzle_id}: {TOTAL_CELLS - puzzle_grid.empty_count()} clues, "
            f"{solution.attempts} attempts"
        )

        return SudokuPuzzle(
            puzzle_id=puzzle_id,
            grid=puzzle_grid.values,
            solution_grid=solution.values,
            hidden_count=count,
        )


def create_puzzle(
    rng: Optional[random.Random] = None, max_attempts: int = DEFAULT_MAX_ATTEMPTS
) -> SudokuGrid:
    """Generate a fully populated grid from empty."""
    return SudokuGrid().fill(rng, max_attempts)


def solve_puzzle(
    values: Sequence[Sequence[int]],
    rng: Optional[random.Random] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> SudokuGrid:
    """Complete a partially filled grid."""
    return SudokuGrid(values).fill(rng, max_attempts)
