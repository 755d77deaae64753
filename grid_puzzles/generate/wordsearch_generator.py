"""
Word-Search Generator with Randomized Directional Placement

This module lays an ordered list of words into a rectangular letter grid.
Each word is anchored at a randomly chosen compatible cell and written along
a randomly chosen direction whose cells do not conflict with letters already
placed. Earlier words are placed first and so have first claim on shared
cells. Remaining blanks are filled with random lowercase letters.

Diagonal directions are derived from the axis checks: down-right is offered
when both the right and the down runs fit, up-left when both the left and the
up runs fit. The diagonal cells themselves are only checked when
strict_diagonals is enabled.
"""

import logging
import random
import string
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..core.base_generator import BaseGenerator
from ..core.base_puzzle import HiddenWord, WordSearchPuzzle
from ..core.errors import InvalidArgumentError, NoPlacementFoundError
from ..utils.config_loader import get_config

logger = logging.getLogger(__name__)

BLANK = " "
ALPHABET = string.ascii_lowercase
MIN_WORD_LENGTH = 2


class Direction(Enum):
    """Word placement directions."""

    RIGHT = "right"
    LEFT = "left"
    UP = "up"
    DOWN = "down"
    DIAGONAL_UP = "diagonal_up"
    DIAGONAL_DOWN = "diagonal_down"

    @property
    def delta(self) -> Tuple[int, int]:
        """(row_delta, col_delta) applied once per letter."""
        return _DIRECTION_DELTAS[self]


_DIRECTION_DELTAS = {
    Direction.RIGHT: (0, 1),
    Direction.LEFT: (0, -1),
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.DIAGONAL_UP: (-1, -1),
    Direction.DIAGONAL_DOWN: (1, 1),
}

AXIS_DIRECTIONS = (Direction.RIGHT, Direction.LEFT, Direction.DOWN, Direction.UP)


@dataclass
class WordPlacement:
    """Represents a word committed to the grid."""

    text: str
    row: int
    col: int
    direction: Direction
    number: int = 0

    def get_positions(self) -> List[Tuple[int, int]]:
        """Get all grid positions occupied by this word."""
        dr, dc = self.direction.delta
        return [(self.row + i * dr, self.col + i * dc) for i in range(len(self.text))]

    def get_end_position(self) -> Tuple[int, int]:
        """Get the position of the word's last letter."""
        return self.get_positions()[-1]


class WordSearchGrid:
    """
    An H x W letter grid being populated with words.

    Cells hold single characters in a numpy unicode array; BLANK marks a
    cell no word has claimed yet.
    """

    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise InvalidArgumentError(
                f"Word-search grid must be at least 1x1, got {width}x{height}"
            )
        self.width = width
        self.height = height
        self.grid = np.full((height, width), BLANK, dtype="<U1")
        self.placements: List[WordPlacement] = []

    def validate_word(self, word: str, min_length: int = MIN_WORD_LENGTH):
        """
        Check that a word has a length this grid can hold.

        Raises:
            InvalidArgumentError: If the word is shorter than min_length or
                longer than both grid dimensions
        """
        if len(word) < max(MIN_WORD_LENGTH, min_length) or (
            len(word) > self.width and len(word) > self.height
        ):
            raise InvalidArgumentError(
                f"Word '{word}' is invalid length for {self.width}x{self.height} puzzle"
            )

    def get_candidates(self, word: str) -> List[Tuple[int, int]]:
        """Return cells that are blank or already hold the word's first letter."""
        compatible = (self.grid == BLANK) | (self.grid == word[0])
        return [(int(row), int(col)) for row, col in np.argwhere(compatible)]

    def _run_fits(self, word: str, row: int, col: int, direction: Direction) -> bool:
        """Check bounds and letter compatibility of the run from (row, col)."""
        dr, dc = direction.delta
        end_row = row + dr * (len(word) - 1)
        end_col = col + dc * (len(word) - 1)
        if not (0 <= end_row < self.height and 0 <= end_col < self.width):
            return False

        for i, char in enumerate(word):
            cell = self.grid[row + i * dr, col + i * dc]
            if cell != BLANK and cell != char:
                return False
        return True

    def valid_directions(
        self, word: str, row: int, col: int, strict_diagonals: bool = False
    ) -> List[Direction]:
        """
        Directions along which the word could be written from (row, col).

        Args:
            word: Word to place
            row: Anchor row
            col: Anchor column
            strict_diagonals: Also require the diagonal run itself to fit

        Returns:
            List of valid directions (possibly empty)
        """
        fits = {direction: self._run_fits(word, row, col, direction) for direction in AXIS_DIRECTIONS}
        valid = [direction for direction in AXIS_DIRECTIONS if fits[direction]]

        if fits[Direction.RIGHT] and fits[Direction.DOWN]:
            if not strict_diagonals or self._run_fits(word, row, col, Direction.DIAGONAL_DOWN):
                valid.append(Direction.DIAGONAL_DOWN)
        if fits[Direction.LEFT] and fits[Direction.UP]:
            if not strict_diagonals or self._run_fits(word, row, col, Direction.DIAGONAL_UP):
                valid.append(Direction.DIAGONAL_UP)

        return valid

    def place_word(self, word: str, row: int, col: int, direction: Direction) -> WordPlacement:
        """Write the word along direction from (row, col) and record it."""
        self.validate_word(word)

        dr, dc = direction.delta
        for i, char in enumerate(word):
            r, c = row + i * dr, col + i * dc
            existing = self.grid[r, c]
            if existing != BLANK and existing != char:
                logger.warning(
                    f"Placing '{word}' {direction.value} overwrote '{existing}' "
                    f"with '{char}' at ({r}, {c})"
                )
            self.grid[r, c] = char

        placement = WordPlacement(
            text=word,
            row=row,
            col=col,
            direction=direction,
            number=len(self.placements) + 1,
        )
        self.placements.append(placement)
        return placement

    def place(
        self, word: str, rng: random.Random, strict_diagonals: bool = False
    ) -> WordPlacement:
        """
        Find an anchor and direction for the word and commit to it.

        Anchors are tried in shuffled order; the first anchor with any valid
        direction is used, with the direction picked at random.

        Raises:
            InvalidArgumentError: If the word has an unsupported length
            NoPlacementFoundError: If no anchor admits a valid direction
        """
        self.validate_word(word)
        candidates = self.get_candidates(word)
        if not candidates:
            raise NoPlacementFoundError(f"No valid cells found for '{word}'", word=word)
        rng.shuffle(candidates)

        for row, col in candidates:
            directions = self.valid_directions(word, row, col, strict_diagonals)
            if not directions:
                continue
            rng.shuffle(directions)
            return self.place_word(word, row, col, directions[0])

        raise NoPlacementFoundError(
            f"Could not place '{word}' in {self.width}x{self.height} grid", word=word
        )

    def fill_blanks(self, rng: random.Random):
        """Assign a random lowercase letter to every blank cell."""
        for row, col in np.argwhere(self.grid == BLANK):
            self.grid[row, col] = rng.choice(ALPHABET)

    def read_word(self, row: int, col: int, direction: Direction, length: int) -> str:
        """Read `length` characters from (row, col) along direction."""
        dr, dc = direction.delta
        return "".join(self.grid[row + i * dr, col + i * dc] for i in range(length))

    def intact_placements(self) -> List[WordPlacement]:
        """Placements whose letters are all still present in the grid."""
        return [
            placement
            for placement in self.placements
            if self.read_word(placement.row, placement.col, placement.direction, len(placement.text))
            == placement.text
        ]

    def to_list(self) -> List[List[str]]:
        return self.grid.tolist()


def create_puzzle(
    words: Sequence[str],
    width: int,
    height: int,
    rng: Optional[random.Random] = None,
    strict_diagonals: bool = False,
    min_word_length: int = MIN_WORD_LENGTH,
) -> WordSearchGrid:
    """
    Place every word into a new grid, then fill the remaining blanks.

    Every word is length-checked before the grid is touched.

    Raises:
        InvalidArgumentError: If any word has an unsupported length
        NoPlacementFoundError: If a word cannot be placed
    """
    rng = rng if rng is not None else random.Random()
    puzzle = WordSearchGrid(width, height)

    for word in words:
        puzzle.validate_word(word, min_word_length)

    for word in words:
        placement = puzzle.place(word, rng, strict_diagonals)
        logger.debug(
            f"Placed '{word}' at ({placement.row}, {placement.col}) going {placement.direction.value}"
        )

    puzzle.fill_blanks(rng)
    return puzzle


class WordSearchGenerator(BaseGenerator):
    """
    Generates word-search puzzles of a fixed grid size.

    Settings not passed explicitly come from the generation config
    (WORDSEARCH_DEFAULT_WIDTH/HEIGHT, WORDSEARCH_STRICT_DIAGONALS,
    WORDSEARCH_MIN_WORD_LENGTH).
    """

    puzzle_type = "wordsearch"

    def __init__(
        self,
        width: Optional[int] = None,
        height: Optional[int] = None,
        strict_diagonals: Optional[bool] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize word-search generator.

        Args:
            width: Grid width
            height: Grid height
            strict_diagonals: Check diagonal cells before offering a diagonal
            rng: Random generator shared by every pass of this generator
        """
        super().__init__(rng)
        self.config = get_config()
        self.generation_config = self.config.get_generation_config()

        self.width = width if width is not None else self.config.get_int("WORDSEARCH_DEFAULT_WIDTH", 20)
        self.height = height if height is not None else self.config.get_int("WORDSEARCH_DEFAULT_HEIGHT", 20)
        if self.width < 1 or self.height < 1:
            raise InvalidArgumentError(
                f"Word-search grid must be at least 1x1, got {self.width}x{self.height}"
            )

        self.strict_diagonals = (
            strict_diagonals
            if strict_diagonals is not None
            else self.generation_config["wordsearch_strict_diagonals"]
        )
        self.min_word_length = max(
            MIN_WORD_LENGTH, self.generation_config["wordsearch_min_word_length"]
        )

        logger.info(
            f"Initialized WordSearchGenerator for {self.width}x{self.height} grid "
            f"(strict diagonals: {self.strict_diagonals})"
        )

    def generate_puzzle(self, puzzle_id: str, words: Sequence[str] = (), **kwargs) -> WordSearchPuzzle:
        """
        Place the words and fill the grid.

        Args:
            puzzle_id: Identifier for the puzzle
            words: Case-normalized words in placement priority order

        Returns:
            WordSearchPuzzle with the filled grid and word positions
        """
        if not words:
            raise InvalidArgumentError("A word-search puzzle needs at least one word")

        grid = create_puzzle(
            words,
            self.width,
            self.height,
            rng=self.rng,
            strict_diagonals=self.strict_diagonals,
            min_word_length=self.min_word_length,
        )

        intact = grid.intact_placements()
        if len(intact) < len(grid.placements):
            logger.warning(
                f"{len(grid.placements) - len(intact)} word(s) in {puzzle_id} were "
                f"partly overwritten by a later diagonal placement"
            )

        hidden_words = [
            HiddenWord(
                number=placement.number,
                word=placement.text,
                direction=placement.direction.value,
                start_row=placement.row,
                start_col=placement.col,
            )
            for placement in grid.placements
        ]

        logger.info(f"Generated word-search {puzzle_id}: {len(hidden_words)} words placed")

        return WordSearchPuzzle(
            puzzle_id=puzzle_id,
            grid=grid.grid,
            words=hidden_words,
            size=(self.width, self.height),
        )
