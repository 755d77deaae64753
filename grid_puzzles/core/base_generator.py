"""
Minimal base generator interface for all puzzle types.

This module provides the essential generator contract without unnecessary complexity.
"""

import random
from abc import ABC, abstractmethod
from typing import Optional

from .base_puzzle import BasePuzzle


class BaseGenerator(ABC):
    """
    Base class for all puzzle generators.

    Holds the random generator handle that every randomized step draws from,
    so a seeded handle makes a whole generation pass reproducible.
    """

    puzzle_type: str = ""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

    @abstractmethod
    def generate_puzzle(self, puzzle_id: str, **kwargs) -> BasePuzzle:
        """
        Run one generation pass.

        Args:
            puzzle_id: Identifier given to the finished puzzle
            **kwargs: Puzzle-type specific inputs (e.g. the word list)

        Returns:
            The finished puzzle

        Raises:
            PuzzleGenerationError: If the pass fails
        """
        pass
