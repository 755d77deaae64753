"""
Puzzle Builder - Batch Orchestrator for Grid Puzzle Generation

This module coordinates batch generation of Sudoku and word-search puzzles:
word normalization, per-puzzle retries, conversion to PuzzleEntry records,
running statistics and optional JSON file output.
"""

import logging
import random
from typing import List, Dict, Any, Optional, Sequence
from pathlib import Path
import json
from datetime import datetime

from .sudoku_generator import SudokuGenerator
from .wordsearch_generator import WordSearchGenerator
from .puzzle_entry import PuzzleEntry
from ..core.base_generator import BaseGenerator
from ..core.errors import InvalidArgumentError, PuzzleGenerationError
from ..utils.config_loader import get_config
from ..utils.unicode_utils import normalize_word_list

logger = logging.getLogger(__name__)


class PuzzleBuilder:
    """
    Main orchestrator for batch puzzle generation.

    Handles the complete workflow:
    1. Prepare inputs (word normalization for word-search)
    2. Generate puzzles, retrying failed generations
    3. Convert to PuzzleEntry records
    4. Save to JSON files (optional)
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        """
        Initialize puzzle builder.

        Args:
            seed: Seed for a new random generator (ignored when rng is given)
            rng: Random generator shared by every generator this builder creates
        """
        self.config = get_config()
        self.generation_config = self.config.get_generation_config()
        self.max_generation_attempts = max(1, self.generation_config["max_generation_attempts"])

        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)

        self.generators: Dict[Any, BaseGenerator] = {}  # Cache generators by settings

        # Generation statistics
        self.generation_stats = {
            "total_attempts": 0,
            "successful_generations": 0,
            "failed_generations": 0,
            "retried_attempts": 0,
            "avg_filled_cells": 0.0,
            "avg_word_count": 0.0,
            "type_distribution": {},
        }

        logger.info(
            f"Initialized PuzzleBuilder (seed: {seed}, "
            f"max attempts per puzzle: {self.max_generation_attempts})"
        )

    def generate_sudoku_batch(
        self,
        count: int,
        hidden_count: Optional[int] = None,
        output_dir: Optional[str] = None,
    ) -> List[PuzzleEntry]:
        """
        Generate a batch of masked Sudoku puzzles.

        Args:
            count: Number of puzzles to generate
            hidden_count: Cells to hide per puzzle (config default when None)
            output_dir: Directory to save puzzle JSON files (None to skip)

        Returns:
            List of PuzzleEntry instances

        Raises:
            InvalidArgumentError: If count is negative or hidden_count is out of range
        """
        if count < 0:
            raise InvalidArgumentError(f"Puzzle count must be non-negative, got {count}")

        generator = self._get_sudoku_generator()
        count_to_hide = generator.hidden_count if hidden_count is None else hidden_count

        logger.info(f"Generating {count} Sudoku puzzles (hiding {count_to_hide} cells)")

        generated_puzzles = []
        for i in range(count):
            puzzle_id = self._generate_puzzle_id("sudoku", 9, 9, i + 1)
            entry = self._build_with_retries(
                generator,
                puzzle_id,
                generation_info={"hidden_count": count_to_hide},
                hidden_count=count_to_hide,
            )
            if entry is None:
                continue

            generated_puzzles.append(entry)
            if output_dir:
                self._save_puzzle_to_file(entry, output_dir)

        logger.info(
            f"Sudoku batch complete: {len(generated_puzzles)}/{count} puzzles generated"
        )
        return generated_puzzles

    def generate_wordsearch_batch(
        self,
        words: Sequence[str],
        width: Optional[int] = None,
        height: Optional[int] = None,
        count: int = 1,
        output_dir: Optional[str] = None,
    ) -> List[PuzzleEntry]:
        """
        Generate a batch of word-search puzzles from the same word list.

        Args:
            words: Words to hide, in placement priority order
            width: Grid width (config default when None)
            height: Grid height (config default when None)
            count: Number of puzzles to generate
            output_dir: Directory to save puzzle JSON files (None to skip)

        Returns:
            List of PuzzleEntry instances

        Raises:
            InvalidArgumentError: If no usable word remains after normalization,
                a word does not fit the grid, or count is negative
        """
        if count < 0:
            raise InvalidArgumentError(f"Puzzle count must be non-negative, got {count}")

        words = list(words)
        normalized = normalize_word_list(words)
        dropped = len(words) - len(normalized)
        if dropped:
            logger.warning(f"Dropped {dropped} empty, duplicate or non-alphabetic words")
        if not normalized:
            raise InvalidArgumentError("No usable words to place")

        generator = self._get_wordsearch_generator(width, height)

        logger.info(
            f"Generating {count} word-search puzzles "
            f"({generator.width}x{generator.height}, {len(normalized)} words)"
        )

        generated_puzzles = []
        for i in range(count):
            puzzle_id = self._generate_puzzle_id(
                "wordsearch", generator.width, generator.height, i + 1
            )
            entry = self._build_with_retries(
                generator,
                puzzle_id,
                generation_info={
                    "input_words": len(normalized),
                    "strict_diagonals": generator.strict_diagonals,
                },
                words=normalized,
            )
            if entry is None:
                continue

            generated_puzzles.append(entry)
            if output_dir:
                self._save_puzzle_to_file(entry, output_dir)

        logger.info(
            f"Word-search batch complete: {len(generated_puzzles)}/{count} puzzles generated"
        )
        return generated_puzzles

    def _build_with_retries(
        self,
        generator: BaseGenerator,
        puzzle_id: str,
        generation_info: Dict[str, Any],
        **kwargs,
    ) -> Optional[PuzzleEntry]:
        """
        Run one generation, retrying failures with the shared random generator.

        InvalidArgumentError is not retried. Returns None when every attempt
        fails.
        """
        self.generation_stats["total_attempts"] += 1

        for attempt in range(1, self.max_generation_attempts + 1):
            try:
                puzzle = generator.generate_puzzle(puzzle_id, **kwargs)
            except InvalidArgumentError:
                self.generation_stats["failed_generations"] += 1
                raise
            except PuzzleGenerationError as e:
                logger.warning(
                    f"Attempt {attempt}/{self.max_generation_attempts} for {puzzle_id} failed: {e}"
                )
                if attempt < self.max_generation_attempts:
                    self.generation_stats["retried_attempts"] += 1
                continue

            metadata = {
                "generator": generator.puzzle_type,
                "generation_timestamp": datetime.now().isoformat(),
                "attempt": attempt,
                "seed": self.seed,
            }
            metadata.update(generation_info)

            entry = PuzzleEntry.from_puzzle(puzzle, generation_info=metadata)
            self.generation_stats["successful_generations"] += 1
            self._update_generation_stats(entry)

            logger.info(
                f"✅ Generated {puzzle_id}: {entry.filled_cells} filled cells, "
                f"{len(entry.words)} words"
            )
            return entry

        logger.error(
            f"❌ Failed to generate {puzzle_id} after {self.max_generation_attempts} attempts"
        )
        self.generation_stats["failed_generations"] += 1
        return None

    def _get_sudoku_generator(self) -> SudokuGenerator:
        """Get or create the Sudoku generator."""
        key = ("sudoku",)
        if key not in self.generators:
            self.generators[key] = SudokuGenerator(rng=self.rng)

        return self.generators[key]

    def _get_wordsearch_generator(
        self, width: Optional[int], height: Optional[int]
    ) -> WordSearchGenerator:
        """Get or create generator for specific grid size."""
        key = ("wordsearch", width, height)
        if key not in self.generators:
            self.generators[key] = WordSearchGenerator(width=width, height=height, rng=self.rng)

        return self.generators[key]

    def _generate_puzzle_id(self, puzzle_type: str, width: int, height: int, sequence: int) -> str:
        """Generate unique puzzle identifier."""
        return f"{puzzle_type}_{width}x{height}_{sequence:03d}"

    def _update_generation_stats(self, puzzle_entry: PuzzleEntry):
        """Update running generation statistics."""
        total_successful = self.generation_stats["successful_generations"]

        # Running average for filled cells
        if total_successful == 1:
            self.generation_stats["avg_filled_cells"] = float(puzzle_entry.filled_cells)
        else:
            self.generation_stats["avg_filled_cells"] = (
                self.generation_stats["avg_filled_cells"] * (total_successful - 1)
                + puzzle_entry.filled_cells
            ) / total_successful

        # Running average for word count
        if total_successful == 1:
            self.generation_stats["avg_word_count"] = float(len(puzzle_entry.words))
        else:
            self.generation_stats["avg_word_count"] = (
                self.generation_stats["avg_word_count"] * (total_successful - 1)
                + len(puzzle_entry.words)
            ) / total_successful

        distribution = self.generation_stats["type_distribution"]
        distribution[puzzle_entry.puzzle_type] = distribution.get(puzzle_entry.puzzle_type, 0) + 1

    def _save_puzzle_to_file(self, puzzle_entry: PuzzleEntry, output_dir: str):
        """Save puzzle entry to JSON file."""
        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)

        filename = f"{puzzle_entry.id}.json"
        filepath = output_path / filename

        try:
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(puzzle_entry.to_dict(), f, indent=2, ensure_ascii=False)

            logger.debug(f"Saved puzzle to {filepath}")
        except OSError as e:
            logger.error(f"Failed to save puzzle to {filepath}: {e}")

    def get_generation_statistics(self) -> Dict[str, Any]:
        """Get comprehensive generation statistics."""
        success_rate = (
            (
                self.generation_stats["successful_generations"]
                / self.generation_stats["total_attempts"]
            )
            if self.generation_stats["total_attempts"] > 0
            else 0.0
        )

        return {
            "total_attempts": self.generation_stats["total_attempts"],
            "successful_generations": self.generation_stats["successful_generations"],
            "failed_generations": self.generation_stats["failed_generations"],
            "retried_attempts": self.generation_stats["retried_attempts"],
            "success_rate": f"{success_rate:.1%}",
            "average_filled_cells": f"{self.generation_stats['avg_filled_cells']:.1f}",
            "average_word_count": f"{self.generation_stats['avg_word_count']:.1f}",
            "type_distribution": dict(self.generation_stats["type_distribution"]),
        }

    def clear_caches(self):
        """Drop cached generators."""
        self.generators.clear()
        logger.debug("Cleared generator cache")
