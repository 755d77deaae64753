"""
Test suite for grid_puzzles.generate batch components.
Tests PuzzleEntry validation and serialization, the PuzzleBuilder retry
policy, statistics and file output, and the command-line entry point.
"""

import pytest
import tempfile
import json
import random
from pathlib import Path
from unittest.mock import patch

from grid_puzzles.core.base_puzzle import HiddenWord, WordSearchPuzzle
from grid_puzzles.core.errors import (
    InvalidArgumentError,
    NoPlacementFoundError,
    SearchExhaustedError,
)
from grid_puzzles.generate.puzzle_entry import PuzzleEntry
from grid_puzzles.generate.puzzle_builder import PuzzleBuilder
from grid_puzzles.generate.sudoku_generator import SudokuGenerator
from grid_puzzles.generate.wordsearch_generator import WordSearchGenerator

import run_puzzle_generator


def make_wordsearch_entry(**overrides):
    fields = dict(
        id="wordsearch_3x2_001",
        puzzle_type="wordsearch",
        grid=[["c", "a", "t"], ["x", "o", "q"]],
        solution_grid=[["c", "a", "t"], ["x", "o", "q"]],
        width=3,
        height=2,
        words=[
            {"number": 1, "word": "cat", "direction": "right", "start_row": 0, "start_col": 0, "length": 3},
            {"number": 2, "word": "ao", "direction": "down", "start_row": 0, "start_col": 1, "length": 2},
        ],
        filled_cells=6,
    )
    fields.update(overrides)
    return PuzzleEntry(**fields)


class TestPuzzleEntry:
    """Test PuzzleEntry dataclass functionality."""

    def test_from_sudoku_puzzle(self):
        """Sudoku puzzles convert with clue counts and a consistent solution."""
        puzzle = SudokuGenerator(hidden_count=45, max_attempts=100_000, rng=random.Random(1)).generate_puzzle("sudoku_9x9_001")

        entry = PuzzleEntry.from_puzzle(puzzle, generation_info={"attempt": 1})

        assert entry.id == "sudoku_9x9_001"
        assert entry.puzzle_type == "sudoku"
        assert (entry.width, entry.height) == (9, 9)
        assert entry.hidden_count == 45
        assert entry.filled_cells == 36
        assert entry.words == []
        assert entry.generation_metadata == {"attempt": 1}
        assert entry.validate_grid_consistency()

    def test_from_wordsearch_puzzle(self):
        puzzle = WordSearchPuzzle(
            puzzle_id="ws",
            grid=[["c", "a", "t"], ["x", "o", "q"]],
            words=[HiddenWord(1, "cat", "right", 0, 0)],
            size=(3, 2),
        )

        entry = PuzzleEntry.from_puzzle(puzzle)

        assert entry.puzzle_type == "wordsearch"
        assert entry.solution_grid == entry.grid
        assert entry.filled_cells == 6
        assert entry.words[0]["word"] == "cat"

    def test_from_unknown_object(self):
        with pytest.raises(TypeError):
            PuzzleEntry.from_puzzle(object())

    def test_serialization(self):
        """JSON output round-trips through json.loads."""
        entry = make_wordsearch_entry()
        reconstructed = json.loads(entry.to_json())

        assert reconstructed["id"] == "wordsearch_3x2_001"
        assert reconstructed["grid"][0] == ["c", "a", "t"]
        assert len(reconstructed["words"]) == 2

    def test_validation_errors(self):
        with pytest.raises(ValueError, match="empty"):
            make_wordsearch_entry(id="")
        with pytest.raises(ValueError, match="Unknown puzzle type"):
            make_wordsearch_entry(puzzle_type="crossword")
        with pytest.raises(ValueError, match="dimensions"):
            make_wordsearch_entry(width=4)
        with pytest.raises(ValueError, match="at least one word"):
            make_wordsearch_entry(words=[])
        with pytest.raises(ValueError, match="Hidden count"):
            make_wordsearch_entry(hidden_count=7)

    def test_grid_consistency_detects_mismatch(self):
        solution = [[(r * 3 + r // 3 + c) % 9 + 1 for c in range(9)] for r in range(9)]
        grid = [row[:] for row in solution]
        grid[0][0] = solution[0][1]

        entry = PuzzleEntry(
            id="bad",
            puzzle_type="sudoku",
            grid=grid,
            solution_grid=solution,
            width=9,
            height=9,
        )
        assert not entry.validate_grid_consistency()

    def test_statistics(self):
        stats = make_wordsearch_entry().get_statistics()

        assert stats["grid_size"] == "3x2"
        assert stats["fill_ratio"] == "100.0%"
        assert stats["word_count"] == 2
        assert stats["direction_balance"] == {"right": 1, "down": 1}
        assert stats["letters_in_words"] == 5


class TestPuzzleBuilder:
    """Test PuzzleBuilder batch generation."""

    def test_sudoku_batch(self):
        builder = PuzzleBuilder(seed=5)
        puzzles = builder.generate_sudoku_batch(count=2, hidden_count=30)

        assert [p.id for p in puzzles] == ["sudoku_9x9_001", "sudoku_9x9_002"]
        assert all(p.filled_cells == 51 for p in puzzles)
        assert puzzles[0].generation_metadata["attempt"] >= 1
        assert puzzles[0].generation_metadata["seed"] == 5

        stats = builder.get_generation_statistics()
        assert stats["total_attempts"] == 2
        assert stats["successful_generations"] == 2
        assert stats["failed_generations"] == 0
        assert stats["success_rate"] == "100.0%"
        assert stats["average_filled_cells"] == "51.0"
        assert stats["type_distribution"] == {"sudoku": 2}

    def test_seeded_batches_repeat(self):
        first = PuzzleBuilder(seed=8).generate_sudoku_batch(count=1)
        second = PuzzleBuilder(seed=8).generate_sudoku_batch(count=1)
        assert first[0].grid == second[0].grid

    def test_wordsearch_batch_normalizes_words(self):
        builder = PuzzleBuilder(seed=3)
        puzzles = builder.generate_wordsearch_batch(
            words=["Cat", "cat", "DOG", "  bird ", "x1"], width=8, height=8, count=1
        )

        assert len(puzzles) == 1
        entry = puzzles[0]
        assert entry.id == "wordsearch_8x8_001"
        assert [w["word"] for w in entry.words] == ["cat", "dog", "bird"]
        assert builder.get_generation_statistics()["average_word_count"] == "3.0"

    def test_wordsearch_batch_without_usable_words(self):
        builder = PuzzleBuilder(seed=3)
        with pytest.raises(InvalidArgumentError):
            builder.generate_wordsearch_batch(words=["1", " "], width=5, height=5)

    def test_invalid_hidden_count_not_retried(self):
        builder = PuzzleBuilder(seed=1)
        with patch.object(SudokuGenerator, "generate_puzzle", side_effect=InvalidArgumentError("bad")) as mock_generate:
            with pytest.raises(InvalidArgumentError):
                builder.generate_sudoku_batch(count=1, hidden_count=90)

        assert mock_generate.call_count == 1
        assert builder.get_generation_statistics()["failed_generations"] == 1

    def test_out_of_range_hidden_count_raises(self):
        with pytest.raises(InvalidArgumentError):
            PuzzleBuilder(seed=1).generate_sudoku_batch(count=1, hidden_count=90)

    def test_failed_generation_retried_then_given_up(self):
        """A generation failing every attempt is counted and the batch goes on."""
        builder = PuzzleBuilder(seed=1)
        with patch.object(SudokuGenerator, "generate_puzzle", side_effect=SearchExhaustedError("boom")) as mock_generate:
            puzzles = builder.generate_sudoku_batch(count=2)

        assert puzzles == []
        assert mock_generate.call_count == 2 * builder.max_generation_attempts
        stats = builder.get_generation_statistics()
        assert stats["failed_generations"] == 2
        assert stats["success_rate"] == "0.0%"

    def test_retry_succeeds(self):
        puzzle = SudokuGenerator(hidden_count=20, max_attempts=100_000, rng=random.Random(4)).generate_puzzle("sudoku_9x9_001")
        builder = PuzzleBuilder(seed=1)

        with patch.object(
            SudokuGenerator, "generate_puzzle", side_effect=[SearchExhaustedError("boom"), puzzle]
        ):
            puzzles = builder.generate_sudoku_batch(count=1)

        assert len(puzzles) == 1
        assert puzzles[0].generation_metadata["attempt"] == 2
        assert builder.get_generation_statistics()["retried_attempts"] == 1

    def test_wordsearch_placement_failure_is_retried(self):
        builder = PuzzleBuilder(seed=1)
        with patch.object(
            WordSearchGenerator,
            "generate_puzzle",
            side_effect=NoPlacementFoundError("no room", word="cat"),
        ) as mock_generate:
            puzzles = builder.generate_wordsearch_batch(words=["cat"], width=5, height=5)

        assert puzzles == []
        assert mock_generate.call_count == builder.max_generation_attempts

    def test_save_to_output_dir(self):
        builder = PuzzleBuilder(seed=2)
        with tempfile.TemporaryDirectory() as tmpdir:
            builder.generate_wordsearch_batch(
                words=["iron", "oxide"], width=6, height=6, count=2, output_dir=tmpdir
            )

            files = sorted(p.name for p in Path(tmpdir).glob("*.json"))
            assert files == ["wordsearch_6x6_001.json", "wordsearch_6x6_002.json"]

            with open(Path(tmpdir) / files[0], "r", encoding="utf-8") as f:
                data = json.load(f)
            assert data["puzzle_type"] == "wordsearch"
            assert len(data["grid"]) == 6

    def test_clear_caches(self):
        builder = PuzzleBuilder(seed=2)
        builder.generate_sudoku_batch(count=1, hidden_count=10)
        assert builder.generators
        builder.clear_caches()
        assert builder.generators == {}


class TestCommandLine:
    """Test the run_puzzle_generator entry point."""

    def test_sudoku_json_to_stdout(self, capsys):
        success = run_puzzle_generator.main(["sudoku", "--count", "1", "--hide", "40", "--seed", "3"])

        assert success
        puzzles = json.loads(capsys.readouterr().out)
        assert len(puzzles) == 1
        assert puzzles[0]["id"] == "sudoku_9x9_001"
        assert puzzles[0]["hidden_count"] == 40

    def test_wordsearch_from_file(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            word_file = Path(tmpdir) / "words.txt"
            word_file.write_text("# hidden words\nIron\n\nOxide\n", encoding="utf-8")

            success = run_puzzle_generator.main(
                ["wordsearch", "--word-file", str(word_file), "--width", "7", "--height", "7", "--seed", "1"]
            )

        assert success
        puzzles = json.loads(capsys.readouterr().out)
        assert [w["word"] for w in puzzles[0]["words"]] == ["iron", "oxide"]

    def test_word_too_long_fails(self, capsys):
        success = run_puzzle_generator.main(
            ["wordsearch", "--words", "elephant", "--width", "4", "--height", "4"]
        )
        assert not success
        assert capsys.readouterr().out == ""

    def test_load_words_from_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            word_file = Path(tmpdir) / "words.txt"
            word_file.write_text("alpha\n  beta  \n# gamma\n", encoding="utf-8")
            assert run_puzzle_generator.load_words_from_file(str(word_file)) == ["alpha", "beta"]
