"""
Test suite for grid_puzzles.utils.
Tests configuration loading and word normalization.
"""

import os
import tempfile

import pytest

from grid_puzzles.utils.config_loader import ConfigLoader, get_config, reload_config
from grid_puzzles.utils.unicode_utils import (
    is_alphabetic_unicode,
    clean_unicode_text,
    normalize_word,
    normalize_word_list,
)


class TestConfigLoader:
    """Test ConfigLoader parsing and defaults."""

    @pytest.fixture
    def config_path(self):
        """Temporary config file with overrides and malformed lines."""
        with tempfile.NamedTemporaryFile(
            "w", suffix=".txt", delete=False, encoding="utf-8"
        ) as f:
            f.write("# test configuration\n")
            f.write("SUDOKU_HIDDEN_COUNT=45\n")
            f.write("WORDSEARCH_STRICT_DIAGONALS=true\n")
            f.write("DEFAULT_SEED=42\n")
            f.write("this line has no separator\n")
            f.write("RATIO=-0.5\n")
            f.write("LABEL = grid puzzles\n")
            path = f.name
        yield path
        os.unlink(path)

    def test_file_overrides_defaults(self, config_path):
        config = ConfigLoader(config_file=config_path)

        assert config.get_int("SUDOKU_HIDDEN_COUNT") == 45
        assert config.get_bool("WORDSEARCH_STRICT_DIAGONALS") is True
        assert config.get_float("RATIO") == -0.5
        assert config.get_string("LABEL") == "grid puzzles"
        # untouched keys keep their defaults
        assert config.get_int("SUDOKU_MAX_ATTEMPTS") == 2000

    def test_grouped_settings(self, config_path):
        config = ConfigLoader(config_file=config_path)

        generation = config.get_generation_config()
        assert generation["sudoku_hidden_count"] == 45
        assert generation["wordsearch_strict_diagonals"] is True
        assert generation["max_generation_attempts"] == 5

        cli = config.get_cli_defaults()
        assert cli["hide"] == 45
        assert cli["seed"] == "42"

    def test_missing_file_uses_defaults(self):
        config = ConfigLoader(config_file="no_such_puzzle_config.txt")

        assert config.get_int("WORDSEARCH_DEFAULT_WIDTH") == 20
        assert config.get_bool("WORDSEARCH_STRICT_DIAGONALS") is False
        assert config.get_cli_defaults()["seed"] is None

    def test_typed_getter_fallbacks(self, config_path):
        config = ConfigLoader(config_file=config_path)

        assert config.get_int("LABEL", 7) == 7
        assert config.get("UNKNOWN_KEY", "fallback") == "fallback"

    def test_global_instance(self):
        config = reload_config()
        assert get_config() is config


class TestWordNormalization:
    """Test Unicode-aware word normalization."""

    def test_is_alphabetic_unicode(self):
        assert is_alphabetic_unicode("swallow")
        assert is_alphabetic_unicode("café")
        assert not is_alphabetic_unicode("iron2")
        assert not is_alphabetic_unicode("two words")
        assert not is_alphabetic_unicode("")

    def test_clean_unicode_text(self):
        assert clean_unicode_text("  velocity \n") == "velocity"
        assert clean_unicode_text("   ") is None
        assert clean_unicode_text(None) is None
        # decomposed e + combining acute becomes a single code point
        assert clean_unicode_text("cafe\u0301") == "caf\u00e9"

    def test_normalize_word(self):
        assert normalize_word("  Airspeed ") == "airspeed"
        assert normalize_word("UNLADEN") == "unladen"
        assert normalize_word("oxide!") is None
        assert normalize_word("") is None

    def test_normalize_word_list(self):
        """Invalid entries and later duplicates are dropped, order is kept."""
        words = ["Iron", "oxide", "IRON", "", "x-ray", "Swallow"]
        assert normalize_word_list(words) == ["iron", "oxide", "swallow"]
