"""
Configuration Management System for the grid puzzle generators.

This module loads parameters from puzzle_config.txt with type-safe parsing
and default values for every generator setting.

Key Features:
- Type-safe parameter parsing (string, int, float, bool)
- Hierarchical configuration: CLI args → Config file → Defaults
- Automatic project root detection
- Global config singleton via get_config() with reload support
"""

import logging
from pathlib import Path
from typing import Dict, Any, Optional, Union

logger = logging.getLogger(__name__)

__all__ = ["ConfigLoader", "get_config", "reload_config"]


class ConfigLoader:
    """
    Loads and manages configuration parameters for puzzle generation.

    Provides type-safe access to configuration values with defaults.
    """

    def __init__(self, config_file: str = "puzzle_config.txt"):
        """
        Initialize configuration loader.

        Args:
            config_file: Path to configuration file relative to project root
        """
        self.config_file = config_file
        self.config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self):
        """Load configuration from file."""
        current_path = Path(__file__).parent
        config_path = None

        # Search up the directory tree
        for _ in range(5):
            potential_path = current_path / self.config_file
            if potential_path.exists():
                config_path = potential_path
                break
            current_path = current_path.parent

        self._load_defaults()

        if config_path is None:
            logger.warning(f"Config file {self.config_file} not found, using defaults")
            return

        logger.info(f"Loading configuration from {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                for line_num, line in enumerate(f, 1):
                    line = line.strip()

                    # Skip comments and empty lines
                    if not line or line.startswith("#"):
                        continue

                    if "=" not in line:
                        logger.warning(f"Invalid config line {line_num}: {line}")
                        continue

                    key, value = line.split("=", 1)
                    self.config[key.strip()] = self._parse_value(value.strip())

            logger.info(f"Loaded {len(self.config)} configuration parameters")

        except OSError as e:
            logger.error(f"Failed to load config: {e}")
            self._load_defaults()

    def _parse_value(self, value: str) -> Union[str, int, float, bool]:
        """Parse string value to appropriate Python type."""
        if value.lower() in ("true", "false"):
            return value.lower() == "true"

        if value and value.replace(".", "", 1).lstrip("-").isdigit():
            if "." in value:
                return float(value)
            return int(value)

        return value

    def _load_defaults(self):
        """Load default configuration values."""
        self.config = {
            # Sudoku
            "SUDOKU_MAX_ATTEMPTS": 2000,
            "SUDOKU_HIDDEN_COUNT": 60,
            # Word-search
            "WORDSEARCH_DEFAULT_WIDTH": 20,
            "WORDSEARCH_DEFAULT_HEIGHT": 20,
            "WORDSEARCH_MIN_WORD_LENGTH": 2,
            "WORDSEARCH_STRICT_DIAGONALS": False,
            # Batch generation
            "MAX_GENERATION_ATTEMPTS": 5,
            "DEFAULT_PUZZLE_COUNT": 1,
            "DEFAULT_SEED": "",
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration parameter name
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        return self.config.get(key, default)

    def get_int(self, key: str, default: int = 0) -> int:
        """Get integer configuration value."""
        value = self.get(key, default)
        try:
            return int(value)
        except (ValueError, TypeError):
            logger.warning(f"Invalid integer value for {key}: {value}")
            return default

    def get_float(self, key: str, default: float = 0.0) -> float:
        """Get float configuration value."""
        value = self.get(key, default)
        try:
            return float(value)
        except (ValueError, TypeError):
            logger.warning(f"Invalid float value for {key}: {value}")
            return default

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get boolean configuration value."""
        value = self.get(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes", "on")
        return default

    def get_string(self, key: str, default: str = "") -> str:
        """Get string configuration value."""
        value = self.get(key, default)
        return str(value) if value is not None else default

    def get_generation_config(self) -> Dict[str, Any]:
        """Get puzzle generation configuration parameters."""
        return {
            "sudoku_max_attempts": self.get_int("SUDOKU_MAX_ATTEMPTS", 2000),
            "sudoku_hidden_count": self.get_int("SUDOKU_HIDDEN_COUNT", 60),
            "wordsearch_min_word_length": self.get_int(
                "WORDSEARCH_MIN_WORD_LENGTH", 2
            ),
            "wordsearch_strict_diagonals": self.get_bool(
                "WORDSEARCH_STRICT_DIAGONALS", False
            ),
            "max_generation_attempts": self.get_int("MAX_GENERATION_ATTEMPTS", 5),
        }

    def get_cli_defaults(self) -> Dict[str, Any]:
        """Get CLI default values."""
        seed: Optional[str] = self.get_string("DEFAULT_SEED", "") or None
        return {
            "count": self.get_int("DEFAULT_PUZZLE_COUNT", 1),
            "hide": self.get_int("SUDOKU_HIDDEN_COUNT", 60),
            "width": self.get_int("WORDSEARCH_DEFAULT_WIDTH", 20),
            "height": self.get_int("WORDSEARCH_DEFAULT_HEIGHT", 20),
            "seed": seed,
        }


# Global configuration instance
_config = None


def get_config() -> ConfigLoader:
    """Get global configuration instance."""
    global _config
    if _config is None:
        _config = ConfigLoader()
    return _config


def reload_config():
    """Reload configuration from file."""
    global _config
    _config = ConfigLoader()
    return _config
