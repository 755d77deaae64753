"""
Utilities package for the grid puzzle generators.

This package provides word normalization and configuration management.
"""

from .unicode_utils import (
    is_alphabetic_unicode,
    clean_unicode_text,
    normalize_word,
    normalize_word_list,
)
from .config_loader import ConfigLoader, get_config, reload_config

__all__ = [
    'is_alphabetic_unicode', 'clean_unicode_text', 'normalize_word',
    'normalize_word_list', 'ConfigLoader', 'get_config', 'reload_config'
]
