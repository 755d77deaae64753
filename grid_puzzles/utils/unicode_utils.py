"""
Unicode utility functions for word-search word lists.

This module provides Unicode-aware text processing functions used to
case-normalize words before they reach the placement engine.
"""

import unicodedata
from typing import Iterable, List, Optional


def is_alphabetic_unicode(text: str) -> bool:
    """
    Check if text contains only Unicode letters (any script).

    Combining marks (categories Mc/Mn) are accepted because they are
    essential parts of words in many scripts.

    Args:
        text: Text to check

    Returns:
        True if text contains only Unicode letters and combining marks, False otherwise
    """
    if not text:
        return False

    for char in text:
        category = unicodedata.category(char)
        if not (category.startswith("L") or category in ("Mc", "Mn")):
            return False

    return True


def clean_unicode_text(text: Optional[str]) -> Optional[str]:
    """
    Clean and normalize Unicode text.

    Args:
        text: Input text to clean

    Returns:
        Cleaned text or None if input is invalid
    """
    if not text or not isinstance(text, str):
        return None

    # NFC keeps accented letters as single code points
    cleaned = unicodedata.normalize("NFC", text.strip())

    return cleaned if cleaned else None


def normalize_word(text: Optional[str]) -> Optional[str]:
    """
    Normalize a candidate word for grid placement.

    Args:
        text: Raw word as supplied by the user

    Returns:
        Lowercase NFC word, or None if it is empty or not purely alphabetic
    """
    cleaned = clean_unicode_text(text)
    if cleaned is None or not is_alphabetic_unicode(cleaned):
        return None
    return cleaned.lower()


def normalize_word_list(words: Iterable[str]) -> List[str]:
    """Normalize words, dropping invalid entries and later duplicates."""
    seen = set()
    normalized = []
    for word in words:
        norm = normalize_word(word)
        if norm is None or norm in seen:
            continue
        seen.add(norm)
        normalized.append(norm)
    return normalized
