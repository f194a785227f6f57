"""
Text Utilities

Helper functions for text classification and cleanup.
"""

import re

# Hiragana, Katakana, CJK Unified Ideographs
JAPANESE_CHAR_RE = re.compile(r'[\u3040-\u309f\u30a0-\u30ff\u4e00-\u9faf]')


def contains_japanese(text: str) -> bool:
    """Return True if text contains any Hiragana, Katakana or Kanji character."""
    if not text:
        return False
    return JAPANESE_CHAR_RE.search(text) is not None


def safe_file_stem(name: str, max_length: int = 30, default: str = "sake") -> str:
    """
    Build a storage-safe file stem from a display name.

    Every character outside [a-z0-9] is replaced by a hyphen after lowercasing,
    then the result is truncated.

    Args:
        name: Display name (may be empty or contain Japanese text)
        max_length: Maximum stem length
        default: Stem used when no name is given

    Returns:
        File stem such as "dassai-23"

    Example:
        >>> safe_file_stem("Dassai 23")
        'dassai-23'
    """
    source = (name or default).lower()
    return re.sub(r'[^a-z0-9]', '-', source)[:max_length]
