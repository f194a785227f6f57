"""
Extraction Vocabulary

Compiles the keyword lists from config/sake_vocabulary.yaml into the
regular expressions the record extractor uses. Alternations keep the
configured order, so at any position in the text the first listed phrase
wins (e.g. "Junmai Daiginjo" before "Junmai").
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from ..common.config_loader import load_sake_vocabulary


# Matches nothing, so a missing keyword list disables its rule
_NEVER_MATCH = '(?!)'


def _alternation(words: List[str]) -> str:
    if not words:
        return _NEVER_MATCH
    return '|'.join(re.escape(word) for word in words)


class SakeVocabulary:
    """
    Compiled patterns for block splitting, line classification and keyword fields.

    Usage:
        vocab = SakeVocabulary()                  # loads config/sake_vocabulary.yaml
        vocab = SakeVocabulary(config={...})      # explicit lists (tests)
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        if config is None:
            config = load_sake_vocabulary()

        self.lead_in_styles: List[str] = list(config.get('lead_in_styles', []))
        self.lead_in_bodies: List[str] = list(config.get('lead_in_bodies', []))
        self.ui_chrome_words: List[str] = list(config.get('ui_chrome_words', []))
        self.name_skip_prefixes: List[str] = list(config.get('name_skip_prefixes', []))
        self.brewery_suffixes: List[str] = list(config.get('brewery_suffixes', []))
        self.sake_grades: List[str] = list(config.get('sake_grades', []))
        self.taste_profiles: List[str] = list(config.get('taste_profiles', []))
        self.food_pairings: List[str] = list(config.get('food_pairings', []))

        styles = _alternation(self.lead_in_styles)
        bodies = _alternation(self.lead_in_bodies)

        # Zero-width split point before every "Modern-" / "Classic-"
        self.block_start_re = re.compile(rf'(?=(?:{styles})-)')
        self.lead_in_label_re = re.compile(rf'^(?:{styles})-(?:{bodies})', re.IGNORECASE)

        # "Yonetsuru Shuzo\-Yamagata": markdown may escape the hyphen
        suffixes = _alternation(self.brewery_suffixes)
        self.brewery_prefecture_re = re.compile(
            rf'^([A-Za-z\s]+(?:{suffixes})?)\s*\\?-\s*([A-Za-z]+)$',
            re.IGNORECASE,
        )

        self.english_name_re = re.compile(r'^[A-Z][A-Za-z0-9\s"\'()-]+$')
        self.name_skip_re = re.compile(rf'^(?:{_alternation(self.name_skip_prefixes)})', re.IGNORECASE)

        self.grade_re = re.compile(rf'({_alternation(self.sake_grades)})', re.IGNORECASE)
        self.taste_re = re.compile(rf'({_alternation(self.taste_profiles)})', re.IGNORECASE)
        self.food_re = re.compile(rf'({_alternation(self.food_pairings)})', re.IGNORECASE)
