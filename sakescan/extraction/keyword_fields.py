"""
Keyword Field Matching

Fills the vocabulary-bound fields of a record (grade, taste profile, food
pairings) by scanning a whole catalog block, independent of line order.
"""

from typing import List, Optional

from .vocabulary import SakeVocabulary


def match_grade(block: str, vocabulary: SakeVocabulary) -> Optional[str]:
    """Return the first sake grade phrase in the block, as written there."""
    match = vocabulary.grade_re.search(block)
    return match.group(1) if match else None


def match_taste(block: str, vocabulary: SakeVocabulary) -> Optional[str]:
    """Return the first taste profile phrase in the block."""
    match = vocabulary.taste_re.search(block)
    return match.group(1) if match else None


def match_food_pairings(block: str, vocabulary: SakeVocabulary) -> List[str]:
    """
    Return every food pairing phrase in the block.

    Duplicates (exact text) are dropped, keeping first-seen order.
    """
    pairings: List[str] = []
    for phrase in vocabulary.food_re.findall(block):
        if phrase not in pairings:
            pairings.append(phrase)
    return pairings
