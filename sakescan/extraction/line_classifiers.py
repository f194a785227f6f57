"""
Line Classifiers

Each catalog block is read line by line. A classifier either claims a line
(returns True, optionally filling a field) or passes it to the next
classifier. The default chain, in priority order:

1. LeadInLabelClassifier    - flavor-matrix labels ("Modern-Light"), skipped
2. UIChromeClassifier       - icon/arrow/close page chrome, skipped
3. BreweryPrefectureClassifier - "Brewery\\-Prefecture" lines
4. JapaneseNameClassifier   - first line with Japanese characters
5. EnglishNameClassifier    - first capitalized title-like line

Every field is first-match-wins within a block. A line that looks like
several things only counts for the first classifier that claims it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..common.text_utils import contains_japanese
from .vocabulary import SakeVocabulary


@dataclass
class BlockFields:
    """Line-derived fields collected while reading one block."""
    english_name: str = ""
    japanese_name: str = ""
    brewery: str = ""
    prefecture: str = ""


class LineClassifier:
    """Claim a line for a field, or pass."""

    def claim(self, line: str, fields: BlockFields) -> bool:
        raise NotImplementedError


class LeadInLabelClassifier(LineClassifier):
    def __init__(self, vocabulary: SakeVocabulary):
        self.vocabulary = vocabulary

    def claim(self, line: str, fields: BlockFields) -> bool:
        return bool(self.vocabulary.lead_in_label_re.match(line))


class UIChromeClassifier(LineClassifier):
    def __init__(self, vocabulary: SakeVocabulary):
        self.words = vocabulary.ui_chrome_words

    def claim(self, line: str, fields: BlockFields) -> bool:
        return any(word in line for word in self.words)


class BreweryPrefectureClassifier(LineClassifier):
    """
    Claims "<words> - <word>" lines as brewery and prefecture.

    Later matching lines in the same block are still consumed, but do not
    overwrite the first pair.
    """

    def __init__(self, vocabulary: SakeVocabulary):
        self.vocabulary = vocabulary

    def claim(self, line: str, fields: BlockFields) -> bool:
        match = self.vocabulary.brewery_prefecture_re.match(line)
        if not match:
            return False
        if not fields.brewery:
            fields.brewery = match.group(1).strip()
            fields.prefecture = match.group(2).strip()
        return True


class JapaneseNameClassifier(LineClassifier):
    def claim(self, line: str, fields: BlockFields) -> bool:
        if fields.japanese_name or not contains_japanese(line):
            return False
        fields.japanese_name = line
        return True


class EnglishNameClassifier(LineClassifier):
    """Title-like lines of 4-99 chars that don't start with a grade/taste/food word."""

    MIN_LENGTH = 3
    MAX_LENGTH = 100

    def __init__(self, vocabulary: SakeVocabulary):
        self.vocabulary = vocabulary

    def claim(self, line: str, fields: BlockFields) -> bool:
        if fields.english_name:
            return False
        if not self.MIN_LENGTH < len(line) < self.MAX_LENGTH:
            return False
        if not self.vocabulary.english_name_re.match(line):
            return False
        if self.vocabulary.name_skip_re.match(line):
            return False
        fields.english_name = line
        return True


def default_classifiers(vocabulary: SakeVocabulary) -> List[LineClassifier]:
    """Build the standard classifier chain in priority order."""
    return [
        LeadInLabelClassifier(vocabulary),
        UIChromeClassifier(vocabulary),
        BreweryPrefectureClassifier(vocabulary),
        JapaneseNameClassifier(),
        EnglishNameClassifier(vocabulary),
    ]


def classify_lines(lines: List[str], classifiers: List[LineClassifier]) -> BlockFields:
    """Run every line through the chain until one classifier claims it."""
    fields = BlockFields()
    for line in lines:
        for classifier in classifiers:
            if classifier.claim(line, fields):
                break
    return fields
