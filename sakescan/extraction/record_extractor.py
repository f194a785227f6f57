"""
Sake Record Extractor

Extracts candidate catalog records from the Markdown rendering of a
catalog listing page. Each product card starts with a flavor-matrix
lead-in label ("Modern-Light", "Classic-Rich", ...), followed by the
Japanese name, English name, "Brewery\\-Prefecture" line and keyword
tags for grade, taste and food pairing.

Parsing is heuristic and order-sensitive; see line_classifiers for the
per-line policy.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ..models import ScrapedSake
from .keyword_fields import match_food_pairings, match_grade, match_taste
from .line_classifiers import LineClassifier, classify_lines, default_classifiers
from .vocabulary import SakeVocabulary

logger = logging.getLogger(__name__)


class SakeRecordExtractor:
    """
    Extracts ScrapedSake records from catalog page Markdown.

    Usage:
        extractor = SakeRecordExtractor()
        sakes = extractor.extract(page.markdown)
    """

    # Shorter blocks are stray fragments between cards
    MIN_BLOCK_LENGTH = 20

    def __init__(
        self,
        vocabulary: Optional[SakeVocabulary] = None,
        classifiers: Optional[List[LineClassifier]] = None,
    ):
        """
        Initialize the extractor.

        Args:
            vocabulary: Compiled vocabulary. If None, loads from config.
            classifiers: Line classifier chain. If None, uses the default chain.
        """
        self.vocabulary = vocabulary or SakeVocabulary()
        self.classifiers = classifiers if classifiers is not None else default_classifiers(self.vocabulary)

    def split_blocks(self, markdown: str) -> List[str]:
        """Split Markdown into one block per catalog card."""
        if not markdown:
            return []
        return self.vocabulary.block_start_re.split(markdown)

    def extract_block(self, block: str) -> Optional[ScrapedSake]:
        """
        Extract a single record from one block.

        Returns:
            ScrapedSake, or None if the block has neither an English nor
            a Japanese name
        """
        if len(block) < self.MIN_BLOCK_LENGTH:
            return None

        lines = [line.strip() for line in block.split('\n') if line.strip()]
        fields = classify_lines(lines, self.classifiers)

        name = fields.english_name or fields.japanese_name
        if not name:
            return None

        return ScrapedSake(
            name=name,
            name_japanese=fields.japanese_name or None,
            brewery=fields.brewery or None,
            prefecture=fields.prefecture or None,
            type=match_grade(block, self.vocabulary),
            taste=match_taste(block, self.vocabulary),
            food_pairing=match_food_pairings(block, self.vocabulary),
        )

    def extract(self, markdown: str) -> List[ScrapedSake]:
        """Extract all records from a page, in page order (not deduplicated)."""
        sakes = []
        for block in self.split_blocks(markdown):
            sake = self.extract_block(block)
            if sake is not None:
                sakes.append(sake)

        logger.debug("Extracted %d records from %d characters of markdown",
                     len(sakes), len(markdown or ""))
        return sakes
