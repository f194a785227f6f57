"""
Record extraction from scraped catalog pages.

Modules:
    record_extractor - SakeRecordExtractor for catalog page Markdown
    line_classifiers - Ordered per-line classifier chain
    keyword_fields - Grade, taste and food pairing keyword matching
    vocabulary - Compiled extraction vocabulary from config
    image_extractor - Product image URLs and positional assignment
    dedupe - First-wins deduplication by name
"""

from .dedupe import dedupe_by_name
from .image_extractor import PositionalImageAssigner, extract_product_image_urls
from .keyword_fields import match_food_pairings, match_grade, match_taste
from .line_classifiers import (
    BlockFields,
    LineClassifier,
    classify_lines,
    default_classifiers,
)
from .record_extractor import SakeRecordExtractor
from .vocabulary import SakeVocabulary

__all__ = [
    'SakeRecordExtractor',
    'SakeVocabulary',
    'BlockFields',
    'LineClassifier',
    'classify_lines',
    'default_classifiers',
    'match_grade',
    'match_taste',
    'match_food_pairings',
    'extract_product_image_urls',
    'PositionalImageAssigner',
    'dedupe_by_name',
]
