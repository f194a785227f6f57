"""
Catalog import modules.

Modules:
    matcher - SakeMatcher (new vs update candidate classification)
    importer - SakeImporter (best-effort apply of selected decisions)
    report - Text summaries for the review step
"""

from .importer import SakeImporter, utc_timestamp
from .matcher import SakeMatcher, is_same_sake
from .report import format_import_summary, format_match_summary

__all__ = [
    'SakeMatcher',
    'is_same_sake',
    'SakeImporter',
    'utc_timestamp',
    'format_match_summary',
    'format_import_summary',
]
