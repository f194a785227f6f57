"""
Data models for the catalog import pipeline.

This module contains data classes and their wire (JSON) conversions.
"""

from .results import ImportResult, MatchResult, ScrapeResult
from .sake import CatalogEntry, MatchDecision, SakeRow, ScrapedSake

__all__ = [
    'ScrapedSake',
    'MatchDecision',
    'CatalogEntry',
    'SakeRow',
    'ScrapeResult',
    'MatchResult',
    'ImportResult',
]
