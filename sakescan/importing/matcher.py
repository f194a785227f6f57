"""
Sake Matcher

Classifies scraped records against a snapshot of the existing catalog:

- matched: the record is the same product as an existing entry. It becomes
  an update candidate only when it can contribute an image the entry lacks.
- new: no entry matched; the record is an insert candidate.

Matching strategies, checked per catalog entry in fetch order (first entry
satisfying any of them wins):
1. Name containment, case-insensitive, either direction
2. Japanese name containment, either direction
3. Brewery containment combined with the name condition

Strategy 3 also requires the name condition, so it never matches on its
own; it is kept for parity with the established matching rules.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ..models import CatalogEntry, MatchDecision, MatchResult, ScrapedSake

logger = logging.getLogger(__name__)


def _contains_either_way(a: str, b: str) -> bool:
    return a in b or b in a


def names_match(sake: ScrapedSake, entry: CatalogEntry) -> bool:
    """Case-insensitive containment of either name in the other. Blank names never match."""
    scraped = (sake.name or "").strip().lower()
    existing = (entry.name or "").strip().lower()
    if not scraped or not existing:
        return False
    return _contains_either_way(scraped, existing)


def japanese_names_match(sake: ScrapedSake, entry: CatalogEntry) -> bool:
    """Both Japanese names present and one contains the other."""
    if not sake.name_japanese or not entry.name_japanese:
        return False
    return _contains_either_way(sake.name_japanese, entry.name_japanese)


def breweries_match(sake: ScrapedSake, entry: CatalogEntry) -> bool:
    """Existing brewery contains the scraped brewery (case-insensitive)."""
    if not sake.brewery or not entry.brewery:
        return False
    return sake.brewery.lower() in entry.brewery.lower()


def is_same_sake(sake: ScrapedSake, entry: CatalogEntry) -> bool:
    name_match = names_match(sake, entry)
    return (
        name_match
        or japanese_names_match(sake, entry)
        or (breweries_match(sake, entry) and name_match)
    )


class SakeMatcher:
    """
    Matches scraped records to catalog entries.

    Stateless: the same records and snapshot always give the same result,
    and neither input is modified.

    Usage:
        matcher = SakeMatcher()
        result = matcher.match(scraped_sakes, catalog.fetch_match_snapshot())
        result.updates, result.new_sakes
    """

    def find_match(self, sake: ScrapedSake, catalog: List[CatalogEntry]) -> Optional[CatalogEntry]:
        """Return the first catalog entry judged to be the same sake, or None."""
        for entry in catalog:
            if is_same_sake(sake, entry):
                return entry
        return None

    def classify(self, sake: ScrapedSake, catalog: List[CatalogEntry]) -> MatchDecision:
        """
        Classify one record.

        A matched record keeps its image only if the entry has neither a
        label nor a bottle image, so curated images are never overwritten.
        """
        entry = self.find_match(sake, catalog)
        if entry is None:
            return MatchDecision.new(sake)
        return MatchDecision.matched(sake, existing_id=entry.id, keep_image=not entry.has_image)

    def match(self, sakes: List[ScrapedSake], catalog: List[CatalogEntry]) -> MatchResult:
        """
        Classify every record and partition the decisions for review.

        Matched decisions without an image are counted but not listed:
        they have nothing to apply.
        """
        decisions = [self.classify(sake, catalog) for sake in sakes]

        matched = [d for d in decisions if not d.is_new]
        result = MatchResult(
            updates=[d for d in matched if d.image_url],
            new_sakes=[d for d in decisions if d.is_new],
            total_matched=len(matched),
        )
        logger.info("Matched %d of %d sakes (%d image updates, %d new)",
                    result.total_matched, len(sakes), result.total_updates, result.total_new)
        return result
