"""
Result models for the pipeline stages.

Each result converts to the response body the admin back-office expects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .sake import MatchDecision, ScrapedSake


@dataclass
class ScrapeResult:
    """Records extracted from one catalog page."""

    sakes: List[ScrapedSake] = field(default_factory=list)
    page: int = 1
    # Only a single page is ever fetched
    has_more: bool = False

    @property
    def total_found(self) -> int:
        return len(self.sakes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sakes": [sake.to_dict() for sake in self.sakes],
            "totalFound": self.total_found,
            "page": self.page,
            "hasMore": self.has_more,
        }


@dataclass
class MatchResult:
    """
    Matcher output partitioned for review.

    updates holds matched decisions that still carry an image to contribute;
    matched decisions without one are counted in total_matched only.
    """

    updates: List[MatchDecision] = field(default_factory=list)
    new_sakes: List[MatchDecision] = field(default_factory=list)
    total_matched: int = 0

    @property
    def total_new(self) -> int:
        return len(self.new_sakes)

    @property
    def total_updates(self) -> int:
        return len(self.updates)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "updates": [decision.to_dict() for decision in self.updates],
            "newSakes": [decision.to_dict() for decision in self.new_sakes],
            "totalMatched": self.total_matched,
            "totalNew": self.total_new,
            "totalUpdates": self.total_updates,
        }


@dataclass
class ImportResult:
    """Outcome of a best-effort import batch."""

    updated_count: int = 0
    inserted_count: int = 0
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "success": True,
            "updatedCount": self.updated_count,
            "insertedCount": self.inserted_count,
        }
        if self.errors:
            data["errors"] = list(self.errors)
        return data
