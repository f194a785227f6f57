"""
Catalog Scraper

Runs the scrape half of the import pipeline:

    fetch page -> extract records -> attach images -> dedupe by name

Each call starts from scratch; nothing is cached between runs.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..extraction import (
    PositionalImageAssigner,
    SakeRecordExtractor,
    dedupe_by_name,
    extract_product_image_urls,
)
from ..models import ScrapeResult
from .catalog_fetcher import CatalogPageFetcher
from .firecrawl_client import ScrapedPage

logger = logging.getLogger(__name__)


class CatalogScraper:
    """
    Scrapes the catalog listing into deduplicated records.

    Usage:
        scraper = CatalogScraper(CatalogPageFetcher(client))
        result = scraper.scrape(prefecture="Niigata")
        result.sakes
    """

    def __init__(
        self,
        fetcher: CatalogPageFetcher,
        extractor: Optional[SakeRecordExtractor] = None,
        image_assigner: Optional[PositionalImageAssigner] = None,
    ):
        self.fetcher = fetcher
        self.extractor = extractor or SakeRecordExtractor()
        self.image_assigner = image_assigner or PositionalImageAssigner()

    def scrape(
        self,
        category: Optional[str] = None,
        prefecture: Optional[str] = None,
        page: int = 1,
    ) -> ScrapeResult:
        """Fetch and parse one catalog page. Fetch errors propagate."""
        snapshot = self.fetcher.fetch(category=category, prefecture=prefecture, page=page)
        return self.parse(snapshot, page=page)

    def parse(self, snapshot: ScrapedPage, page: int = 1) -> ScrapeResult:
        """Parse a pre-fetched snapshot without a network request."""
        sakes = self.extractor.extract(snapshot.markdown)
        image_urls = extract_product_image_urls(snapshot.html)
        self.image_assigner.assign(sakes, image_urls)

        unique = dedupe_by_name(sakes)
        logger.info("Found %d sakes (%d before dedupe), %d product images",
                    len(unique), len(sakes), len(image_urls))

        return ScrapeResult(sakes=unique, page=page, has_more=False)
