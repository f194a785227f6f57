"""
Catalog Page Fetcher

Builds the filtered catalog listing URL and fetches a rendered snapshot
through Firecrawl.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import urlencode

from ..common.config_loader import load_import_settings
from .firecrawl_client import FirecrawlClient, ScrapedPage

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_URL = "https://export.sakurasaketen.com/sake"
DEFAULT_FILTER_PARAMS = {
    "category": "Select by Sake Category",
    "prefecture": "Select by Prefecture",
}
DEFAULT_RENDER_WAIT_MS = 3000


def build_catalog_url(
    base_url: str,
    category: Optional[str] = None,
    prefecture: Optional[str] = None,
    filter_params: Optional[Dict[str, str]] = None,
) -> str:
    """
    Append the catalog filter query to a base URL.

    Args:
        base_url: Catalog listing URL
        category: Sake category filter value
        prefecture: Prefecture filter value
        filter_params: Filter name -> query parameter name

    Returns:
        URL with only the given filters, category before prefecture

    Example:
        >>> build_catalog_url("https://shop.example/sake", category="Junmai")
        'https://shop.example/sake?Select+by+Sake+Category=Junmai'
    """
    names = filter_params or DEFAULT_FILTER_PARAMS
    params = []
    if category:
        params.append((names["category"], category))
    if prefecture:
        params.append((names["prefecture"], prefecture))

    if not params:
        return base_url
    return f"{base_url}?{urlencode(params)}"


class CatalogPageFetcher:
    """
    Fetches the catalog listing page.

    Usage:
        fetcher = CatalogPageFetcher(FirecrawlClient(api_key))
        page = fetcher.fetch(category="Junmai Daiginjo")
    """

    def __init__(
        self,
        client: FirecrawlClient,
        settings: Optional[Dict[str, Any]] = None,
    ):
        """
        Args:
            client: Firecrawl client
            settings: Import settings dict. If None, loads from config.
        """
        if settings is None:
            settings = load_import_settings()

        self.client = client
        self.catalog_url = settings.get("catalog_url", DEFAULT_CATALOG_URL)
        self.filter_params = settings.get("filter_params", DEFAULT_FILTER_PARAMS)
        self.render_wait_ms = settings.get("render_wait_ms", DEFAULT_RENDER_WAIT_MS)

    def build_url(self, category: Optional[str] = None, prefecture: Optional[str] = None) -> str:
        return build_catalog_url(self.catalog_url, category, prefecture, self.filter_params)

    def fetch(
        self,
        category: Optional[str] = None,
        prefecture: Optional[str] = None,
        page: int = 1,
    ) -> ScrapedPage:
        """
        Fetch one rendered catalog page.

        The page number is accepted for API compatibility only; the
        listing is always fetched as a single page.
        """
        url = self.build_url(category, prefecture)
        logger.info("Scraping URL: %s", url)
        return self.client.scrape(url, wait_for=self.render_wait_ms)
