"""
Scraping modules for external catalog pages.

Modules:
    firecrawl_client - FirecrawlClient for the Firecrawl scrape API
    catalog_fetcher - Catalog listing URL building and fetching
    catalog_scraper - Fetch, extract, attach images, dedupe
    image_search - Candidate image search for one sake
"""

from .catalog_fetcher import CatalogPageFetcher, build_catalog_url
from .catalog_scraper import CatalogScraper
from .firecrawl_client import FirecrawlClient, ScrapedPage
from .image_search import ImageCandidate, ImageSearcher, SearchResult

__all__ = [
    'FirecrawlClient',
    'ScrapedPage',
    'CatalogPageFetcher',
    'build_catalog_url',
    'CatalogScraper',
    'ImageSearcher',
    'ImageCandidate',
    'SearchResult',
]
