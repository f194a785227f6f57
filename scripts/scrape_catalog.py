#!/usr/bin/env python3
"""
Catalog Scrape Script

Scrapes the Sakura Sake Shop catalog listing and writes the extracted,
deduplicated records as JSON (the same body the scrape endpoint returns).

Usage:
    python3 scripts/scrape_catalog.py
    python3 scripts/scrape_catalog.py --category "Junmai Daiginjo" --output output/scraped.json
    python3 scripts/scrape_catalog.py --markdown page.md --html page.html   # parse saved snapshot
"""

import argparse
import json
import logging
import os
import sys

from dotenv import load_dotenv

# Add project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from sakescan.common import SakeScanError, Settings, setup_logging
from sakescan.scraping import CatalogPageFetcher, CatalogScraper, FirecrawlClient, ScrapedPage

logger = logging.getLogger(__name__)


def read_snapshot(markdown_path: str, html_path: str = "") -> ScrapedPage:
    """Load a saved page snapshot from disk."""
    with open(markdown_path, "r", encoding="utf-8") as f:
        markdown = f.read()
    html = ""
    if html_path:
        with open(html_path, "r", encoding="utf-8") as f:
            html = f.read()
    return ScrapedPage(html=html, markdown=markdown)


def main():
    parser = argparse.ArgumentParser(
        description="Scrape the sake catalog listing into JSON records"
    )
    parser.add_argument("--category", help="Sake category filter")
    parser.add_argument("--prefecture", help="Prefecture filter")
    parser.add_argument(
        "--output", "-o",
        default="output/scraped_sakes.json",
        help="Output JSON file (default: output/scraped_sakes.json)"
    )
    parser.add_argument(
        "--markdown",
        help="Parse a saved Markdown snapshot instead of calling Firecrawl"
    )
    parser.add_argument(
        "--html",
        default="",
        help="Saved HTML snapshot for image extraction (with --markdown)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress info messages, show only warnings and errors"
    )

    args = parser.parse_args()
    setup_logging(verbose=args.verbose, quiet=args.quiet)
    load_dotenv()

    try:
        if args.markdown:
            result = CatalogScraper(fetcher=None).parse(read_snapshot(args.markdown, args.html))
        else:
            settings = Settings.from_env()
            with FirecrawlClient(settings.require_firecrawl()) as client:
                scraper = CatalogScraper(CatalogPageFetcher(client))
                result = scraper.scrape(category=args.category, prefecture=args.prefecture)
    except SakeScanError as e:
        logger.error("Scrape failed: %s", e)
        sys.exit(1)

    output_dir = os.path.dirname(args.output)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
    with open(args.output, "w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, indent=2, ensure_ascii=False)

    print(f"Found {result.total_found} sakes")
    for sake in result.sakes:
        brewery = f" ({sake.brewery})" if sake.brewery else ""
        print(f"  - {sake.name}{brewery}")
    print(f"\nResults saved to: {args.output}")


if __name__ == "__main__":
    main()
