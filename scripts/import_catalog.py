#!/usr/bin/env python3
"""
Catalog Import Script

Runs the full import flow against the Supabase catalog:

    scrape (or load scraped JSON) -> match -> review -> import

Every match decision is selected by default. Use --skip-updates or
--skip-new to leave a group out, --dry-run to stop after the review,
and --yes to import without the confirmation prompt.

Usage:
    python3 scripts/import_catalog.py
    python3 scripts/import_catalog.py --input output/scraped_sakes.json --dry-run
    python3 scripts/import_catalog.py --skip-updates --yes --mirror-images
    python3 scripts/import_catalog.py --yes --log-file output/import.log
"""

import argparse
import json
import logging
import os
import sys

from dotenv import load_dotenv

# Add project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from sakescan.catalog import ImageMirror, SupabaseCatalog, SupabaseClient
from sakescan.common import SakeScanError, Settings, setup_logging
from sakescan.importing import (
    SakeImporter,
    SakeMatcher,
    format_import_summary,
    format_match_summary,
)
from sakescan.models import MatchResult, ScrapedSake
from sakescan.scraping import CatalogPageFetcher, CatalogScraper, FirecrawlClient

logger = logging.getLogger(__name__)


def load_scraped(path: str) -> list:
    """Load records from a scrape JSON file ({"sakes": [...]} or a bare list)."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    items = data.get("sakes", []) if isinstance(data, dict) else data
    return [ScrapedSake.from_dict(item) for item in items]


def scrape(settings: Settings, category: str = None, prefecture: str = None) -> list:
    with FirecrawlClient(settings.require_firecrawl()) as client:
        result = CatalogScraper(CatalogPageFetcher(client)).scrape(
            category=category, prefecture=prefecture
        )
    return result.sakes


def print_review(result: MatchResult) -> None:
    """Print the decisions awaiting import."""
    print("\n" + "=" * 60)
    print("REVIEW")
    print("=" * 60)
    print(format_match_summary(result))

    print(f"\nIMAGE UPDATES ({result.total_updates}):")
    for decision in result.updates:
        print(f"  [{decision.existing_id}] {decision.name}")
        print(f"      {decision.image_url}")

    print(f"\nNEW SAKES ({result.total_new}):")
    for decision in result.new_sakes:
        details = ", ".join(filter(None, [decision.brewery, decision.prefecture, decision.type]))
        print(f"  {decision.name}" + (f" ({details})" if details else ""))


def confirm(prompt: str) -> bool:
    answer = input(f"{prompt} [y/N] ").strip().lower()
    return answer in ("y", "yes")


def main():
    parser = argparse.ArgumentParser(
        description="Match scraped sakes against the catalog and import them"
    )
    parser.add_argument(
        "--input", "-i",
        help="Scraped JSON from scrape_catalog.py (default: scrape now)"
    )
    parser.add_argument("--category", help="Sake category filter when scraping")
    parser.add_argument("--prefecture", help="Prefecture filter when scraping")
    parser.add_argument(
        "--skip-updates",
        action="store_true",
        help="Do not apply image updates to existing sakes"
    )
    parser.add_argument(
        "--skip-new",
        action="store_true",
        help="Do not insert new sakes"
    )
    parser.add_argument(
        "--mirror-images",
        action="store_true",
        help="Copy external images into Supabase Storage before writing"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the review and exit without writing"
    )
    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Import without asking for confirmation"
    )
    parser.add_argument(
        "--log-file",
        help="Also append log records to this file (e.g. output/import.log)"
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
    setup_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)
    load_dotenv()
    settings = Settings.from_env()

    try:
        if args.input:
            sakes = load_scraped(args.input)
        else:
            sakes = scrape(settings, args.category, args.prefecture)

        url, key = settings.require_supabase()
        with SupabaseClient(url, key) as client:
            catalog = SupabaseCatalog.from_config(client)
            result = SakeMatcher().match(sakes, catalog.fetch_match_snapshot())
            print_review(result)

            updates = [] if args.skip_updates else result.updates
            new_sakes = [] if args.skip_new else result.new_sakes

            if args.dry_run or not (updates or new_sakes):
                print("\nNothing imported.")
                return
            if not args.yes and not confirm(
                f"\nImport {len(updates)} updates and {len(new_sakes)} new sakes?"
            ):
                print("Aborted.")
                return

            mirror = ImageMirror.from_config(client) if args.mirror_images else None
            import_result = SakeImporter(catalog, image_mirror=mirror).apply(updates, new_sakes)
    except (SakeScanError, ValueError) as e:
        logger.error("Import failed: %s", e)
        sys.exit(1)

    print("\n" + format_import_summary(import_result))
    sys.exit(1 if import_result.errors else 0)


if __name__ == "__main__":
    main()
