#!/usr/bin/env python3
"""
Sake Image Search Script

Searches retailer and reference sites for images of one sake, and
optionally mirrors a chosen image into Supabase Storage.

Usage:
    python3 scripts/search_images.py --name "Dassai 23"
    python3 scripts/search_images.py --name "Dassai 23" --japanese "獺祭" --mirror 1
"""

import argparse
import json
import logging
import os
import sys

from dotenv import load_dotenv

# Add project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from sakescan.catalog import ImageMirror, SupabaseClient
from sakescan.common import SakeScanError, Settings, setup_logging
from sakescan.scraping import FirecrawlClient, ImageSearcher

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Search candidate images for a sake")
    parser.add_argument("--name", required=True, help="English sake name")
    parser.add_argument("--japanese", help="Japanese sake name")
    parser.add_argument("--brewery", help="Brewery name")
    parser.add_argument(
        "--mirror",
        type=int,
        default=0,
        help="Mirror the Nth listed image (1-based) into storage"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging"
    )

    args = parser.parse_args()
    setup_logging(verbose=args.verbose)
    load_dotenv()
    settings = Settings.from_env()

    try:
        with FirecrawlClient(settings.require_firecrawl()) as client:
            result = ImageSearcher(client).search(args.name, args.japanese, args.brewery)

        print(f"Found {len(result.images)} images:")
        for idx, image in enumerate(result.images, 1):
            print(f"  {idx}. [{image.source}] {image.url}")
        if result.sake_data:
            print("\nSake data:")
            print(json.dumps(result.sake_data, indent=2, ensure_ascii=False))

        if args.mirror:
            if not 1 <= args.mirror <= len(result.images):
                print(f"\nNo image #{args.mirror} to mirror")
                sys.exit(1)
            url, key = settings.require_supabase()
            with SupabaseClient(url, key) as supabase:
                mirror = ImageMirror.from_config(supabase)
                image = mirror.mirror(result.images[args.mirror - 1].url, args.name)
            print(f"\nMirrored to: {image.url}")
    except SakeScanError as e:
        logger.error("Search failed: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
