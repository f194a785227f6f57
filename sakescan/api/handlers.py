"""
Admin Request Handlers

Framework-independent handlers for the admin back-office endpoints. Each
takes the HTTP method and the parsed JSON body and returns a
(status_code, payload) tuple, so any web layer can mount them:

    POST /api/scrape-sakura-sake   -> handle_scrape
    POST /api/import-sakes         -> handle_import   (action: match | import)
    POST /api/download-image       -> handle_download_image
    POST /api/search-sake          -> handle_search

Collaborators are built from Settings (environment) unless passed in.
Status codes: 200 success, 400 bad input, 405 wrong method, 500
configuration or upstream failure.
"""

from __future__ import annotations

import logging
from contextlib import ExitStack, contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..catalog import ImageMirror, SupabaseCatalog, SupabaseClient
from ..common.config_loader import load_import_settings
from ..common.errors import (
    CatalogError,
    ConfigurationError,
    ImageMirrorError,
    SakeScanError,
    UpstreamFetchError,
)
from ..common.settings import Settings
from ..importing import SakeImporter, SakeMatcher
from ..models import MatchDecision, ScrapedSake
from ..scraping import CatalogPageFetcher, CatalogScraper, FirecrawlClient, ImageSearcher

logger = logging.getLogger(__name__)

Response = Tuple[int, Dict[str, Any]]

METHOD_NOT_ALLOWED: Response = (405, {"error": "Method not allowed"})
INVALID_ACTION = 'Invalid action. Use "match" or "import"'
BODY_NOT_OBJECT = "Request body must be a JSON object"


def _error(status: int, message: str, details: Optional[str] = None) -> Response:
    payload: Dict[str, Any] = {"error": message}
    if details is not None:
        payload["details"] = details
    return status, payload


@contextmanager
def _firecrawl_client(settings: Optional[Settings]) -> Iterator[FirecrawlClient]:
    settings = settings or Settings.from_env()
    client = FirecrawlClient(settings.require_firecrawl())
    try:
        yield client
    finally:
        client.close()


@contextmanager
def _supabase_client(settings: Optional[Settings]) -> Iterator[SupabaseClient]:
    settings = settings or Settings.from_env()
    url, key = settings.require_supabase()
    client = SupabaseClient(url, key)
    try:
        yield client
    finally:
        client.close()


def _parse_list(body: Dict[str, Any], key: str, model, required: bool = False) -> List[Any]:
    """Parse a list of wire dicts. Raises ValueError on malformed input."""
    items = body.get(key)
    if items is None:
        if required:
            raise ValueError(f"{key} is required")
        return []
    if not isinstance(items, list):
        raise ValueError(f"{key} must be a list")
    return [model.from_dict(item) for item in items]


def handle_scrape(
    method: str,
    body: Optional[Dict[str, Any]],
    settings: Optional[Settings] = None,
    scraper: Optional[CatalogScraper] = None,
) -> Response:
    """
    Scrape the catalog listing.

    Body: {page?: int, category?: str, prefecture?: str}
    Returns: {sakes, totalFound, page, hasMore}
    """
    if method != "POST":
        return METHOD_NOT_ALLOWED

    body = {} if body is None else body
    if not isinstance(body, dict):
        return _error(400, BODY_NOT_OBJECT)
    try:
        page = int(body.get("page") or 1)
    except (TypeError, ValueError):
        return _error(400, "page must be a number")

    try:
        with ExitStack() as stack:
            if scraper is None:
                client = stack.enter_context(_firecrawl_client(settings))
                scraper = CatalogScraper(CatalogPageFetcher(client))
            result = scraper.scrape(
                category=body.get("category"),
                prefecture=body.get("prefecture"),
                page=page,
            )
    except ConfigurationError as e:
        return _error(500, str(e))
    except UpstreamFetchError as e:
        return _error(500, "Failed to scrape page", e.details or str(e))
    except SakeScanError as e:
        logger.error("Scrape error: %s", e)
        return _error(500, "Scrape failed", str(e))

    return 200, result.to_dict()


def handle_import(
    method: str,
    body: Optional[Dict[str, Any]],
    settings: Optional[Settings] = None,
    catalog=None,
    image_mirror: Optional[ImageMirror] = None,
) -> Response:
    """
    Match scraped sakes against the catalog, or import selected decisions.

    Body (match):  {action: "match", sakes: ScrapedSake[]}
    Body (import): {action: "import", updates: MatchDecision[], newSakes: MatchDecision[],
                    mirrorImages?: bool}
    """
    if method != "POST":
        return METHOD_NOT_ALLOWED

    body = {} if body is None else body
    if not isinstance(body, dict):
        return _error(400, BODY_NOT_OBJECT)
    action = body.get("action")
    if action not in ("match", "import"):
        return _error(400, INVALID_ACTION)

    try:
        if action == "match":
            sakes = _parse_list(body, "sakes", ScrapedSake, required=True)
        else:
            updates = _parse_list(body, "updates", MatchDecision)
            new_sakes = _parse_list(body, "newSakes", MatchDecision)
    except ValueError as e:
        return _error(400, str(e))

    try:
        with ExitStack() as stack:
            if catalog is None:
                client = stack.enter_context(_supabase_client(settings))
                storage = load_import_settings().get("storage", {})
                catalog = SupabaseCatalog.from_config(client, storage)
                if body.get("mirrorImages") and image_mirror is None:
                    image_mirror = ImageMirror.from_config(client, storage)

            if action == "match":
                result = SakeMatcher().match(sakes, catalog.fetch_match_snapshot())
            else:
                mirror = image_mirror if body.get("mirrorImages") else None
                result = SakeImporter(catalog, image_mirror=mirror).apply(updates, new_sakes)
    except ConfigurationError as e:
        return _error(500, str(e))
    except CatalogError as e:
        logger.error("Import error: %s", e)
        return _error(500, "Import failed", str(e))

    return 200, result.to_dict()


def handle_download_image(
    method: str,
    body: Optional[Dict[str, Any]],
    settings: Optional[Settings] = None,
    image_mirror: Optional[ImageMirror] = None,
) -> Response:
    """
    Copy an external image into the storage bucket.

    Body: {imageUrl: str, sakeName?: str}
    Returns: {success, url, originalUrl}
    """
    if method != "POST":
        return METHOD_NOT_ALLOWED

    body = {} if body is None else body
    if not isinstance(body, dict):
        return _error(400, BODY_NOT_OBJECT)
    image_url = body.get("imageUrl")
    if not image_url:
        return _error(400, "Image URL is required")

    try:
        with ExitStack() as stack:
            if image_mirror is None:
                client = stack.enter_context(_supabase_client(settings))
                image_mirror = ImageMirror.from_config(client)
            mirrored = image_mirror.mirror(image_url, sake_name=body.get("sakeName"))
    except ConfigurationError as e:
        return _error(500, str(e))
    except ImageMirrorError as e:
        logger.error("Download/upload error: %s", e)
        return _error(500, "Failed to download and save image", str(e))

    return 200, mirrored.to_dict()


def handle_search(
    method: str,
    body: Optional[Dict[str, Any]],
    settings: Optional[Settings] = None,
    searcher: Optional[ImageSearcher] = None,
) -> Response:
    """
    Search external sites for images of one sake.

    Body: {name: str, nameJapanese?: str, brewery?: str}
    Returns: {images: [{url, source, title}], sakeData?: {...}}
    """
    if method != "POST":
        return METHOD_NOT_ALLOWED

    body = {} if body is None else body
    if not isinstance(body, dict):
        return _error(400, BODY_NOT_OBJECT)
    name = body.get("name")
    if not name:
        return _error(400, "Name is required")

    try:
        with ExitStack() as stack:
            if searcher is None:
                client = stack.enter_context(_firecrawl_client(settings))
                searcher = ImageSearcher(client)
            result = searcher.search(
                name,
                name_japanese=body.get("nameJapanese"),
                brewery=body.get("brewery"),
            )
    except ConfigurationError as e:
        return _error(500, str(e))
    except SakeScanError as e:
        logger.error("Search error: %s", e)
        return _error(500, "Search failed", str(e))

    return 200, result.to_dict()
