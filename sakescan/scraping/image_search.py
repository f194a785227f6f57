"""
Sake Image Search

Looks up candidate product images (and a few sake attributes) for one
catalog entry across retailer and reference sites, all fetched through
Firecrawl:

- Sakura Sake Shop keyword search (images + grade/prefecture/polish/ABV)
- Umami Mart product search (Shopify CDN images, labeled attributes)
- Sake Times article search (only when a Japanese name is known)

Every source is best-effort: a failing source is logged and skipped.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from bs4 import BeautifulSoup

from ..common.errors import UpstreamFetchError
from .firecrawl_client import FirecrawlClient

logger = logging.getLogger(__name__)

SAKURA_SEARCH_URL = "https://export.sakurasaketen.com/sake?Keyword={query}"
UMAMI_MART_SEARCH_URL = "https://umamimart.com/search?q={query}&type=product"
SAKE_TIMES_SEARCH_URL = "https://en.sake-times.com/?s={query}"

_ANY_IMAGE_RE = re.compile(r'https://[^"\'\s]+\.(?:jpg|jpeg|png|webp)(?:\?[^"\'\s]*)?', re.IGNORECASE)
_SHOPIFY_IMAGE_RE = re.compile(
    r'https://(?:[^"\'\s/]+\.)?cdn\.shopify\.com/[^"\'\s]+\.(?:jpg|jpeg|png|webp)(?:\?[^"\'\s]*)?',
    re.IGNORECASE,
)
_SHOPIFY_SIZE_RE = re.compile(r'_\d+x\d*\.')
_IMAGE_EXT_RE = re.compile(r'\.(?:jpg|jpeg|png|webp)(?:\?.*)?$', re.IGNORECASE)

# Unlabeled attribute scan (Sakura Sake Shop product text)
_GRADE_RE = re.compile(
    r'Junmai Daiginjo|Junmai Ginjo|Junmai|Daiginjo|Ginjo|Honjozo|Tokubetsu Junmai'
    r'|Tokubetsu Honjozo|Nigori|Sparkling|Nama|Futsushu',
    re.IGNORECASE,
)
_PREFECTURE_RE = re.compile(
    r'Miyagi|Yamagata|Niigata|Fukuoka|Saga|Hiroshima|Yamaguchi|Nagasaki|Kochi|Shiga'
    r'|Mie|Gifu|Saitama|Gunma|Akita|Aomori|Osaka',
    re.IGNORECASE,
)
_POLISH_RE = re.compile(r'(\d+)%?\s*(?:精米|polishing|seimaibuai)', re.IGNORECASE)
_ABV_RE = re.compile(r'(?:ABV|Alcohol|ALC)[:\s]*(\d+(?:\.\d+)?)\s*%', re.IGNORECASE)

# Labeled attribute scan (Umami Mart product text)
_LABELED_GRADE_RE = re.compile(
    r'(?:Type|Category|Style)[:\s]*(Junmai|Daiginjo|Ginjo|Honjozo|Nigori|Sparkling|Nama|Futsushu)[^\n]*',
    re.IGNORECASE,
)
_LABELED_PREFECTURE_RE = re.compile(r'(?:Prefecture|Region|Origin)[:\s]*([A-Za-z]+)', re.IGNORECASE)
_LABELED_POLISH_RE = re.compile(r'(?:Polish|Polishing|Rice Polishing|SMV)[:\s]*(\d+)%?', re.IGNORECASE)


@dataclass
class ImageCandidate:
    url: str
    source: str
    title: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"url": self.url, "source": self.source, "title": self.title}


@dataclass
class SearchResult:
    images: List[ImageCandidate] = field(default_factory=list)
    sake_data: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"images": [image.to_dict() for image in self.images]}
        if self.sake_data is not None:
            data["sakeData"] = self.sake_data
        return data


def _attributes(grade=None, prefecture=None, polish=None, abv=None) -> Optional[Dict[str, Any]]:
    """Build the sakeData dict, or None when nothing was found."""
    if grade is None and prefecture is None and polish is None and abv is None:
        return None
    data = {
        "type": grade,
        "prefecture": prefecture,
        "polishingRatio": int(polish) if polish is not None else None,
        "alcoholPercentage": float(abv) if abv is not None else None,
    }
    return {key: value for key, value in data.items() if value is not None}


def scan_attributes(markdown: str) -> Optional[Dict[str, Any]]:
    """Unlabeled scan: first grade, prefecture, polishing ratio and ABV anywhere in the text."""
    grade = _GRADE_RE.search(markdown)
    prefecture = _PREFECTURE_RE.search(markdown)
    polish = _POLISH_RE.search(markdown)
    abv = _ABV_RE.search(markdown)
    return _attributes(
        grade.group(0) if grade else None,
        prefecture.group(0) if prefecture else None,
        polish.group(1) if polish else None,
        abv.group(1) if abv else None,
    )


def scan_labeled_attributes(markdown: str) -> Optional[Dict[str, Any]]:
    """Labeled scan: values following "Type:", "Prefecture:", "Polishing:", "ABV:"."""
    grade = _LABELED_GRADE_RE.search(markdown)
    prefecture = _LABELED_PREFECTURE_RE.search(markdown)
    polish = _LABELED_POLISH_RE.search(markdown)
    abv = _ABV_RE.search(markdown)
    return _attributes(
        grade.group(1) if grade else None,
        prefecture.group(1) if prefecture else None,
        polish.group(1) if polish else None,
        abv.group(1) if abv else None,
    )


class ImageSearcher:
    """
    Searches external sites for images of one sake.

    Usage:
        searcher = ImageSearcher(FirecrawlClient(api_key))
        result = searcher.search("Dassai 23", name_japanese="獺祭")
    """

    SAKURA_LIMIT = 5
    UMAMI_MART_LIMIT = 4
    SAKE_TIMES_LIMIT = 3

    def __init__(self, client: FirecrawlClient):
        self.client = client

    def search(
        self,
        name: str,
        name_japanese: Optional[str] = None,
        brewery: Optional[str] = None,
    ) -> SearchResult:
        """
        Search all sources and merge their images.

        Args:
            name: English sake name (required)
            name_japanese: Japanese name, enables the Sake Times source
            brewery: Brewery name (accepted from search requests, not used by the current sources)

        Returns:
            SearchResult with images deduplicated by URL
        """
        if not name:
            raise ValueError("Name is required")

        result = SearchResult()
        self._run_source("Sakura Sake Shop", self._search_sakura, name, result)
        self._run_source("Umami Mart", self._search_umami_mart, name, result)
        if name_japanese:
            self._run_source("Sake Times", self._search_sake_times, name_japanese, result)

        seen = set()
        unique = []
        for image in result.images:
            if image.url not in seen:
                seen.add(image.url)
                unique.append(image)
        result.images = unique
        return result

    @staticmethod
    def _run_source(source: str, search_fn, query: str, result: SearchResult) -> None:
        try:
            search_fn(query, result)
        except UpstreamFetchError as e:
            logger.warning("%s search skipped: %s", source, e)

    def _search_sakura(self, name: str, result: SearchResult) -> None:
        url = SAKURA_SEARCH_URL.format(query=quote(name))
        page = self.client.scrape(url)

        images = [
            image_url for image_url in _ANY_IMAGE_RE.findall(page.html)
            if not any(word in image_url for word in ('logo', 'icon', 'badge', 'arrow', 'close'))
            and any(word in image_url for word in ('uploads', 'cdn', 'sake'))
        ]
        for image_url in images[:self.SAKURA_LIMIT]:
            result.images.append(ImageCandidate(image_url, "Sakura Sake Shop", name))

        attributes = scan_attributes(page.markdown)
        if attributes:
            result.sake_data = attributes

    def _search_umami_mart(self, name: str, result: SearchResult) -> None:
        url = UMAMI_MART_SEARCH_URL.format(query=quote(f"{name} sake"))
        page = self.client.scrape(url)

        images = [
            # Request a larger rendition than the search thumbnail
            _SHOPIFY_SIZE_RE.sub('_800x.', image_url, count=1)
            for image_url in _SHOPIFY_IMAGE_RE.findall(page.html)
            if 'products' in image_url
            and not any(word in image_url for word in ('logo', 'icon', 'badge', 'collection'))
        ]
        for image_url in images[:self.UMAMI_MART_LIMIT]:
            result.images.append(ImageCandidate(image_url, "Umami Mart", name))

        if result.sake_data is None:
            result.sake_data = scan_labeled_attributes(page.markdown)

    def _search_sake_times(self, name_japanese: str, result: SearchResult) -> None:
        url = SAKE_TIMES_SEARCH_URL.format(query=quote(name_japanese))
        page = self.client.scrape(url, formats=("html",))
        soup = BeautifulSoup(page.html, "lxml")

        images = []
        for img in soup.find_all("img"):
            src = img.get("src") or img.get("data-src") or ""
            if not src.startswith("https://") or not _IMAGE_EXT_RE.search(src):
                continue
            if 'sake' not in src or any(word in src for word in ('logo', 'icon', 'avatar')):
                continue
            images.append(src)

        for image_url in images[:self.SAKE_TIMES_LIMIT]:
            result.images.append(ImageCandidate(image_url, "Sake Times", name_japanese))
