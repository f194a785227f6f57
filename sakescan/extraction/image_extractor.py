"""
Product Image Extraction

Finds product image URLs in the raw page HTML and attaches them to
extracted records.

Image-to-record association is a best-effort positional guess: the page
lists images and cards in the same order most of the time, but nothing
ties an image to its card. Mismatches are expected whenever the counts
differ. The assigner is a separate strategy object so a content-based
matcher can replace it.
"""

from __future__ import annotations

import re
from typing import List

from ..models import ScrapedSake

# Hosted upload/CDN images with a supported extension, optional query string
PRODUCT_IMAGE_RE = re.compile(
    r'https://[^"\'\s]+(?:uploads|cdn)[^"\'\s]+\.(?:jpg|jpeg|png|webp)(?:\?[^"\'\s]*)?',
    re.IGNORECASE,
)

EXCLUDED_IMAGE_WORDS = ('logo', 'icon', 'arrow', 'close')


def extract_product_image_urls(html: str) -> List[str]:
    """
    Extract candidate product image URLs in document order.

    Args:
        html: Raw page HTML

    Returns:
        Image URLs without logos, icons and navigation arrows
    """
    if not html:
        return []

    return [
        url for url in PRODUCT_IMAGE_RE.findall(html)
        if not any(word in url for word in EXCLUDED_IMAGE_WORDS)
    ]


class PositionalImageAssigner:
    """Assigns the Nth image URL to the Nth record."""

    def assign(self, sakes: List[ScrapedSake], image_urls: List[str]) -> List[ScrapedSake]:
        """
        Set image_url on records by position, in place.

        Records past the end of image_urls are left untouched, as are
        surplus URLs.

        Returns:
            The same list, for chaining
        """
        for sake, url in zip(sakes, image_urls):
            sake.image_url = url
        return sakes
