"""
Firecrawl API Client

Client for the Firecrawl scrape endpoint, which renders a page
(running its JavaScript) and returns Markdown and/or HTML snapshots.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import requests

from ..common.errors import ConfigurationError, UpstreamFetchError
from ..common.settings import FIRECRAWL_NOT_CONFIGURED

logger = logging.getLogger(__name__)


@dataclass
class ScrapedPage:
    """Rendered page snapshot. Either part may be empty."""
    html: str = ""
    markdown: str = ""


class FirecrawlClient:
    """
    Client for the Firecrawl scrape API.

    No retries: a failed scrape fails the whole operation.

    Usage:
        with FirecrawlClient(api_key="fc-xxx") as client:
            page = client.scrape("https://example.com/catalog", wait_for=3000)
            page.markdown, page.html
    """

    API_URL = "https://api.firecrawl.dev/v1/scrape"
    DEFAULT_FORMATS = ("markdown", "html")

    def __init__(self, api_key: str, api_url: str = API_URL, timeout: int = 60):
        """
        Initialize the client.

        Args:
            api_key: Firecrawl API key
            api_url: Scrape endpoint URL
            timeout: Request timeout in seconds

        Raises:
            ConfigurationError: If api_key is empty
        """
        if not api_key:
            raise ConfigurationError(FIRECRAWL_NOT_CONFIGURED)

        self.api_url = api_url
        self.timeout = timeout

        self.session = requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        })

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def scrape(
        self,
        url: str,
        formats: Sequence[str] = DEFAULT_FORMATS,
        only_main_content: bool = True,
        wait_for: int | None = None,
    ) -> ScrapedPage:
        """
        Request a rendered snapshot of a page.

        Args:
            url: Page to scrape
            formats: Snapshot formats to request ("markdown", "html")
            only_main_content: Strip headers, footers and navigation
            wait_for: Milliseconds to wait for client-side content, if any

        Returns:
            ScrapedPage with html/markdown ("" when absent from the response)

        Raises:
            UpstreamFetchError: On network failure, non-2xx response or a body
                that is not a JSON object
        """
        payload = {
            "url": url,
            "formats": list(formats),
            "onlyMainContent": only_main_content,
        }
        if wait_for is not None:
            payload["waitFor"] = wait_for

        try:
            response = self.session.post(self.api_url, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error("Firecrawl request failed: %s", e)
            raise UpstreamFetchError(f"Firecrawl request failed: {e}", details=str(e)) from e

        if not response.ok:
            details = response.text
            logger.error("Firecrawl error %d: %s", response.status_code, details[:200])
            raise UpstreamFetchError(
                f"Firecrawl returned HTTP {response.status_code}",
                status_code=response.status_code,
                details=details,
            )

        try:
            body = response.json()
        except ValueError as e:
            logger.error("Firecrawl returned a non-JSON body: %s", response.text[:200])
            raise UpstreamFetchError(
                "Firecrawl returned an invalid response",
                status_code=response.status_code,
                details=response.text,
            ) from e
        if not isinstance(body, dict):
            raise UpstreamFetchError(
                "Firecrawl returned an invalid response",
                status_code=response.status_code,
                details=response.text,
            )

        data = body.get("data") or {}
        return ScrapedPage(
            html=data.get("html") or "",
            markdown=data.get("markdown") or "",
        )
