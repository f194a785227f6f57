"""
Supabase API Client

Minimal client for the two Supabase services the importer needs:
PostgREST table access (select/update/insert) and Storage object upload.
Authenticates with the service role key.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

import requests

from ..common.errors import CatalogError, ConfigurationError
from ..common.settings import SUPABASE_NOT_CONFIGURED

logger = logging.getLogger(__name__)


class SupabaseClient:
    """
    Client for the Supabase REST and Storage APIs.

    Every call raises CatalogError on failure; there are no retries; each
    write is a single atomic row operation on the server.

    Usage:
        with SupabaseClient(url="https://xyz.supabase.co", service_key="...") as client:
            rows = client.select("sake", "id, name")
            client.update("sake", {"id": rows[0]["id"]}, {"label_image_url": url})
    """

    def __init__(self, url: str, service_key: str, timeout: int = 30):
        """
        Initialize the client.

        Args:
            url: Project URL (https://<project>.supabase.co)
            service_key: Service role key
            timeout: Request timeout in seconds
        """
        if not url or not service_key:
            raise ConfigurationError(SUPABASE_NOT_CONFIGURED)

        self.url = url.rstrip("/")
        self.rest_url = f"{self.url}/rest/v1"
        self.storage_url = f"{self.url}/storage/v1"
        self.timeout = timeout

        self.session = requests.Session()
        self.session.headers.update({
            "apikey": service_key,
            "Authorization": f"Bearer {service_key}",
            "Content-Type": "application/json",
        })

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        """Send a request, raising CatalogError on network failure or HTTP >= 400."""
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error("Supabase request failed: %s", e)
            raise CatalogError(f"Request failed: {e}") from e

        if response.status_code >= 400:
            message = self._error_message(response)
            logger.error("Supabase error %d: %s", response.status_code, message)
            raise CatalogError(message, status_code=response.status_code)

        return response

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """PostgREST and Storage both return JSON with a "message" field."""
        try:
            body = response.json()
        except ValueError:
            return response.text[:200] or f"HTTP {response.status_code}"
        if isinstance(body, dict):
            return str(body.get("message") or body.get("error") or body)
        return str(body)

    @staticmethod
    def _eq_filters(match: Dict[str, Any]) -> Dict[str, str]:
        return {column: f"eq.{value}" for column, value in match.items()}

    def select(self, table: str, columns: str = "*") -> List[Dict[str, Any]]:
        """Fetch all rows of a table (no pagination)."""
        response = self._request("GET", f"{self.rest_url}/{table}", params={"select": columns})
        try:
            rows = response.json()
        except ValueError as e:
            logger.error("Supabase returned a non-JSON body: %s", response.text[:200])
            raise CatalogError("Invalid response from catalog", status_code=response.status_code) from e
        if not isinstance(rows, list):
            raise CatalogError("Invalid response from catalog", status_code=response.status_code)
        return rows

    def update(self, table: str, match: Dict[str, Any], values: Dict[str, Any]) -> None:
        """Patch the rows whose columns equal the given match values."""
        self._request(
            "PATCH",
            f"{self.rest_url}/{table}",
            params=self._eq_filters(match),
            json=values,
            headers={"Prefer": "return=minimal"},
        )

    def insert(self, table: str, row: Dict[str, Any]) -> None:
        """Insert one row."""
        self._request(
            "POST",
            f"{self.rest_url}/{table}",
            json=row,
            headers={"Prefer": "return=minimal"},
        )

    def upload_object(
        self,
        bucket: str,
        path: str,
        content: bytes,
        content_type: str,
        upsert: bool = False,
    ) -> None:
        """Upload bytes to a storage bucket."""
        self._request(
            "POST",
            f"{self.storage_url}/object/{bucket}/{path}",
            data=content,
            headers={
                "Content-Type": content_type,
                "x-upsert": "true" if upsert else "false",
            },
        )

    def public_url(self, bucket: str, path: str) -> str:
        """Public URL of an object in a public bucket."""
        return f"{self.storage_url}/object/public/{bucket}/{path}"
