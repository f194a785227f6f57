"""
Sake Catalog Repository

Reads and writes the persisted sake catalog through Supabase.

Any object with the same three methods can stand in for SupabaseCatalog
(the matcher and importer only rely on them):

    fetch_match_snapshot() -> list[CatalogEntry]
    update_sake(sake_id, values) -> None      raises CatalogWriteError
    insert_sake(row: SakeRow) -> None         raises CatalogWriteError
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..common.config_loader import load_import_settings
from ..common.errors import CatalogError, CatalogWriteError
from ..models import CatalogEntry, SakeRow
from .supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


class SupabaseCatalog:
    """Catalog backed by the Supabase "sake" table."""

    MATCH_COLUMNS = "id, name, name_japanese, brewery, label_image_url, bottle_image_url"

    def __init__(self, client: SupabaseClient, table: str = "sake"):
        self.client = client
        self.table = table

    @classmethod
    def from_config(cls, client: SupabaseClient, storage: Optional[Dict[str, Any]] = None) -> "SupabaseCatalog":
        """Build with the table name from the import settings "storage" section."""
        if storage is None:
            storage = load_import_settings().get("storage", {})
        return cls(client, table=storage.get("table", "sake"))

    def fetch_match_snapshot(self) -> List[CatalogEntry]:
        """
        Load the matching projection of every catalog row, in fetch order.

        Raises:
            CatalogError: If the catalog cannot be read
        """
        rows = self.client.select(self.table, self.MATCH_COLUMNS)
        entries = [CatalogEntry.from_row(row) for row in rows]
        logger.info("Loaded %d catalog entries for matching", len(entries))
        return entries

    def update_sake(self, sake_id: str, values: Dict[str, Any]) -> None:
        """Patch one catalog row by id."""
        try:
            self.client.update(self.table, {"id": sake_id}, values)
        except CatalogError as e:
            raise CatalogWriteError(e.message, status_code=e.status_code) from e

    def insert_sake(self, row: SakeRow) -> None:
        """Insert one catalog row."""
        try:
            self.client.insert(self.table, row.to_row())
        except CatalogError as e:
            raise CatalogWriteError(e.message, status_code=e.status_code) from e
