"""
Sake Importer

Applies admin-selected match decisions to the catalog:

- updates: set the label image (and updated_at) on the matched entry
- new sakes: insert a full row

The batch is best-effort, not a transaction. Items are written one at a
time; a rejected write is recorded as an error message and the batch goes
on. Rows written before a failure stay written.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from ..catalog.image_mirror import ImageMirror
from ..common.errors import CatalogWriteError, ImageMirrorError
from ..models import ImportResult, MatchDecision, SakeRow

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2025-01-31T12:00:00.000Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class SakeImporter:
    """
    Writes selected updates and new sakes to the catalog.

    Usage:
        importer = SakeImporter(SupabaseCatalog(client))
        result = importer.apply(selected_updates, selected_new)
        result.updated_count, result.inserted_count, result.errors

    Pass an ImageMirror to copy external images into owned storage before
    they are written to the catalog.
    """

    def __init__(
        self,
        catalog,
        image_mirror: Optional[ImageMirror] = None,
        clock: Callable[[], str] = utc_timestamp,
    ):
        """
        Args:
            catalog: Catalog with update_sake() and insert_sake()
            image_mirror: Optional mirror for external image URLs
            clock: Returns the updated_at timestamp string
        """
        self.catalog = catalog
        self.image_mirror = image_mirror
        self.clock = clock

    def _resolve_image(self, sake: MatchDecision) -> Optional[str]:
        """Image URL to store, mirrored when a mirror is configured."""
        if not sake.image_url or self.image_mirror is None:
            return sake.image_url
        return self.image_mirror.mirror(sake.image_url, sake_name=sake.name).url

    def apply(self, updates: List[MatchDecision], new_sakes: List[MatchDecision]) -> ImportResult:
        """
        Apply the batch sequentially.

        Updates without an existing_id or image_url are skipped silently.

        Returns:
            ImportResult with success counts and per-item error messages
        """
        result = ImportResult()

        for sake in updates or []:
            if not sake.existing_id or not sake.image_url:
                continue
            try:
                image_url = self._resolve_image(sake)
                self.catalog.update_sake(sake.existing_id, {
                    "label_image_url": image_url,
                    "updated_at": self.clock(),
                })
            except ImageMirrorError as e:
                self._record_error(result, f"Failed to mirror image for {sake.name}: {e}")
            except CatalogWriteError as e:
                self._record_error(result, f"Failed to update {sake.name}: {e.message}")
            else:
                result.updated_count += 1

        for sake in new_sakes or []:
            try:
                row = SakeRow.from_sake(sake).with_label_image(self._resolve_image(sake))
                self.catalog.insert_sake(row)
            except ImageMirrorError as e:
                self._record_error(result, f"Failed to mirror image for {sake.name}: {e}")
            except CatalogWriteError as e:
                self._record_error(result, f"Failed to insert {sake.name}: {e.message}")
            else:
                result.inserted_count += 1

        logger.info("Import finished: %d updated, %d inserted, %d errors",
                    result.updated_count, result.inserted_count, len(result.errors))
        return result

    @staticmethod
    def _record_error(result: ImportResult, message: str) -> None:
        logger.warning(message)
        result.errors.append(message)
