"""
Image Mirror

Copies an externally hosted image into the project's storage bucket so
catalog rows don't depend on third-party hosting.
"""

from __future__ import annotations

import logging
import random
import string
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from ..common.config_loader import load_import_settings
from ..common.errors import CatalogError, ImageMirrorError
from ..common.text_utils import safe_file_stem
from .supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


@dataclass
class MirroredImage:
    url: str
    original_url: str

    def to_dict(self):
        return {"success": True, "url": self.url, "originalUrl": self.original_url}


def extension_for(content_type: str) -> str:
    """File extension for an image content type (jpg when unknown)."""
    if 'png' in content_type:
        return 'png'
    if 'webp' in content_type:
        return 'webp'
    if 'gif' in content_type:
        return 'gif'
    return 'jpg'


class ImageMirror:
    """
    Downloads an image and re-uploads it to Supabase Storage.

    Usage:
        mirror = ImageMirror(supabase_client)
        image = mirror.mirror("https://cdn.example.com/dassai.jpg", sake_name="Dassai 23")
        image.url  # public storage URL
    """

    USER_AGENT = "Mozilla/5.0 (compatible; SakeScan/1.0)"

    def __init__(
        self,
        client: SupabaseClient,
        bucket: str = "sake-images",
        folder: str = "sake-images",
        session: requests.Session | None = None,
        timeout: int = 30,
    ):
        self.client = client
        self.bucket = bucket
        self.folder = folder
        self._session = session
        self.timeout = timeout

    @classmethod
    def from_config(cls, client: SupabaseClient, storage: Optional[Dict[str, Any]] = None) -> "ImageMirror":
        """Build with the bucket and folder from the import settings "storage" section."""
        if storage is None:
            storage = load_import_settings().get("storage", {})
        return cls(
            client,
            bucket=storage.get("image_bucket", "sake-images"),
            folder=storage.get("image_folder", "sake-images"),
        )

    def build_object_path(self, sake_name: Optional[str], extension: str) -> str:
        """<folder>/<safe-name>-<epoch millis>-<6 random chars>.<ext>"""
        timestamp = int(time.time() * 1000)
        suffix = ''.join(random.choices(string.ascii_lowercase + string.digits, k=6))
        return f"{self.folder}/{safe_file_stem(sake_name)}-{timestamp}-{suffix}.{extension}"

    def mirror(self, image_url: str, sake_name: Optional[str] = None) -> MirroredImage:
        """
        Download image_url and store it under a new unique name.

        Raises:
            ImageMirrorError: If the download or the upload fails
        """
        requester = self._session or requests
        try:
            response = requester.get(
                image_url,
                headers={"User-Agent": self.USER_AGENT, "Accept": "image/*"},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise ImageMirrorError(f"Failed to download image: {e}") from e

        if not response.ok:
            raise ImageMirrorError(f"Failed to download image: {response.status_code}")

        content_type = response.headers.get("content-type") or "image/jpeg"
        path = self.build_object_path(sake_name, extension_for(content_type))

        try:
            self.client.upload_object(self.bucket, path, response.content, content_type, upsert=False)
        except CatalogError as e:
            raise ImageMirrorError(f"Failed to upload: {e.message}") from e

        public_url = self.client.public_url(self.bucket, path)
        logger.info("Mirrored %s -> %s", image_url, public_url)
        return MirroredImage(url=public_url, original_url=image_url)
