"""
Error types shared across the import pipeline.

Stage-level errors (configuration, upstream fetch, catalog read) abort a run.
CatalogWriteError is raised per row and collected by the importer instead.
"""

from typing import Optional


class SakeScanError(Exception):
    """Base error for catalog import operations."""

    pass


class ConfigurationError(SakeScanError):
    """A required credential or setting is missing."""

    pass


class UpstreamFetchError(SakeScanError):
    """
    The scraping service could not be reached or returned a non-2xx status.

    Carries the upstream status code (None for network failures) and the
    response body so the caller can surface it for diagnosis.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, details: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class CatalogError(SakeScanError):
    """Error from the catalog storage service."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class CatalogWriteError(CatalogError):
    """A single insert or update was rejected by the catalog."""

    pass


class ImageMirrorError(SakeScanError):
    """Downloading an external image or uploading it to storage failed."""

    pass
