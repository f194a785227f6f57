"""
Request handlers for the admin back-office.

Modules:
    handlers - scrape, import (match/import), download-image, search
"""

from .handlers import (
    handle_download_image,
    handle_import,
    handle_scrape,
    handle_search,
)

__all__ = [
    'handle_scrape',
    'handle_import',
    'handle_download_image',
    'handle_search',
]
