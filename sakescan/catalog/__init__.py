"""
Catalog storage modules.

Modules:
    supabase_client - REST/Storage client for Supabase
    repository - SupabaseCatalog (match snapshot, row update/insert)
    image_mirror - Copy external images into the storage bucket
"""

from .image_mirror import ImageMirror, MirroredImage
from .repository import SupabaseCatalog
from .supabase_client import SupabaseClient

__all__ = [
    'SupabaseClient',
    'SupabaseCatalog',
    'ImageMirror',
    'MirroredImage',
]
