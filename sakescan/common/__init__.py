# Common utilities
from .config_loader import (
    load_config,
    load_import_settings,
    load_sake_vocabulary,
)
from .errors import (
    CatalogError,
    CatalogWriteError,
    ConfigurationError,
    ImageMirrorError,
    SakeScanError,
    UpstreamFetchError,
)
from .log_config import setup_logging
from .settings import Settings
from .text_utils import contains_japanese, safe_file_stem
