"""
Configuration Loader

Loads YAML configuration files for the extraction vocabulary
(lead-in markers, sake grades, taste and food keywords) and the
import settings (catalog URL, filter names, storage names).
"""

from pathlib import Path
from typing import Any, Dict, List

import yaml


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'sake_vocabulary.yaml')

    Returns:
        Parsed YAML content as dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def load_sake_vocabulary() -> Dict[str, List[str]]:
    """
    Load the extraction vocabulary.

    Returns:
        Dictionary of keyword lists

    Example:
        {
            'lead_in_styles': ['Modern', 'Classic'],
            'sake_grades': ['Junmai Daiginjo', 'Junmai Ginjo', ...],
            'taste_profiles': ['Fruity & Aromatic', ...],
            ...
        }
    """
    return load_config('sake_vocabulary.yaml')


def load_import_settings() -> Dict[str, Any]:
    """
    Load import pipeline settings.

    Returns:
        Dictionary with catalog_url, filter parameter names, render wait
        and storage table/bucket names.
    """
    return load_config('import_settings.yaml')
