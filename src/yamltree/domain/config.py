from __future__ import annotations

"""
Configuration Domain Management.

Loads persistent user preferences stored as JSON in the user data
directory, with default fallback for missing or corrupted files.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from yamltree.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "config.json"
DEFAULT_DOCUMENT_PATH = "output.yaml"


def get_config_file() -> str:
    """Absolute path of the persistent configuration file."""
    return os.path.join(get_user_data_dir(create=False), CONFIG_FILE_NAME)


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Document
        "document_path": DEFAULT_DOCUMENT_PATH,

        # Capture
        "sort_entries": False,

        # Materialization
        "strict_documents": False,

        # Diagnostics
        "log_level": "INFO",
        "log_file": "",
    }

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from disk, merged over the defaults.

    Args:
        path: Config file override. Defaults to the user data directory file.

    Returns:
        Dict[str, Any]: The merged configuration, or defaults on failure.
    """
    config = get_default_config()
    config_file = path or get_config_file()

    if not os.path.exists(config_file):
        logger.debug("Config file not found. Using defaults.")
        return config

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to load config '{config_file}': {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Using defaults.")
        return config

    config.update({k: v for k, v in data.items() if k in config})
    return config
