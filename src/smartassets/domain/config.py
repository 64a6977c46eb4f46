from __future__ import annotations

"""
Configuration Domain Management.

Builds the runtime configuration of a synchronization run. Defaults
describe the conventional Flutter layout; a project may override them
through an optional 'smartassets.json' file at its root.
"""

import json
import logging
import os
from typing import Any, Dict

from smartassets.domain.constants import (
    DEFAULT_ASSETS_DIR,
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_FONTS_DIR,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_PUBSPEC_FILE,
    PROJECT_CONFIG_FILE,
)

logger = logging.getLogger(__name__)

# Keys a project-level file is allowed to set
_PROJECT_KEYS = (
    "assets_dir",
    "fonts_dir",
    "pubspec_file",
    "output_file",
    "exclude_patterns",
    "update_pubspec",
    "generate_code",
)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config(project_root: str = "") -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Args:
        project_root: Directory of the Flutter project. Empty means the
                      caller will resolve it later.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # IO Paths
        "project_root": project_root,
        "assets_dir": DEFAULT_ASSETS_DIR,
        "fonts_dir": DEFAULT_FONTS_DIR,
        "pubspec_file": DEFAULT_PUBSPEC_FILE,
        "output_file": DEFAULT_OUTPUT_FILE,

        # Discovery
        "exclude_patterns": list(DEFAULT_EXCLUDE_PATTERNS),

        # Outputs
        "update_pubspec": True,
        "generate_code": True,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def get_project_config_path(project_root: str) -> str:
    return os.path.join(project_root, PROJECT_CONFIG_FILE)


def load_config(project_root: str) -> Dict[str, Any]:
    """
    Load the configuration for a project, merging its optional JSON file.

    A missing file is silent; an unreadable or corrupted one is reported
    and ignored so a stray file never blocks generation.

    Args:
        project_root: Directory of the Flutter project.

    Returns:
        Dict[str, Any]: Defaults updated with the project overrides.
    """
    config = get_default_config(project_root)
    path = get_project_config_path(project_root)

    if not os.path.exists(path):
        logger.debug(f"No {PROJECT_CONFIG_FILE} found at {project_root}. Using defaults.")
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to read {path}: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning(f"Corrupted project config at {path}. Using defaults.")
        return config

    for key in _PROJECT_KEYS:
        if key in data:
            config[key] = data[key]

    unknown = sorted(set(data) - set(_PROJECT_KEYS))
    if unknown:
        logger.warning(f"Ignoring unknown keys in {PROJECT_CONFIG_FILE}: {', '.join(unknown)}")

    logger.debug(f"Project configuration loaded from {path}")
    return config


def save_config(config: Dict[str, Any]) -> str:
    """
    Persist the project-level subset of a configuration.

    Args:
        config: Configuration holding at least 'project_root'.

    Returns:
        str: Path of the written file.
    """
    path = get_project_config_path(config["project_root"])
    payload = {k: config[k] for k in _PROJECT_KEYS if k in config}
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=4)
    logger.debug(f"Configuration saved to {path}")
    return path
