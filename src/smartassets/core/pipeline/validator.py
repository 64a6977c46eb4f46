from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper of the sync pipeline: coerces untrusted configuration values
(CLI flags, project JSON) into strictly typed parameters and fills
missing keys with domain defaults.
"""

import logging
import os
import re
from typing import Any, Dict, List, Tuple

from smartassets.domain.config import get_default_config

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: A tuple containing the normalized
                                          configuration and a list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    # 1. Base Type Validation
    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    # 2. Schema Definition
    string_fields = ["project_root", "pubspec_file", "output_file"]
    name_fields = ["assets_dir", "fonts_dir"]
    bool_fields = ["update_pubspec", "generate_code"]

    # 3. Field Processing & Normalization
    for field in string_fields:
        merged[field] = _as_str(
            merged.get(field), defaults.get(field, ""), field, warnings, strict
        )

    for field in name_fields:
        value = _as_str(merged.get(field), defaults[field], field, warnings, strict)
        merged[field] = _as_dir_name(value, defaults[field], field, warnings, strict)

    for field in bool_fields:
        merged[field] = _as_bool(
            merged.get(field), defaults.get(field, False), field, warnings, strict
        )

    merged["exclude_patterns"] = _as_pattern_list(
        merged.get("exclude_patterns"), defaults["exclude_patterns"], warnings, strict
    )

    # 4. Containment of project-relative files
    for field in ("pubspec_file", "output_file"):
        merged[field] = _as_project_relative(
            merged[field], defaults[field], field, warnings, strict
        )

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_pattern_list(value: Any, fallback: List[str], warnings: List[str], strict: bool) -> List[str]:
    """Ensure input is a list of compilable regex strings, supporting CSV parsing."""
    field = "exclude_patterns"
    if value is None:
        return list(fallback)

    if isinstance(value, str) and not strict:
        value = [x.strip() for x in value.split(",") if x.strip()]
        warnings.append(f"Field '{field}' converted from CSV string to list.")

    if not isinstance(value, list):
        msg = f"Invalid field '{field}': expected list[str], received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return list(fallback)

    out: List[str] = []
    for i, item in enumerate(value):
        if not isinstance(item, str) or not item.strip():
            msg = f"Invalid item in '{field}[{i}]': expected non-empty str."
            if strict:
                raise TypeError(msg)
            warnings.append(f"{msg} Item discarded.")
            continue
        try:
            re.compile(item)
        except re.error as e:
            msg = f"Invalid regex in '{field}[{i}]' ({item!r}): {e}."
            if strict:
                raise ValueError(msg) from e
            warnings.append(f"{msg} Item discarded.")
            continue
        out.append(item)
    return out

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _as_dir_name(value: str, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Accept a single path segment only (e.g. 'assets', not 'a/b' or '..')."""
    cleaned = value.replace("\\", "/").strip("/")
    if cleaned and "/" not in cleaned and cleaned not in (".", ".."):
        return cleaned

    msg = f"Invalid field '{field}': '{value}' must be a single folder name."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_project_relative(value: str, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Reject relative paths that would escape the project root."""
    if os.path.isabs(value):
        return value
    normalized = os.path.normpath(value)
    if normalized == ".." or normalized.startswith(".." + os.sep):
        msg = f"Invalid field '{field}': '{value}' escapes the project root."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback
    return value
