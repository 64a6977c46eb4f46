from __future__ import annotations

"""
Domain Constants.

Centralizes the default project layout of a Flutter application, the
document keys owned by the reconciliation engine, and the markers
stamped into generated artifacts.
"""

from typing import List, Tuple

# -----------------------------------------------------------------------------
# PROJECT LAYOUT DEFAULTS
# -----------------------------------------------------------------------------

DEFAULT_ASSETS_DIR = "assets"
DEFAULT_FONTS_DIR = "fonts"
DEFAULT_PUBSPEC_FILE = "pubspec.yaml"
DEFAULT_OUTPUT_FILE = "lib/core/assets/app_assets.dart"
PROJECT_CONFIG_FILE = "smartassets.json"

DEFAULT_EXCLUDE_PATTERNS: List[str] = [r"^\."]

# -----------------------------------------------------------------------------
# DOCUMENT KEYS
# -----------------------------------------------------------------------------

FLUTTER_KEY = "flutter"
ASSETS_KEY_PATH = "flutter.assets"
FONTS_KEY_PATH = "flutter.fonts"
PACKAGE_NAME_KEY = "name"

FAMILY_KEY = "family"
FAMILY_FONTS_KEY = "fonts"
FONT_ASSET_KEY = "asset"

EMPTY_FOLDER_COMMENT = "# empty folder"

# -----------------------------------------------------------------------------
# FAMILY HEURISTIC
# -----------------------------------------------------------------------------

# Tried in order; the first one present in the stem wins.
FAMILY_SEPARATORS: Tuple[str, ...] = ("-", "_", " ")

# -----------------------------------------------------------------------------
# GENERATED SOURCE
# -----------------------------------------------------------------------------

GENERATED_MARKER = "// GENERATED CODE - DO NOT MODIFY BY HAND"
ROOT_GROUP_KEY = "ROOT"
AGGREGATE_CLASS_NAME = "AppAssets"
FONT_FAMILIES_CLASS_NAME = "AppFontFamilies"
CLASS_PREFIX = "App"
