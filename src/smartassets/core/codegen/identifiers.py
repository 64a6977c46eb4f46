from __future__ import annotations

"""
Identifier Synthesis.

Turns asset paths into constant names that are valid in the generated
source and unique within the container they are emitted in. Two sources
mapping to the same name abort the run rather than letting one constant
silently shadow another.
"""

import logging
import re
from typing import Dict, List

from smartassets.core.reconcile.families import group_font_files
from smartassets.domain.asset_models import ScanResult
from smartassets.domain.codegen_models import (
    AssetConstant,
    AssetConstantGroup,
    FontFamilyConstant,
    GenerationModel,
)
from smartassets.domain.constants import ROOT_GROUP_KEY
from smartassets.domain.errors import IdentifierCollisionError

logger = logging.getLogger(__name__)

_NON_ALNUM_RX = re.compile(r"[^A-Za-z0-9]")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def to_identifier(text: str) -> str:
    """
    Sanitize arbitrary text into a constant name.

    Every character outside [A-Za-z0-9] becomes '_', the result is
    upper-cased, and a leading digit gets a '_' prefix.
    """
    ident = _NON_ALNUM_RX.sub("_", text).upper()
    if not ident:
        return "_"
    if ident[0].isdigit():
        ident = f"_{ident}"
    return ident


def synthesize_identifier(rel_path: str) -> str:
    """
    Build the constant name of an asset file.

    Args:
        rel_path: Forward-slash path relative to the resource root, e.g.
                  'images/icons/home-icon.png'.

    Returns:
        str: Name without the top-level folder, extension kept as suffix,
             e.g. 'ICONS_HOME_ICON_PNG'.
    """
    _, sep, remainder = rel_path.partition("/")
    return to_identifier(remainder if sep else rel_path)


def group_key(group_name: str) -> str:
    """Upper-cased grouping key of a top-level folder."""
    return ROOT_GROUP_KEY if group_name == "" else to_identifier(group_name)


def build_generation_model(scan: ScanResult, fonts_dir: str) -> GenerationModel:
    """
    Derive every constant to emit from a scan.

    Args:
        scan: Groups of asset files in discovery order.
        fonts_dir: Name of the top-level folder holding font files.

    Returns:
        GenerationModel: Per-group constants, the aggregate view and the
        font family names.

    Raises:
        IdentifierCollisionError: If two sources produce the same name
                                  within one container.
    """
    prefix = f"{scan.assets_dir}/"
    groups: List[AssetConstantGroup] = []
    aggregate: List[AssetConstant] = []

    group_keys: Dict[str, str] = {}
    aggregate_seen: Dict[str, str] = {}

    for group in scan.groups:
        key = group_key(group.group_name)
        _claim(group_keys, key, group.group_name or "<root>", "asset groups")

        constants: List[AssetConstant] = []
        seen: Dict[str, str] = {}
        for path in group.files:
            rel = path[len(prefix):] if path.startswith(prefix) else path

            ident = synthesize_identifier(rel)
            _claim(seen, ident, path, f"group {key}")
            constants.append(AssetConstant(ident, path))

            qualified = to_identifier(rel)
            _claim(aggregate_seen, qualified, path, "aggregate assets")
            aggregate.append(AssetConstant(qualified, path))

        groups.append(AssetConstantGroup(key, group.group_name, constants))

    font_families = _build_font_family_constants(scan, fonts_dir)

    logger.debug(
        f"Synthesized {len(aggregate)} asset identifiers in {len(groups)} groups "
        f"and {len(font_families)} font family identifiers."
    )
    return GenerationModel(groups=groups, aggregate=aggregate, font_families=font_families)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _build_font_family_constants(scan: ScanResult, fonts_dir: str) -> List[FontFamilyConstant]:
    fonts_group = scan.group(fonts_dir)
    if fonts_group is None:
        return []

    families = group_font_files(fonts_group.files)
    seen: Dict[str, str] = {}
    out: List[FontFamilyConstant] = []
    for name in sorted(families):
        ident = to_identifier(name)
        _claim(seen, ident, name, "font families")
        out.append(FontFamilyConstant(ident, name))
    return out


def _claim(registry: Dict[str, str], identifier: str, source: str, container: str) -> None:
    """Register 'identifier' for 'source' or fail if another source owns it."""
    owner = registry.get(identifier)
    if owner is not None and owner != source:
        raise IdentifierCollisionError(container, identifier, [owner, source])
    registry[identifier] = source
