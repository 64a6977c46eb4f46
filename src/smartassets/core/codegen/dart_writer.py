from __future__ import annotations

"""
Dart Source Rendering.

Renders a GenerationModel into the text of 'app_assets.dart': a marker
header, a per-group count summary, one class of string constants per
asset group, an aggregate class and a class of font family names.
"""

import re
from typing import Dict, List, Tuple

from smartassets.domain.codegen_models import AssetConstantGroup, GenerationModel
from smartassets.domain.constants import (
    AGGREGATE_CLASS_NAME,
    CLASS_PREFIX,
    FONT_FAMILIES_CLASS_NAME,
    GENERATED_MARKER,
)
from smartassets.domain.errors import IdentifierCollisionError

_WORD_SPLIT_RX = re.compile(r"[^A-Za-z0-9]+")
_INDENT = "  "

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def group_label(group: AssetConstantGroup) -> str:
    """Human-readable label of a group, as used in the summary ('Images')."""
    if group.group_name == "":
        return "Root"
    words = [w for w in _WORD_SPLIT_RX.split(group.group_name) if w]
    if not words:
        return group.key.title()
    return " ".join(w[0].upper() + w[1:] for w in words)


def group_class_name(group: AssetConstantGroup) -> str:
    """Dart class name of a group ('images' -> 'AppImages')."""
    return CLASS_PREFIX + group_label(group).replace(" ", "")


def group_summary(model: GenerationModel) -> Dict[str, int]:
    """File count per group label, in group order."""
    return {group_label(g): len(g.constants) for g in model.groups}


def render_dart_source(model: GenerationModel, assets_dir: str = "assets") -> str:
    """
    Render the complete Dart file for a generation model.

    Args:
        model: Collision-checked constants to emit.
        assets_dir: Resource root name, quoted in the header.

    Returns:
        str: File content ending with a newline.

    Raises:
        IdentifierCollisionError: If two groups map to the same class name
                                  or a group clashes with a reserved class.
    """
    class_names = _assign_class_names(model)

    lines: List[str] = []
    lines.extend(_render_header(model, assets_dir))

    for group in model.groups:
        lines.append("")
        lines.extend(_render_class(
            class_names[group.key],
            f"Assets under {assets_dir}/{group.group_name + '/' if group.group_name else ''}.",
            [(c.identifier, c.path) for c in group.constants],
        ))

    lines.append("")
    lines.extend(_render_class(
        AGGREGATE_CLASS_NAME,
        "Every asset of the project, qualified by its top-level folder.",
        [(c.identifier, c.path) for c in model.aggregate],
    ))

    lines.append("")
    lines.extend(_render_class(
        FONT_FAMILIES_CLASS_NAME,
        "Font family names declared in pubspec.yaml.",
        [(f.identifier, f.family) for f in model.font_families],
    ))

    return "\n".join(lines) + "\n"

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _assign_class_names(model: GenerationModel) -> Dict[str, str]:
    owners: Dict[str, str] = {
        AGGREGATE_CLASS_NAME: "<aggregate>",
        FONT_FAMILIES_CLASS_NAME: "<font families>",
    }
    names: Dict[str, str] = {}
    for group in model.groups:
        name = group_class_name(group)
        source = group.group_name or "<root>"
        if name in owners:
            raise IdentifierCollisionError("generated classes", name, [owners[name], source])
        owners[name] = source
        names[group.key] = name
    return names


def _render_header(model: GenerationModel, assets_dir: str) -> List[str]:
    lines = [
        GENERATED_MARKER,
        f"// Generated by smartassets from the {assets_dir}/ directory.",
        "// Run `smartassets generate` again after adding or removing assets.",
        "//",
        "// Summary:",
    ]
    for label, count in group_summary(model).items():
        lines.append(f"//   {label}: {count}")
    lines.append(f"//   Total: {model.total_constants}")
    lines.append(f"//   Font families: {len(model.font_families)}")
    lines.append("")
    lines.append("// ignore_for_file: constant_identifier_names")
    return lines


def _render_class(name: str, doc: str, constants: List[Tuple[str, str]]) -> List[str]:
    lines = [
        f"/// {doc}",
        f"class {name} {{",
        f"{_INDENT}{name}._();",
    ]
    if constants:
        lines.append("")
    for identifier, value in constants:
        lines.append(f"{_INDENT}static const String {identifier} = {_dart_string(value)};")
    lines.append("}")
    return lines


def _dart_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'").replace("$", "\\$")
    return f"'{escaped}'"
