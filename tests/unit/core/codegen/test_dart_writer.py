from __future__ import annotations

"""
Unit tests for Dart Source Rendering.
"""

import pytest

from smartassets.core.codegen.dart_writer import (
    group_class_name,
    group_label,
    group_summary,
    render_dart_source,
)
from smartassets.core.codegen.identifiers import build_generation_model
from smartassets.domain.asset_models import AssetGroup, ScanResult
from smartassets.domain.codegen_models import AssetConstantGroup
from smartassets.domain.errors import IdentifierCollisionError


def _model(*groups: AssetGroup):
    return build_generation_model(ScanResult("assets", list(groups)), "fonts")


@pytest.mark.parametrize("group_name, label, class_name", [
    ("images", "Images", "AppImages"),
    ("lottie", "Lottie", "AppLottie"),
    ("app-icons", "App Icons", "AppAppIcons"),
    ("", "Root", "AppRoot"),
])
def test_group_naming(group_name: str, label: str, class_name: str) -> None:
    """TC-01: Labels and class names derive from the folder name."""
    group = AssetConstantGroup("KEY", group_name)

    assert group_label(group) == label
    assert group_class_name(group) == class_name


def test_render_contains_header_and_summary() -> None:
    """TC-02: The header marks the file as generated and counts each group."""
    source = render_dart_source(_model(
        AssetGroup("images", ["assets/images/logo.png"]),
        AssetGroup("fonts", ["assets/fonts/Manrope-Bold.ttf"]),
    ))

    assert source.startswith("// GENERATED CODE - DO NOT MODIFY BY HAND\n")
    assert "//   Images: 1" in source
    assert "//   Fonts: 1" in source
    assert "//   Total: 2" in source
    assert source.endswith("}\n")


def test_render_emits_group_aggregate_and_font_classes() -> None:
    """TC-03: One class per group, then AppAssets and AppFontFamilies."""
    source = render_dart_source(_model(
        AssetGroup("fonts", ["assets/fonts/Manrope-Bold.ttf"]),
        AssetGroup("images", ["assets/images/logo.png"]),
    ))

    assert "class AppImages {" in source
    assert "  AppImages._();" in source
    assert "  static const String LOGO_PNG = 'assets/images/logo.png';" in source
    assert "  static const String IMAGES_LOGO_PNG = 'assets/images/logo.png';" in source
    assert "  static const String MANROPE = 'Manrope';" in source
    assert source.index("class AppFonts") < source.index("class AppImages")
    assert source.index("class AppImages") < source.index("class AppAssets")
    assert source.index("class AppAssets") < source.index("class AppFontFamilies")


def test_render_empty_model() -> None:
    """TC-04: Without assets the reserved classes are still emitted."""
    source = render_dart_source(_model())

    assert "//   Total: 0" in source
    assert "class AppAssets {" in source
    assert "class AppFontFamilies {" in source


def test_render_escapes_dart_string_literals() -> None:
    """TC-05: Quotes and '$' cannot break out of the literal."""
    source = render_dart_source(_model(
        AssetGroup("images", ["assets/images/it's$cash.png"]),
    ))

    assert "'assets/images/it\\'s\\$cash.png'" in source


def test_group_clashing_with_reserved_class_is_fatal() -> None:
    """TC-06: A folder named 'assets' would shadow the aggregate class."""
    model = _model(AssetGroup("assets", ["assets/assets/x.png"]))

    with pytest.raises(IdentifierCollisionError, match="AppAssets"):
        render_dart_source(model)


def test_group_summary_preserves_group_order() -> None:
    """TC-07: Summary keys follow discovery order."""
    summary = group_summary(_model(
        AssetGroup("", ["assets/config.json"]),
        AssetGroup("images", ["assets/images/a.png", "assets/images/b.png"]),
    ))

    assert list(summary.items()) == [("Root", 1), ("Images", 2)]
