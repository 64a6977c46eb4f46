from __future__ import annotations

"""
Unit tests for domain data models and result factories.
"""

from smartassets.domain.asset_models import AssetGroup, ScanResult
from smartassets.domain.errors import (
    IdentifierCollisionError,
    MalformedDocumentError,
    MissingDocumentError,
    SmartAssetsError,
)
from smartassets.domain.manifest_models import ChangeCounts, FontAssetEntry, FontFamily
from smartassets.domain.sync_models import create_error_result, create_success_result


def test_scan_result_lookup_and_totals() -> None:
    """TC-01: Groups are found by name and files are counted."""
    scan = ScanResult("assets", [
        AssetGroup("images", ["assets/images/a.png", "assets/images/b.png"]),
        AssetGroup("", ["assets/c.json"]),
    ])

    assert scan.total_files == 3
    assert scan.group("").files == ["assets/c.json"]
    assert scan.group("videos") is None


def test_font_family_document_layout() -> None:
    """TC-02: 'family' first, extras next, 'fonts' last."""
    family = FontFamily(
        "Roboto",
        [FontAssetEntry("assets/fonts/Roboto-Bold.ttf", {"weight": 700})],
        {"package": "ui"},
    )

    doc = family.to_document()

    assert list(doc) == ["family", "package", "fonts"]
    assert doc["fonts"] == [{"asset": "assets/fonts/Roboto-Bold.ttf", "weight": 700}]


def test_change_counts_has_changes() -> None:
    """TC-03: Any non-zero counter means the document changed."""
    assert not ChangeCounts().has_changes
    assert ChangeCounts(fonts_removed=1).has_changes


def test_success_result_totals_and_import_path() -> None:
    """TC-04: Totals are derived and the import path is package-relative."""
    result = create_success_result(
        "/work/app",
        "/work/app/pubspec.yaml",
        "/work/app/lib/core/assets/app_assets.dart",
        ChangeCounts(assets_added=2),
        package_name="my_app",
        group_counts={"Images": 3, "Fonts": 2},
    )

    assert result.ok
    assert result.total_files == 5
    assert result.assets_added == 2
    assert result.import_path == "package:my_app/core/assets/app_assets.dart"


def test_error_result_falls_back_to_config_paths() -> None:
    """TC-05: Unresolved paths are reported as configured."""
    result = create_error_result(
        "boom", {"pubspec_file": "pubspec.yaml", "output_file": "lib/a.dart"}, "/work/app"
    )

    assert not result.ok
    assert result.error == "boom"
    assert result.pubspec_path == "pubspec.yaml"
    assert result.import_path == "package:<your_package>/a.dart"


def test_error_hierarchy_and_messages() -> None:
    """TC-06: All fatal conditions share a base class."""
    missing = MissingDocumentError("/work/app/pubspec.yaml")
    malformed = MalformedDocumentError("pubspec.yaml", "bad indent")
    collision = IdentifierCollisionError("group IMAGES", "A_PNG", ["a.png", "a-png"])

    assert all(isinstance(e, SmartAssetsError) for e in (missing, malformed, collision))
    assert "pubspec.yaml not found" in str(missing)
    assert "bad indent" in str(malformed)
    assert "'a.png', 'a-png'" in str(collision)
