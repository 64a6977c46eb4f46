from __future__ import annotations

"""
Unit tests for the Asset Discovery Service.

Verifies grouping by top-level folder, deterministic ordering, directory
declarations with emptiness flags and exclusion filtering.
"""

from smartassets.core.services.scanner import (
    build_fresh_scan,
    collect_asset_directories,
    collect_font_files,
    compile_patterns,
    matches_any,
    scan_assets,
)


def test_scan_missing_assets_dir_returns_empty(flutter_project) -> None:
    """TC-01: A project without assets/ yields no groups."""
    result = scan_assets(str(flutter_project.root), "assets")

    assert result.groups == []
    assert result.total_files == 0


def test_scan_groups_by_top_level_folder(flutter_project) -> None:
    """TC-02: Files are grouped by their first folder, nested files included."""
    flutter_project.add_files([
        "assets/images/logo.png",
        "assets/images/icons/home.png",
        "assets/fonts/Roboto-Regular.ttf",
    ])

    result = scan_assets(str(flutter_project.root), "assets")

    assert [g.group_name for g in result.groups] == ["fonts", "images"]
    assert result.group("images").files == [
        "assets/images/logo.png",
        "assets/images/icons/home.png",
    ]
    assert result.group("fonts").files == ["assets/fonts/Roboto-Regular.ttf"]
    assert result.total_files == 3


def test_scan_root_files_form_unnamed_group(flutter_project) -> None:
    """TC-03: Loose files in the resource root land in the "" group."""
    flutter_project.add_files(["assets/config.json", "assets/images/a.png"])

    result = scan_assets(str(flutter_project.root), "assets")

    assert [g.group_name for g in result.groups] == ["", "images"]
    assert result.group("").files == ["assets/config.json"]


def test_scan_omits_folders_without_files(flutter_project) -> None:
    """TC-04: A top-level folder with only empty subfolders is not a group."""
    flutter_project.add_dirs(["assets/videos/raw"])
    flutter_project.add_files(["assets/images/a.png"])

    result = scan_assets(str(flutter_project.root), "assets")

    assert [g.group_name for g in result.groups] == ["images"]


def test_scan_default_exclusion_skips_hidden_entries(flutter_project) -> None:
    """TC-05: Hidden files and folders are skipped when excluded."""
    flutter_project.add_files([
        "assets/images/.DS_Store",
        "assets/.cache/blob.bin",
        "assets/images/a.png",
    ])

    result = scan_assets(str(flutter_project.root), "assets", [r"^\."])

    assert [g.group_name for g in result.groups] == ["images"]
    assert result.group("images").files == ["assets/images/a.png"]


def test_collect_directories_preorder_with_empty_flags(flutter_project) -> None:
    """TC-06: Folders are declared in pre-order and empty ones are flagged."""
    flutter_project.add_files([
        "assets/images/a.png",
        "assets/images/icons/b.png",
    ])
    flutter_project.add_dirs(["assets/images/unused", "assets/videos"])

    decls = collect_asset_directories(str(flutter_project.root), "assets")

    assert [(d.path, d.is_empty) for d in decls] == [
        ("assets/images/", False),
        ("assets/images/icons/", False),
        ("assets/images/unused/", True),
        ("assets/videos/", True),
    ]


def test_collect_directories_declares_root_for_loose_files(flutter_project) -> None:
    """TC-07: The resource root is declared at the position of its first file."""
    flutter_project.add_files(["assets/a_folder/x.png", "assets/b.json", "assets/c_folder/y.png"])

    decls = collect_asset_directories(str(flutter_project.root), "assets")

    assert [d.path for d in decls] == [
        "assets/a_folder/",
        "assets/",
        "assets/c_folder/",
    ]


def test_parent_with_only_nested_files_is_not_empty(flutter_project) -> None:
    """TC-08: Emptiness considers every file beneath a folder."""
    flutter_project.add_files(["assets/data/deep/nested/file.json"])

    decls = collect_asset_directories(str(flutter_project.root), "assets")

    assert all(not d.is_empty for d in decls)
    assert [d.path for d in decls] == [
        "assets/data/",
        "assets/data/deep/",
        "assets/data/deep/nested/",
    ]


def test_collect_font_files(flutter_project) -> None:
    """TC-09: Font files come from the fonts folder only."""
    flutter_project.add_files([
        "assets/fonts/Manrope-Bold.ttf",
        "assets/fonts/Manrope-Regular.ttf",
        "assets/images/not_a_font.png",
    ])

    fonts = collect_font_files(str(flutter_project.root), "assets", "fonts")

    assert fonts == ["assets/fonts/Manrope-Bold.ttf", "assets/fonts/Manrope-Regular.ttf"]
    assert collect_font_files(str(flutter_project.root), "assets", "typefaces") == []


def test_build_fresh_scan_combines_both_views(flutter_project) -> None:
    """TC-10: The fresh scan carries directories and font files together."""
    flutter_project.add_files(["assets/fonts/Inter.ttf"])

    fresh = build_fresh_scan(str(flutter_project.root), "assets", "fonts")

    assert [d.path for d in fresh.directories] == ["assets/fonts/"]
    assert fresh.font_files == ["assets/fonts/Inter.ttf"]


def test_invalid_patterns_are_discarded() -> None:
    """TC-11: Malformed regexes do not break compilation of the others."""
    compiled = compile_patterns(["(unclosed", r"\.tmp$"])

    assert len(compiled) == 1
    assert matches_any("cache.tmp", compiled)
    assert not matches_any("logo.png", compiled)
