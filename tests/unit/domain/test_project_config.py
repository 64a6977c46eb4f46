from __future__ import annotations

"""
Unit tests for Configuration Domain Management.

Verifies defaults and the optional project-level smartassets.json file.
"""

import json
from pathlib import Path

from smartassets.domain.config import (
    get_default_config,
    get_project_config_path,
    load_config,
    save_config,
)


def test_default_config_structure() -> None:
    """TC-01: Defaults describe the conventional Flutter layout."""
    cfg = get_default_config("/work/app")

    assert cfg["project_root"] == "/work/app"
    assert cfg["assets_dir"] == "assets"
    assert cfg["fonts_dir"] == "fonts"
    assert cfg["pubspec_file"] == "pubspec.yaml"
    assert cfg["output_file"] == "lib/core/assets/app_assets.dart"
    assert cfg["exclude_patterns"] == [r"^\."]
    assert cfg["update_pubspec"] is True
    assert cfg["generate_code"] is True


def test_default_config_returns_fresh_lists() -> None:
    """TC-02: Mutating one config never leaks into the next."""
    first = get_default_config()
    first["exclude_patterns"].append("x")

    assert get_default_config()["exclude_patterns"] == [r"^\."]


def test_load_without_project_file(tmp_path: Path) -> None:
    """TC-03: A missing file silently yields defaults."""
    assert load_config(str(tmp_path)) == get_default_config(str(tmp_path))


def test_load_merges_known_keys_only(tmp_path: Path) -> None:
    """TC-04: Known keys override defaults; unknown ones are ignored."""
    Path(get_project_config_path(str(tmp_path))).write_text(
        json.dumps({"assets_dir": "res", "generate_code": False, "theme": "dark"}),
        encoding="utf-8",
    )

    cfg = load_config(str(tmp_path))

    assert cfg["assets_dir"] == "res"
    assert cfg["generate_code"] is False
    assert "theme" not in cfg


def test_load_corrupted_file_uses_defaults(tmp_path: Path) -> None:
    """TC-05: Invalid JSON never blocks a run."""
    Path(get_project_config_path(str(tmp_path))).write_text("{not json", encoding="utf-8")

    assert load_config(str(tmp_path)) == get_default_config(str(tmp_path))


def test_save_then_load(tmp_path: Path) -> None:
    """TC-06: Saved options are picked up by the next load."""
    cfg = get_default_config(str(tmp_path))
    cfg["fonts_dir"] = "typefaces"

    path = save_config(cfg)

    saved = json.loads(Path(path).read_text(encoding="utf-8"))
    assert "project_root" not in saved
    assert load_config(str(tmp_path))["fonts_dir"] == "typefaces"
