from __future__ import annotations

"""
Unit tests for Font Family Grouping.
"""

import pytest

from smartassets.core.reconcile.families import (
    extract_family_name,
    family_of_path,
    group_font_files,
)


@pytest.mark.parametrize("stem, expected", [
    ("Roboto-Regular", "Roboto"),
    ("OpenSans_Bold", "OpenSans"),
    ("Fira Code Light", "Fira"),
    ("NotoSans", "NotoSans"),
    ("Open_Sans-Bold", "Open_Sans"),
    ("Inter-Variable-Italic", "Inter"),
])
def test_extract_family_name(stem: str, expected: str) -> None:
    """TC-01: Separators are tried in order, split at first occurrence."""
    assert extract_family_name(stem) == expected


def test_family_of_path_ignores_extension_and_folders() -> None:
    """TC-02: Only the file stem participates in the heuristic."""
    assert family_of_path("assets/fonts/sub-dir/Manrope-Bold.ttf") == "Manrope"
    assert family_of_path("assets/fonts/Lato.otf") == "Lato"


def test_group_font_files_is_case_sensitive() -> None:
    """TC-03: 'roboto' and 'Roboto' are distinct families."""
    grouped = group_font_files([
        "assets/fonts/Roboto-Regular.ttf",
        "assets/fonts/roboto-Bold.ttf",
        "assets/fonts/Roboto-Bold.ttf",
    ])

    assert grouped == {
        "Roboto": ["assets/fonts/Roboto-Regular.ttf", "assets/fonts/Roboto-Bold.ttf"],
        "roboto": ["assets/fonts/roboto-Bold.ttf"],
    }
