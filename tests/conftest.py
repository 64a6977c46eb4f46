from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A factory fixture that lays out throwaway Flutter projects.
"""

import os
import sys
from pathlib import Path
from typing import Callable, Iterable

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
class FlutterProject:
    """Minimal on-disk Flutter project used by scanner and pipeline tests."""

    def __init__(self, root: Path):
        self.root = root

    @property
    def pubspec(self) -> Path:
        return self.root / "pubspec.yaml"

    @property
    def generated(self) -> Path:
        return self.root / "lib" / "core" / "assets" / "app_assets.dart"

    def write_pubspec(self, content: str = "name: test_app\nflutter:\n") -> Path:
        self.pubspec.write_text(content, encoding="utf-8")
        return self.pubspec

    def add_files(self, rel_paths: Iterable[str], content: str = "mock") -> None:
        for rel in rel_paths:
            target = self.root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")

    def add_dirs(self, rel_paths: Iterable[str]) -> None:
        for rel in rel_paths:
            (self.root / rel).mkdir(parents=True, exist_ok=True)

    def remove(self, rel_path: str) -> None:
        (self.root / rel_path).unlink()


@pytest.fixture
def flutter_project(tmp_path: Path) -> FlutterProject:
    """
    Return an empty project directory wrapped in a small helper API.

    Returns:
        FlutterProject: Helper bound to a fresh temporary directory.
    """
    root = tmp_path / "app"
    root.mkdir()
    return FlutterProject(root)


@pytest.fixture
def make_config(flutter_project: FlutterProject) -> Callable[..., dict]:
    """Build a sync configuration pointing at the temporary project."""

    def _make(**overrides: object) -> dict:
        from smartassets.domain.config import get_default_config

        cfg = get_default_config(str(flutter_project.root))
        cfg.update(overrides)
        return cfg

    return _make
