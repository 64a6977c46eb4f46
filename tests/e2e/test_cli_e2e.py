from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the entry point
script via subprocess. These tests validate argument parsing, exit codes,
stream output (stdout/stderr), and file system side effects.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "smartassets" / "main.py"


def run_cli(args: List[str], cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    """
    Helper to execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH to ensure the package
    is resolvable without being installed in site-packages.

    Args:
        args: List of command line arguments (excluding 'python' and script path).
        cwd: Optional working directory for the subprocess.

    Returns:
        subprocess.CompletedProcess: The result object containing returncode, stdout, and stderr.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8"
    )


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """
    Create a minimal Flutter project.

    Structure:
    /app
      pubspec.yaml
      /assets
        /images
          logo.png
        /fonts
          Manrope-Bold.ttf
    """
    root = tmp_path / "app"
    (root / "assets" / "images").mkdir(parents=True)
    (root / "assets" / "fonts").mkdir(parents=True)
    (root / "assets" / "images" / "logo.png").write_bytes(b"\x89PNG")
    (root / "assets" / "fonts" / "Manrope-Bold.ttf").write_bytes(b"\x00")
    (root / "pubspec.yaml").write_text("name: sample_app\nflutter:\n", encoding="utf-8")
    return root


def test_no_command_prints_usage() -> None:
    """TC-01: Running without a command exits with status 64."""
    result = run_cli([])

    assert result.returncode == 64
    assert "usage:" in result.stderr


def test_help_output() -> None:
    """TC-02: The generate command documents its options."""
    result = run_cli(["generate", "--help"])

    assert result.returncode == 0
    assert "--dry-run" in result.stdout
    assert "--assets-dir" in result.stdout


def test_generate_happy_path(sample_project: Path) -> None:
    """TC-03: Generation from the project directory writes both files."""
    result = run_cli(["generate"], cwd=sample_project)

    assert result.returncode == 0, result.stderr
    assert "Found 2 asset files across 2 groups." in result.stdout
    assert "Done. Import from: package:sample_app/core/assets/app_assets.dart" in result.stdout
    assert "Scanning project at:" in result.stderr

    generated = sample_project / "lib" / "core" / "assets" / "app_assets.dart"
    assert "class AppFontFamilies {" in generated.read_text(encoding="utf-8")
    assert "assets/images/" in (sample_project / "pubspec.yaml").read_text(encoding="utf-8")


def test_second_run_reports_no_changes(sample_project: Path) -> None:
    """TC-04: A repeated run leaves pubspec.yaml alone."""
    run_cli(["generate", "-p", str(sample_project)])
    result = run_cli(["generate", "-p", str(sample_project)])

    assert result.returncode == 0
    assert "No changes required in pubspec.yaml." in result.stdout


def test_json_dry_run(sample_project: Path) -> None:
    """TC-05: JSON output carries counts; dry run writes nothing."""
    result = run_cli(["generate", "-p", str(sample_project), "--dry-run", "--json"])

    assert result.returncode == 0, result.stderr
    payload = json.loads(result.stdout)
    assert payload["ok"] is True
    assert payload["dry_run"] is True
    assert payload["assets_added"] == 2
    assert payload["font_families"] == ["Manrope"]
    assert payload["import_path"] == "package:sample_app/core/assets/app_assets.dart"
    assert not (sample_project / "lib").exists()


def test_missing_pubspec_fails(tmp_path: Path) -> None:
    """TC-06: A directory without pubspec.yaml exits with status 1."""
    result = run_cli(["generate", "-p", str(tmp_path)])

    assert result.returncode == 1
    assert "pubspec.yaml not found" in result.stderr


def test_dump_and_save_config(sample_project: Path) -> None:
    """TC-07: Effective options can be printed and persisted."""
    result = run_cli([
        "generate", "-p", str(sample_project),
        "--fonts-dir", "typefaces", "--save-config", "--dump-config",
    ])

    assert result.returncode == 0
    assert json.loads(result.stdout)["fonts_dir"] == "typefaces"

    dumped = run_cli(["generate", "-p", str(sample_project), "--dump-config"])
    assert json.loads(dumped.stdout)["fonts_dir"] == "typefaces"
