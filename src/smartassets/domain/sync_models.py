from __future__ import annotations

"""
Synchronization Result Models.

Defines the result object returned by the sync pipeline to the CLI and
the factory functions used to build it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from smartassets.domain.manifest_models import ChangeCounts

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SyncResult:
    """
    Unified result object of a complete synchronization run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        project_root: Normalized project directory.
        pubspec_path: Absolute path of the manifest document.
        output_path: Absolute path of the generated Dart file.
        dry_run: Whether disk writes were skipped.
        pubspec_enabled: Whether the run was allowed to edit the document.
        assets_added: Directory declarations appended.
        assets_removed: Directory declarations retired.
        fonts_added: Font asset entries appended.
        fonts_removed: Font asset entries retired.
        pubspec_updated: Whether the document text changed on disk.
        code_generated: Whether the Dart file was written.
        package_name: Value of the document 'name' key, if any.
        group_counts: File count per group label, in discovery order.
        total_files: Number of asset files discovered.
        font_families: Family names found under the fonts folder.
    """
    ok: bool
    error: str

    project_root: str
    pubspec_path: str
    output_path: str
    dry_run: bool = False
    pubspec_enabled: bool = True

    assets_added: int = 0
    assets_removed: int = 0
    fonts_added: int = 0
    fonts_removed: int = 0

    pubspec_updated: bool = False
    code_generated: bool = False

    package_name: Optional[str] = None
    group_counts: Dict[str, int] = field(default_factory=dict)
    total_files: int = 0
    font_families: List[str] = field(default_factory=list)

    @property
    def import_path(self) -> str:
        package = self.package_name or "<your_package>"
        return f"package:{package}/{_lib_relative(self.output_path)}"


def _lib_relative(output_path: str) -> str:
    """Return the portion of the output path below 'lib/'."""
    normalized = output_path.replace("\\", "/")
    marker = "/lib/"
    idx = normalized.rfind(marker)
    if idx >= 0:
        return normalized[idx + len(marker):]
    return normalized.rsplit("/", 1)[-1]

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        cfg: Dict[str, Any],
        project_root: str,
        pubspec_path: str = "",
        output_path: str = "",
        dry_run: bool = False,
) -> SyncResult:
    """
    Create a failed sync result instance.

    Args:
        error: Detailed error description.
        cfg: The configuration used during the failed run.
        project_root: The target project directory.
        pubspec_path: Resolved manifest path, if known.
        output_path: Resolved generated file path, if known.
        dry_run: Whether the run was a simulation.

    Returns:
        SyncResult: An immutable error result object.
    """
    return SyncResult(
        ok=False,
        error=error,
        project_root=project_root,
        pubspec_path=pubspec_path or cfg.get("pubspec_file", ""),
        output_path=output_path or cfg.get("output_file", ""),
        dry_run=dry_run,
    )


def create_success_result(
        project_root: str,
        pubspec_path: str,
        output_path: str,
        counts: ChangeCounts,
        *,
        dry_run: bool = False,
        pubspec_enabled: bool = True,
        pubspec_updated: bool = False,
        code_generated: bool = False,
        package_name: Optional[str] = None,
        group_counts: Optional[Dict[str, int]] = None,
        font_families: Optional[List[str]] = None,
) -> SyncResult:
    """
    Create a successful sync result instance.

    Args:
        project_root: Normalized project directory.
        pubspec_path: Absolute manifest path.
        output_path: Absolute generated file path.
        counts: Change report of the reconciliation.
        dry_run: Whether disk writes were skipped.
        pubspec_enabled: Whether manifest updates were requested.
        pubspec_updated: Whether the manifest was rewritten.
        code_generated: Whether the Dart file was written.
        package_name: Package name read from the manifest.
        group_counts: File count per group label.
        font_families: Discovered family names.

    Returns:
        SyncResult: An immutable success result object.
    """
    group_counts = group_counts or {}
    return SyncResult(
        ok=True,
        error="",
        project_root=project_root,
        pubspec_path=pubspec_path,
        output_path=output_path,
        dry_run=dry_run,
        pubspec_enabled=pubspec_enabled,
        assets_added=counts.assets_added,
        assets_removed=counts.assets_removed,
        fonts_added=counts.fonts_added,
        fonts_removed=counts.fonts_removed,
        pubspec_updated=pubspec_updated,
        code_generated=code_generated,
        package_name=package_name,
        group_counts=dict(group_counts),
        total_files=sum(group_counts.values()),
        font_families=list(font_families or []),
    )
