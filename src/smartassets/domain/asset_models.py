from __future__ import annotations

"""
Asset Discovery Data Models.

Defines the structures produced by the directory scanner: file groups
keyed by their top-level folder and the directory declarations that
mirror the on-disk hierarchy.
"""

from dataclasses import dataclass, field
from typing import List

# -----------------------------------------------------------------------------
# SCAN RESULT MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class AssetGroup:
    """
    Files discovered beneath one top-level folder of the resource root.

    Attributes:
        group_name: Top-level folder name, or "" for loose root files.
        files: Forward-slash paths relative to the project root, in
               discovery order.
    """
    group_name: str
    files: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ScanResult:
    """
    Ordered collection of asset groups found under the resource root.

    Attributes:
        assets_dir: Name of the scanned resource root (e.g. 'assets').
        groups: Groups in first-discovery order.
    """
    assets_dir: str
    groups: List[AssetGroup] = field(default_factory=list)

    @property
    def total_files(self) -> int:
        return sum(len(g.files) for g in self.groups)

    def group(self, name: str) -> AssetGroup | None:
        for g in self.groups:
            if g.group_name == name:
                return g
        return None


@dataclass(frozen=True)
class DirectoryDeclaration:
    """
    A directory entry to be declared in the manifest.

    Attributes:
        path: Forward-slash directory path ending with '/'.
        is_empty: True if no file exists anywhere beneath the directory.
    """
    path: str
    is_empty: bool = False
