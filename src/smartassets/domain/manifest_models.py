from __future__ import annotations

"""
Manifest Domain Data Models.

Typed view over the part of pubspec.yaml owned by the reconciliation
engine (asset directory declarations and font family blocks), together
with the fresh disk state it is merged against and the change report it
produces.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from smartassets.domain.asset_models import DirectoryDeclaration

# -----------------------------------------------------------------------------
# FONT DECLARATIONS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FontAssetEntry:
    """
    One font file declared inside a family block.

    Attributes:
        asset: Forward-slash path of the font file.
        attributes: Sibling keys of 'asset' (weight, style...) kept verbatim.
    """
    asset: str
    attributes: Dict[str, Any] = field(default_factory=dict)

    def to_document(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"asset": self.asset}
        out.update(self.attributes)
        return out


@dataclass(frozen=True)
class FontFamily:
    """
    A font family block.

    Attributes:
        name: Family name, compared case-sensitively.
        entries: Ordered font asset entries.
        extras: Unknown keys of the block, passed through untouched.
    """
    name: str
    entries: List[FontAssetEntry] = field(default_factory=list)
    extras: Dict[str, Any] = field(default_factory=dict)

    @property
    def assets(self) -> List[str]:
        return [e.asset for e in self.entries]

    def to_document(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"family": self.name}
        out.update(self.extras)
        out["fonts"] = [e.to_document() for e in self.entries]
        return out

# -----------------------------------------------------------------------------
# RECONCILIATION INPUTS AND OUTPUTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class DocumentFragment:
    """
    The declarations currently stored in the document.

    Attributes:
        assets: Asset entries in stored order.
        fonts: Family blocks in stored order.
    """
    assets: List[str] = field(default_factory=list)
    fonts: List[FontFamily] = field(default_factory=list)


@dataclass(frozen=True)
class FreshScan:
    """
    Disk state observed for the current run.

    Attributes:
        directories: Directory declarations in discovery order.
        font_files: Font file paths found under the fonts folder.
    """
    directories: List[DirectoryDeclaration] = field(default_factory=list)
    font_files: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ChangeCounts:
    """
    Summary of what a reconciliation changed.
    """
    assets_added: int = 0
    assets_removed: int = 0
    fonts_added: int = 0
    fonts_removed: int = 0

    @property
    def has_changes(self) -> bool:
        return any((self.assets_added, self.assets_removed, self.fonts_added, self.fonts_removed))


@dataclass(frozen=True)
class ReconciledFragment:
    """
    Merged declarations ready to be applied to the document.

    Attributes:
        assets: Merged asset entries.
        empty_dirs: Subset of 'assets' flagged as empty folders.
        fonts: Merged family blocks; empty means the key must be removed.
    """
    assets: List[str] = field(default_factory=list)
    empty_dirs: List[str] = field(default_factory=list)
    fonts: List[FontFamily] = field(default_factory=list)
