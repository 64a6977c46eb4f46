from __future__ import annotations

"""
Manifest Reconciliation Engine.

Merges the disk state observed by the scanner into the declarations
already stored in pubspec.yaml. The merge is pure: it touches neither
the filesystem nor the document, and merging an already merged state
with the same scan is a no-op.

Two independent merges are performed:

* Directory declarations: existing entries still on disk keep their
  position, new directories are appended in discovery order, and
  entries no longer on disk are retired.
* Font families: per family, declared fonts still on disk keep their
  order and attributes, new fonts are appended sorted; families left
  without fonts are dropped and undeclared families are appended
  sorted by name.
"""

import logging
from typing import Dict, List, Set, Tuple

from smartassets.core.reconcile.families import group_font_files
from smartassets.domain.manifest_models import (
    ChangeCounts,
    DocumentFragment,
    FontAssetEntry,
    FontFamily,
    FreshScan,
    ReconciledFragment,
)
from smartassets.infra.fs import to_posix

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def reconcile(
        existing: DocumentFragment,
        fresh: FreshScan,
) -> Tuple[ReconciledFragment, ChangeCounts]:
    """
    Merge the fresh disk state into the stored declarations.

    Args:
        existing: Declarations currently stored in the document.
        fresh: Directories and font files observed on disk.

    Returns:
        Tuple[ReconciledFragment, ChangeCounts]: Merged declarations and
        the number of entries added and removed by the merge.
    """
    assets, assets_added, assets_removed = merge_asset_declarations(
        existing.assets, [d.path for d in fresh.directories]
    )
    empty = {d.path for d in fresh.directories if d.is_empty}
    empty_dirs = [a for a in assets if a in empty]

    fonts, fonts_added, fonts_removed = merge_font_families(existing.fonts, fresh.font_files)

    counts = ChangeCounts(
        assets_added=assets_added,
        assets_removed=assets_removed,
        fonts_added=fonts_added,
        fonts_removed=fonts_removed,
    )
    logger.debug(
        f"Reconciled manifest: +{assets_added}/-{assets_removed} asset entries, "
        f"+{fonts_added}/-{fonts_removed} font entries."
    )
    return ReconciledFragment(assets=assets, empty_dirs=empty_dirs, fonts=fonts), counts


def merge_asset_declarations(
        existing: List[str],
        fresh: List[str],
) -> Tuple[List[str], int, int]:
    """
    Merge directory declarations, preferring appends over reordering.

    Args:
        existing: Stored entries, in stored order.
        fresh: Directories found on disk, in discovery order.

    Returns:
        Tuple[List[str], int, int]: (merged entries, added, removed).
    """
    normalized_existing = _dedupe([to_posix(a) for a in existing])
    fresh_normalized = _dedupe([to_posix(p) for p in fresh])
    fresh_set = set(fresh_normalized)

    merged = [a for a in normalized_existing if a in fresh_set]
    seen = set(merged)
    merged.extend(p for p in fresh_normalized if p not in seen)

    existing_set = set(normalized_existing)
    merged_set = set(merged)
    added = sum(1 for p in merged if p not in existing_set)
    removed = sum(1 for p in normalized_existing if p not in merged_set)
    return merged, added, removed


def merge_font_families(
        existing: List[FontFamily],
        font_files: List[str],
) -> Tuple[List[FontFamily], int, int]:
    """
    Merge font family blocks with the font files found on disk.

    Args:
        existing: Stored family blocks, in stored order.
        font_files: Font file paths found under the fonts folder.

    Returns:
        Tuple[List[FontFamily], int, int]: (merged families, added, removed).
    """
    on_disk: Dict[str, List[str]] = group_font_files(to_posix(p) for p in font_files)
    merged: List[FontFamily] = []
    added = 0
    removed = 0

    for family in _combine_duplicate_families(existing):
        disk_paths: Set[str] = set(on_disk.pop(family.name, []))

        kept: List[FontAssetEntry] = []
        declared: Set[str] = set()
        for entry in family.entries:
            if entry.asset in declared:
                continue
            declared.add(entry.asset)
            if entry.asset in disk_paths:
                kept.append(entry)
            else:
                removed += 1

        new_paths = sorted(disk_paths - declared)
        added += len(new_paths)

        entries = kept + [FontAssetEntry(p) for p in new_paths]
        if entries:
            merged.append(FontFamily(family.name, entries, dict(family.extras)))
        else:
            logger.debug(f"Dropping font family '{family.name}': no font files left on disk.")

    for name in sorted(on_disk):
        paths = sorted(set(on_disk[name]))
        added += len(paths)
        merged.append(FontFamily(name, [FontAssetEntry(p) for p in paths]))

    return merged, added, removed

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _dedupe(items: List[str]) -> List[str]:
    seen: Set[str] = set()
    out: List[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return out


def _combine_duplicate_families(families: List[FontFamily]) -> List[FontFamily]:
    """Fold repeated family names into their first block, normalizing paths."""
    combined: Dict[str, FontFamily] = {}
    for family in families:
        entries = [FontAssetEntry(to_posix(e.asset), dict(e.attributes)) for e in family.entries]
        if family.name in combined:
            first = combined[family.name]
            combined[family.name] = FontFamily(first.name, first.entries + entries, first.extras)
        else:
            combined[family.name] = FontFamily(family.name, entries, dict(family.extras))
    return list(combined.values())
