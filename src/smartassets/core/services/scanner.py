from __future__ import annotations

"""
Asset Discovery Service.

Walks the resource root of a Flutter project and produces the canonical
in-memory view consumed by the reconciliation engine and the identifier
synthesizer: file groups per top-level folder, directory declarations
with emptiness flags, and the font files to be grouped into families.

Entries are visited in name order so that two runs over the same tree
always produce the same output. Symbolic links are not followed.
"""

import logging
import os
import re
from typing import List, Optional, Tuple

from smartassets.domain.asset_models import AssetGroup, DirectoryDeclaration, ScanResult
from smartassets.domain.manifest_models import FreshScan
from smartassets.infra.fs import relative_posix

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API (DISCOVERY SERVICES)
# ==============================================================================

def scan_assets(
        project_root: str,
        assets_dir: str,
        exclude_patterns: Optional[List[str]] = None,
) -> ScanResult:
    """
    Group every asset file by the top-level folder that contains it.

    Top-level folders holding no file at all are omitted. Files placed
    directly in the resource root form the "" group, positioned where the
    first of them is encountered.

    Args:
        project_root: Absolute path to the Flutter project.
        assets_dir: Name of the resource root inside the project.
        exclude_patterns: Regexes matched against entry basenames.

    Returns:
        ScanResult: Groups in discovery order; empty if the root is absent.
    """
    exclude_rx = compile_patterns(exclude_patterns)
    assets_abs = os.path.join(project_root, assets_dir)
    result = ScanResult(assets_dir=assets_dir)

    if not os.path.isdir(assets_abs):
        logger.info(f"No {assets_dir}/ directory found at {assets_abs}")
        return result

    root_files: Optional[AssetGroup] = None

    for entry in _list_entries(assets_abs, exclude_rx):
        if entry.is_dir(follow_symlinks=False):
            files = [
                relative_posix(p, project_root)
                for p in _walk_files(entry.path, exclude_rx)
            ]
            if files:
                result.groups.append(AssetGroup(entry.name, files))
        elif entry.is_file(follow_symlinks=False):
            if root_files is None:
                root_files = AssetGroup("", [])
                result.groups.append(root_files)
            root_files.files.append(relative_posix(entry.path, project_root))

    logger.debug(
        f"Scanned {result.total_files} asset files across {len(result.groups)} groups."
    )
    return result


def collect_asset_directories(
        project_root: str,
        assets_dir: str,
        exclude_patterns: Optional[List[str]] = None,
) -> List[DirectoryDeclaration]:
    """
    List the directories to declare in the manifest.

    For each top-level folder: the folder itself, then its nested folders
    in pre-order. If loose files sit in the resource root, the root itself
    is declared at the position of the first such file.

    Args:
        project_root: Absolute path to the Flutter project.
        assets_dir: Name of the resource root inside the project.
        exclude_patterns: Regexes matched against entry basenames.

    Returns:
        List[DirectoryDeclaration]: Trailing-slash paths with emptiness flags.
    """
    exclude_rx = compile_patterns(exclude_patterns)
    assets_abs = os.path.join(project_root, assets_dir)
    declarations: List[DirectoryDeclaration] = []

    if not os.path.isdir(assets_abs):
        return declarations

    root_declared = False
    for entry in _list_entries(assets_abs, exclude_rx):
        if entry.is_dir(follow_symlinks=False):
            _collect_directory(entry.path, project_root, exclude_rx, declarations)
        elif entry.is_file(follow_symlinks=False) and not root_declared:
            declarations.append(DirectoryDeclaration(_dir_entry(assets_abs, project_root)))
            root_declared = True

    return declarations


def collect_font_files(
        project_root: str,
        assets_dir: str,
        fonts_dir: str,
        exclude_patterns: Optional[List[str]] = None,
) -> List[str]:
    """
    List every file beneath the fonts folder of the resource root.

    Returns:
        List[str]: Forward-slash paths relative to the project root.
    """
    exclude_rx = compile_patterns(exclude_patterns)
    fonts_abs = os.path.join(project_root, assets_dir, fonts_dir)
    if not os.path.isdir(fonts_abs):
        return []
    return [relative_posix(p, project_root) for p in _walk_files(fonts_abs, exclude_rx)]


def build_fresh_scan(
        project_root: str,
        assets_dir: str,
        fonts_dir: str,
        exclude_patterns: Optional[List[str]] = None,
) -> FreshScan:
    """Capture the disk state the reconciliation engine merges against."""
    return FreshScan(
        directories=collect_asset_directories(project_root, assets_dir, exclude_patterns),
        font_files=collect_font_files(project_root, assets_dir, fonts_dir, exclude_patterns),
    )

# ==============================================================================
# PATTERN COMPILATION AND MATCHING
# ==============================================================================

def compile_patterns(patterns: Optional[List[str]]) -> List[re.Pattern]:
    """
    Transform raw regex strings into compiled Pattern objects.

    Malformed expressions are logged and discarded.
    """
    compiled: List[re.Pattern] = []
    for p in patterns or []:
        try:
            compiled.append(re.compile(p))
        except re.error as e:
            logger.warning(f"Discarding invalid exclude pattern {p!r}: {e}")
    return compiled


def matches_any(name: str, patterns: List[re.Pattern]) -> bool:
    return any(rx.search(name) for rx in patterns)

# ==============================================================================
# PRIVATE HELPERS (WALKING)
# ==============================================================================

def _list_entries(path: str, exclude_rx: List[re.Pattern]) -> List[os.DirEntry]:
    """Return the non-excluded entries of a directory, sorted by name."""
    with os.scandir(path) as it:
        entries = [e for e in it if not matches_any(e.name, exclude_rx)]
    entries.sort(key=lambda e: e.name)
    return entries


def _split_entries(path: str, exclude_rx: List[re.Pattern]) -> Tuple[List[os.DirEntry], List[os.DirEntry]]:
    dirs: List[os.DirEntry] = []
    files: List[os.DirEntry] = []
    for entry in _list_entries(path, exclude_rx):
        if entry.is_dir(follow_symlinks=False):
            dirs.append(entry)
        elif entry.is_file(follow_symlinks=False):
            files.append(entry)
    return dirs, files


def _walk_files(path: str, exclude_rx: List[re.Pattern]) -> List[str]:
    """Absolute file paths beneath 'path': a folder's files, then its subfolders."""
    dirs, files = _split_entries(path, exclude_rx)
    out = [f.path for f in files]
    for d in dirs:
        out.extend(_walk_files(d.path, exclude_rx))
    return out


def _collect_directory(
        path: str,
        project_root: str,
        exclude_rx: List[re.Pattern],
        out: List[DirectoryDeclaration],
) -> bool:
    """
    Append the declaration of 'path' and of its subfolders (pre-order).

    Returns:
        bool: True if at least one file exists beneath 'path'.
    """
    index = len(out)
    out.append(DirectoryDeclaration(_dir_entry(path, project_root)))

    dirs, files = _split_entries(path, exclude_rx)
    has_files = bool(files)
    for d in dirs:
        if _collect_directory(d.path, project_root, exclude_rx, out):
            has_files = True

    if not has_files:
        out[index] = DirectoryDeclaration(out[index].path, is_empty=True)
    return has_files


def _dir_entry(path: str, project_root: str) -> str:
    rel = relative_posix(path, project_root)
    return rel if rel.endswith("/") else f"{rel}/"
