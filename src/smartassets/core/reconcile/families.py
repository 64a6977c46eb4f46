from __future__ import annotations

"""
Font Family Grouping.

Derives a family name from a font filename with a fixed, case-sensitive
heuristic and groups font files by that name.
"""

import posixpath
from typing import Dict, Iterable, List

from smartassets.domain.constants import FAMILY_SEPARATORS


def extract_family_name(stem: str) -> str:
    """
    Derive the family name of a font file from its stem.

    Separators are tried in the order '-', '_', ' '. The first one that
    occurs in the stem splits it, and the family is everything before its
    first occurrence. Without any separator the whole stem is the family.

    >>> extract_family_name("Roboto-Regular")
    'Roboto'
    >>> extract_family_name("NotoSans")
    'NotoSans'
    """
    for sep in FAMILY_SEPARATORS:
        if sep in stem:
            return stem.split(sep, 1)[0]
    return stem


def family_of_path(path: str) -> str:
    """Family name of a font file given its forward-slash path."""
    stem, _ = posixpath.splitext(posixpath.basename(path))
    return extract_family_name(stem)


def group_font_files(paths: Iterable[str]) -> Dict[str, List[str]]:
    """
    Group font file paths by family.

    Args:
        paths: Forward-slash font file paths in discovery order.

    Returns:
        Dict[str, List[str]]: Family name to paths, both in first-seen order.
    """
    families: Dict[str, List[str]] = {}
    for path in paths:
        families.setdefault(family_of_path(path), []).append(path)
    return families
