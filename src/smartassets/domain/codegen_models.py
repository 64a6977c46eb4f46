from __future__ import annotations

"""
Code Generation Data Models.

Language-neutral description of the constants that the source writer
emits: one container per asset group, one aggregate container and one
container of font family names.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class AssetConstant:
    """
    Attributes:
        identifier: Constant name matching ^[A-Z_][A-Z0-9_]*$.
        path: Forward-slash asset path relative to the project root.
    """
    identifier: str
    path: str


@dataclass(frozen=True)
class AssetConstantGroup:
    """
    Attributes:
        key: Upper-cased grouping key (ROOT for loose files).
        group_name: Folder name as found on disk.
        constants: Constants in discovery order.
    """
    key: str
    group_name: str
    constants: List[AssetConstant] = field(default_factory=list)


@dataclass(frozen=True)
class FontFamilyConstant:
    identifier: str
    family: str


@dataclass(frozen=True)
class GenerationModel:
    """
    Everything the source writer needs, with identifiers already checked
    for collisions.
    """
    groups: List[AssetConstantGroup] = field(default_factory=list)
    aggregate: List[AssetConstant] = field(default_factory=list)
    font_families: List[FontFamilyConstant] = field(default_factory=list)

    @property
    def total_constants(self) -> int:
        return len(self.aggregate)
