from __future__ import annotations

"""
Pubspec Document Store.

Typed wrapper over the round-trip parse of pubspec.yaml. The
reconciliation engine only ever reads and writes 'flutter.assets' and
'flutter.fonts' through the accessors below; every other key, comment
and blank line is carried through untouched.

Sequences are edited in place (stale items deleted, new ones appended)
so comments attached to surviving entries stay with them. Output uses
block style with sequences indented under their parent key, the layout
used by 'flutter create'.
"""

import io
import logging
import os
from typing import Any, Callable, Dict, List, Optional, Set

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq
from ruamel.yaml.error import YAMLError

from smartassets.domain.constants import (
    ASSETS_KEY_PATH,
    EMPTY_FOLDER_COMMENT,
    FAMILY_FONTS_KEY,
    FAMILY_KEY,
    FLUTTER_KEY,
    FONT_ASSET_KEY,
    FONTS_KEY_PATH,
    PACKAGE_NAME_KEY,
)
from smartassets.domain.errors import MalformedDocumentError, MissingDocumentError
from smartassets.domain.manifest_models import (
    DocumentFragment,
    FontAssetEntry,
    FontFamily,
    ReconciledFragment,
)
from smartassets.infra.fs import read_text, to_posix, write_text_atomic

logger = logging.getLogger(__name__)

_MISSING = object()

# Width of '    - ' in front of an asset entry
_ASSET_ITEM_COLUMN = 6


def _make_yaml() -> YAML:
    yaml = YAML()
    yaml.preserve_quotes = True
    yaml.width = 4096
    yaml.indent(mapping=2, sequence=4, offset=2)
    return yaml


class PubspecDocument:
    """
    In-memory pubspec.yaml with dotted-path access.

    Attributes:
        path: File the document was loaded from (or will be saved to).
    """

    def __init__(self, data: CommentedMap, path: str = "<memory>"):
        self.path = path
        self._data = data
        self._yaml = _make_yaml()
        self._snapshot = _plain(data)
        self._marks_changed = False

    # -------------------------------------------------------------------------
    # LOADING AND SAVING
    # -------------------------------------------------------------------------

    @classmethod
    def load(cls, path: str) -> "PubspecDocument":
        """
        Read and parse a document from disk.

        Raises:
            MissingDocumentError: If the file does not exist.
            MalformedDocumentError: If the YAML is invalid or not a mapping.
        """
        if not os.path.isfile(path):
            raise MissingDocumentError(path)
        try:
            text = read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            raise MalformedDocumentError(path, f"cannot be read ({e})") from e
        return cls.loads(text, path)

    @classmethod
    def loads(cls, text: str, path: str = "<memory>") -> "PubspecDocument":
        """Parse a document from text, keeping comments and key order."""
        try:
            data = _make_yaml().load(text)
        except YAMLError as e:
            raise MalformedDocumentError(path, f"invalid YAML ({e})") from e

        if data is None:
            data = CommentedMap()
        if not isinstance(data, dict):
            raise MalformedDocumentError(
                path, f"top level must be a mapping, found {type(data).__name__}"
            )
        return cls(data, path)

    def dumps(self) -> str:
        buf = io.StringIO()
        self._yaml.dump(self._data, buf)
        return buf.getvalue()

    def save(self, path: Optional[str] = None) -> str:
        """
        Write the document atomically.

        Args:
            path: Destination; defaults to the path it was loaded from.

        Returns:
            str: The written path.
        """
        target = path or self.path
        write_text_atomic(target, self.dumps())
        self._snapshot = _plain(self._data)
        self._marks_changed = False
        logger.debug(f"Document saved to {target}")
        return target

    @property
    def changed(self) -> bool:
        """
        True if the content or the empty-folder markers differ from what
        was loaded or last saved.
        """
        return self._marks_changed or _plain(self._data) != self._snapshot

    @property
    def data(self) -> CommentedMap:
        return self._data

    # -------------------------------------------------------------------------
    # DOTTED KEY ACCESS
    # -------------------------------------------------------------------------

    def get(self, key_path: str, default: Any = None) -> Any:
        node: Any = self._data
        for key in key_path.split("."):
            if not isinstance(node, dict) or key not in node:
                return default
            node = node[key]
        return node

    def set(self, key_path: str, value: Any) -> None:
        """
        Assign a value, creating intermediate mappings (and replacing null
        ones). Existing keys keep their position.
        """
        keys = key_path.split(".")
        node = self._data
        for key in keys[:-1]:
            child = node.get(key, _MISSING)
            if child is _MISSING or child is None:
                child = CommentedMap()
                node[key] = child
            elif not isinstance(child, dict):
                raise MalformedDocumentError(
                    self.path, f"'{key}' must be a mapping, found {type(child).__name__}"
                )
            node = child
        node[keys[-1]] = value

    def remove(self, key_path: str) -> bool:
        """Delete a key if present. Returns True when something was removed."""
        keys = key_path.split(".")
        parent = self.get(".".join(keys[:-1])) if len(keys) > 1 else self._data
        if isinstance(parent, dict) and keys[-1] in parent:
            del parent[keys[-1]]
            return True
        return False

    # -------------------------------------------------------------------------
    # TYPED ACCESSORS
    # -------------------------------------------------------------------------

    @property
    def package_name(self) -> Optional[str]:
        value = self._data.get(PACKAGE_NAME_KEY)
        return None if value is None else str(value)

    def ensure_flutter_section(self) -> bool:
        """
        Create an empty 'flutter:' mapping when absent or null.

        Returns:
            bool: True if the section had to be created.
        """
        section = self._data.get(FLUTTER_KEY, _MISSING)
        if section is _MISSING or section is None:
            self._data[FLUTTER_KEY] = CommentedMap()
            return True
        if not isinstance(section, dict):
            raise MalformedDocumentError(
                self.path, f"'{FLUTTER_KEY}' must be a mapping, found {type(section).__name__}"
            )
        return False

    def asset_entries(self) -> List[str]:
        value = self.get(ASSETS_KEY_PATH)
        if value is None:
            return []
        if not isinstance(value, list):
            raise MalformedDocumentError(
                self.path, f"'{ASSETS_KEY_PATH}' must be a list, found {type(value).__name__}"
            )
        entries: List[str] = []
        for i, item in enumerate(value):
            if not isinstance(item, str):
                raise MalformedDocumentError(
                    self.path, f"'{ASSETS_KEY_PATH}[{i}]' must be a path string"
                )
            entries.append(str(item))
        return entries

    def font_families(self) -> List[FontFamily]:
        value = self.get(FONTS_KEY_PATH)
        if value is None:
            return []
        if not isinstance(value, list):
            raise MalformedDocumentError(
                self.path, f"'{FONTS_KEY_PATH}' must be a list, found {type(value).__name__}"
            )
        return [self._parse_family(i, block) for i, block in enumerate(value)]

    def fragment(self) -> DocumentFragment:
        """Declarations owned by the reconciliation engine."""
        return DocumentFragment(assets=self.asset_entries(), fonts=self.font_families())

    def empty_marked_entries(self) -> List[str]:
        """Asset entries currently carrying the empty-folder comment."""
        seq = self.get(ASSETS_KEY_PATH)
        if not isinstance(seq, CommentedSeq):
            return []
        return [str(v) for i, v in enumerate(seq) if _has_empty_mark(seq, i)]

    def apply(self, reconciled: ReconciledFragment) -> None:
        """
        Store merged declarations in place. An empty family list removes
        the 'flutter.fonts' key entirely.
        """
        self._apply_assets(reconciled.assets, set(reconciled.empty_dirs))
        self._apply_fonts(reconciled.fonts)

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    def _apply_assets(self, assets: List[str], empty_dirs: Set[str]) -> None:
        seq = self.get(ASSETS_KEY_PATH)
        if not isinstance(seq, CommentedSeq):
            seq = CommentedSeq()
            self.set(ASSETS_KEY_PATH, seq)

        for i, item in enumerate(seq):
            normalized = to_posix(str(item))
            if normalized != item:
                seq[i] = normalized
        _sync_items(seq, list(assets), key=str)

        for i, item in enumerate(seq):
            if item in empty_dirs:
                changed = _add_empty_mark(seq, i, _ASSET_ITEM_COLUMN + len(item) + 2)
            else:
                changed = _drop_empty_mark(seq, i)
            self._marks_changed = self._marks_changed or changed

    def _apply_fonts(self, families: List[FontFamily]) -> None:
        if not families:
            self.remove(FONTS_KEY_PATH)
            return

        seq = self.get(FONTS_KEY_PATH)
        if not isinstance(seq, CommentedSeq):
            self.set(FONTS_KEY_PATH, CommentedSeq(_family_block(None, f) for f in families))
            return

        blocks: Dict[str, CommentedMap] = {}
        for block in seq:
            blocks.setdefault(str(block[FAMILY_KEY]), block)
        _sync_items(seq, [_family_block(blocks.get(f.name), f) for f in families], key=id)

    def _parse_family(self, index: int, block: Any) -> FontFamily:
        where = f"{FONTS_KEY_PATH}[{index}]"
        if not isinstance(block, dict) or block.get(FAMILY_KEY) is None:
            raise MalformedDocumentError(self.path, f"'{where}' must be a mapping with a '{FAMILY_KEY}' key")

        raw_fonts = block.get(FAMILY_FONTS_KEY) or []
        if not isinstance(raw_fonts, list):
            raise MalformedDocumentError(self.path, f"'{where}.{FAMILY_FONTS_KEY}' must be a list")

        entries: List[FontAssetEntry] = []
        for j, raw in enumerate(raw_fonts):
            if not isinstance(raw, dict) or not isinstance(raw.get(FONT_ASSET_KEY), str):
                raise MalformedDocumentError(
                    self.path, f"'{where}.{FAMILY_FONTS_KEY}[{j}]' must have an '{FONT_ASSET_KEY}' path"
                )
            attributes = {k: v for k, v in raw.items() if k != FONT_ASSET_KEY}
            entries.append(FontAssetEntry(str(raw[FONT_ASSET_KEY]), attributes))

        extras = {k: v for k, v in block.items() if k not in (FAMILY_KEY, FAMILY_FONTS_KEY)}
        return FontFamily(str(block[FAMILY_KEY]), entries, extras)

# -----------------------------------------------------------------------------
# MODULE HELPERS
# -----------------------------------------------------------------------------

def _plain(node: Any) -> Any:
    """Comment-free copy of a parsed tree, for content comparison."""
    if isinstance(node, dict):
        return {k: _plain(v) for k, v in node.items()}
    if isinstance(node, list):
        return [_plain(v) for v in node]
    return node


def _to_commented(node: Any) -> Any:
    if isinstance(node, dict) and not isinstance(node, CommentedMap):
        return CommentedMap((k, _to_commented(v)) for k, v in node.items())
    if isinstance(node, list) and not isinstance(node, CommentedSeq):
        return CommentedSeq(_to_commented(v) for v in node)
    return node


def _sync_items(seq: CommentedSeq, wanted: List[Any], key: Callable[[Any], Any]) -> None:
    """
    Turn 'seq' into 'wanted' by deleting and appending items, so the
    comments of surviving items stay attached to them.
    """
    wanted_keys = [key(w) for w in wanted]
    allowed = set(wanted_keys)
    seen: Set[Any] = set()

    i = 0
    while i < len(seq):
        k = key(seq[i])
        if k in allowed and k not in seen:
            seen.add(k)
            i += 1
        else:
            del seq[i]

    if [key(x) for x in seq] != wanted_keys[:len(seq)]:
        # Reordering cannot be done in place
        list.clear(seq)
        seq.ca.items.clear()

    for w in wanted[len(seq):]:
        seq.append(w)


def _family_block(block: Optional[CommentedMap], family: FontFamily) -> CommentedMap:
    """Update an existing family block in place, or build a new one."""
    if block is None:
        return _to_commented(family.to_document())

    fonts = block.get(FAMILY_FONTS_KEY)
    if not isinstance(fonts, CommentedSeq):
        fonts = CommentedSeq()
        block[FAMILY_FONTS_KEY] = fonts

    existing: Dict[str, CommentedMap] = {}
    for raw in fonts:
        path = to_posix(str(raw[FONT_ASSET_KEY]))
        if path != raw[FONT_ASSET_KEY]:
            raw[FONT_ASSET_KEY] = path
        existing.setdefault(path, raw)

    wanted = [
        existing.get(e.asset) or _to_commented(e.to_document())
        for e in family.entries
    ]
    _sync_items(fonts, wanted, key=id)
    return block


def _eol_token(seq: CommentedSeq, index: int) -> Any:
    entry = seq.ca.items.get(index)
    return entry[0] if entry else None


def _has_empty_mark(seq: CommentedSeq, index: int) -> bool:
    token = _eol_token(seq, index)
    return token is not None and token.value.lstrip(" ").startswith(EMPTY_FOLDER_COMMENT)


def _add_empty_mark(seq: CommentedSeq, index: int, column: int) -> bool:
    """
    Put the empty-folder comment at the end of an item line. A comment
    written by hand on that line is left alone.

    Returns:
        bool: True if the document text changes.
    """
    token = _eol_token(seq, index)
    if token is None:
        seq.yaml_add_eol_comment(EMPTY_FOLDER_COMMENT, index, column=column)
        return True
    if _has_empty_mark(seq, index):
        return False
    if token.value.startswith("\n"):
        # Only comment lines below the item: prepend ours to the same token
        token.value = EMPTY_FOLDER_COMMENT + token.value
        return True
    return False


def _drop_empty_mark(seq: CommentedSeq, index: int) -> bool:
    """Remove the empty-folder comment, keeping comment lines below it."""
    if not _has_empty_mark(seq, index):
        return False
    token = _eol_token(seq, index)
    _, _, rest = token.value.partition("\n")
    if rest:
        token.value = "\n" + rest
    else:
        seq.ca.items.pop(index, None)
    return True
