from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path manipulation and safe persistence helpers.
Every path that leaves this layer towards the manifest or the generated
code uses forward slashes, whatever the host OS.
"""

import os
import shutil
import tempfile
from typing import Optional

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty or malformed.

    Args:
        path: Raw input path string.
        fallback: Default path to use if resolution fails.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    try:
        p = os.path.expandvars(os.path.expanduser(p))
        return os.path.abspath(p)
    except Exception:
        return os.path.abspath(fallback)


def resolve_in_project(project_root: str, path: str) -> str:
    """Join a project-relative path onto the root; absolute paths pass through."""
    if os.path.isabs(path):
        return os.path.normpath(path)
    return os.path.normpath(os.path.join(project_root, path))


def to_posix(path: str) -> str:
    """Convert any separator to '/' and drop a leading './'."""
    p = path.replace("\\", "/")
    while p.startswith("./"):
        p = p[2:]
    return p


def relative_posix(path: str, start: str) -> str:
    """
    Compute a forward-slash relative path.

    Args:
        path: Absolute or relative target path.
        start: Directory the result is relative to.

    Returns:
        str: Relative path using '/' separators.
    """
    return to_posix(os.path.relpath(path, start))

# -----------------------------------------------------------------------------
# PERSISTENCE API
# -----------------------------------------------------------------------------

def read_text(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def write_text_atomic(path: str, content: str) -> None:
    """
    Replace a text file in a single rename so readers never observe a
    partially written file.

    Args:
        path: Target file path. Parent directories are created.
        content: Full file content.

    Raises:
        OSError: If the directory cannot be created or the write fails.
    """
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(prefix=".smartassets-", suffix=".tmp", dir=parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
        # mkstemp creates 0600 files
        if os.path.exists(path):
            shutil.copymode(path, tmp_path)
        else:
            os.chmod(tmp_path, 0o644)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
