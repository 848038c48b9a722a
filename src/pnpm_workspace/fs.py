"""Local filesystem helpers scoped to the configured checkout directory.

Paths passed in and returned are local-relative with posix separators.
"""

from __future__ import annotations

import os
import posixpath
from pathlib import Path

from .config import ConfigError, Settings, load_settings
from .logging import TRACE, get_logger

logger = get_logger("fs")


class FsError(ValueError):
    """Raised when a path escapes the local directory."""


def ensure_local_path(path: str, settings: Settings | None = None) -> Path:
    """Return the absolute path for ``path``, refusing anything outside the local dir."""
    settings = settings or load_settings()
    base = os.path.normpath(settings.local_dir)
    full = os.path.normpath(os.path.join(base, path))
    if os.path.commonpath([base, full]) != base:
        raise FsError(f"Path is outside of the local directory: {path}")
    return Path(full)


def local_path_exists(path: str, settings: Settings | None = None) -> bool:
    try:
        return ensure_local_path(path, settings).exists()
    except (FsError, ConfigError) as exc:
        logger.log(TRACE, "Cannot check local path %s: %s", path, exc)
        return False


def read_local_file(path: str, settings: Settings | None = None) -> str | None:
    """Return the file's text, or None when it cannot be read."""
    try:
        return ensure_local_path(path, settings).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError, FsError, ConfigError) as exc:
        logger.log(TRACE, "Error reading local file %s: %s", path, exc)
        return None


def get_parent_dir(path: str) -> str:
    parent = posixpath.dirname(path)
    return "" if parent == "." else parent


def get_sibling_file_name(path: str, sibling: str) -> str:
    """Return ``sibling`` placed in the same directory as ``path``."""
    return posixpath.join(get_parent_dir(path), sibling)


def find_local_sibling_or_parent(
    existing: str, other: str, settings: Settings | None = None
) -> str | None:
    """Search the directory of ``existing`` and its ancestors for ``other``.

    Returns the local-relative path of the first match, or None. Absolute
    inputs are not supported since all lookups happen inside the local dir.
    """
    if posixpath.isabs(existing) or posixpath.isabs(other):
        return None

    current = existing
    while current != "":
        current = get_parent_dir(current)
        candidate = posixpath.join(current, other)
        if local_path_exists(candidate, settings):
            return candidate
    return None


__all__ = [
    "FsError",
    "ensure_local_path",
    "find_local_sibling_or_parent",
    "get_parent_dir",
    "get_sibling_file_name",
    "local_path_exists",
    "read_local_file",
]
