"""Repository and workspace package discovery utilities."""

from __future__ import annotations

import os
import posixpath
import re
from collections.abc import Iterable, Sequence
from fnmatch import fnmatchcase
from pathlib import Path


# Match the ignores used by pnpm's own workspace package finder.
IGNORE_PATTERNS: tuple[str, ...] = ("**/node_modules/**", "**/bower_components/**")
DEFAULT_PATTERNS: tuple[str, ...] = (".", "**")
MANIFEST_NAMES: tuple[str, ...] = ("package.json", "package.yaml", "package.json5")

EXCLUDES = {"node_modules", "bower_components", ".git"}

_BRACES = re.compile(r"\{([^{}]*)\}")


def discover_package_files(root: Path) -> list[Path]:
    """Find package.json and pnpm-workspace.yaml files under root.

    Vendored dependency directories are skipped.
    """
    root = root.resolve()
    targets = {"package.json", "pnpm-workspace.yaml"}
    found: list[Path] = []

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(name for name in dirnames if name not in EXCLUDES)
        for filename in sorted(filenames):
            if filename in targets:
                found.append(Path(dirpath) / filename)

    return found


def _expand_braces(pattern: str) -> list[str]:
    match = _BRACES.search(pattern)
    if match is None:
        return [pattern]
    expanded: list[str] = []
    for option in match.group(1).split(","):
        expanded.extend(
            _expand_braces(pattern[: match.start()] + option + pattern[match.end() :])
        )
    return expanded


def _normalise_pattern(pattern: str) -> str:
    pattern = pattern.strip()
    while pattern.startswith("./"):
        pattern = pattern[2:]
    pattern = pattern.rstrip("/")
    return posixpath.normpath(pattern) if pattern else "."


def _match_segments(pattern: Sequence[str], parts: Sequence[str]) -> bool:
    if not pattern:
        return not parts
    head, rest = pattern[0], pattern[1:]
    if head == "**":
        return any(_match_segments(rest, parts[i:]) for i in range(len(parts) + 1))
    if not parts:
        return False
    return fnmatchcase(parts[0], head) and _match_segments(rest, parts[1:])


def glob_match(pattern: str, rel_path: str) -> bool:
    """Match a posix relative path against a glob where ``**`` spans segments."""
    pattern_parts = [p for p in pattern.split("/") if p not in ("", ".")]
    path_parts = [p for p in rel_path.split("/") if p not in ("", ".")]
    return _match_segments(pattern_parts, path_parts)


def _compile(patterns: Iterable[str]) -> tuple[list[str], list[str]]:
    """Split patterns into (include, exclude) directory globs."""
    include: list[str] = []
    exclude: list[str] = []
    for raw in patterns:
        negate = raw.startswith("!")
        if negate:
            raw = raw[1:]
        for pattern in _expand_braces(raw):
            (exclude if negate else include).append(_normalise_pattern(pattern))
    return include, exclude


def _pruned(rel_dir: str, ignore: Sequence[str]) -> bool:
    # "**/node_modules/**" ignores everything below any node_modules directory.
    return any(
        pattern.endswith("/**") and glob_match(pattern[:-3], rel_dir) for pattern in ignore
    )


def find_packages(
    root: Path,
    patterns: Sequence[str] | None = None,
    ignore: Sequence[str] = IGNORE_PATTERNS,
) -> list[Path]:
    """Return package directories under root selected by workspace patterns.

    A package directory contains one of MANIFEST_NAMES. Patterns select
    directories; ``!`` negates. The ignore globs always apply.
    """
    root = Path(root)
    include, exclude = _compile(patterns if patterns is not None else DEFAULT_PATTERNS)
    found: list[Path] = []

    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        rel_dir = current.relative_to(root).as_posix()
        rel_dir = "" if rel_dir == "." else rel_dir

        dirnames[:] = sorted(
            name
            for name in dirnames
            if not _pruned(f"{rel_dir}/{name}" if rel_dir else name, ignore)
        )

        if not any(name in filenames for name in MANIFEST_NAMES):
            continue
        manifest = f"{rel_dir}/package.json" if rel_dir else "package.json"
        if any(glob_match(pattern, manifest) for pattern in ignore):
            continue
        if not any(glob_match(pattern, rel_dir) for pattern in include):
            continue
        if any(glob_match(pattern, rel_dir) for pattern in exclude):
            continue
        found.append(current)

    return found


__all__ = [
    "DEFAULT_PATTERNS",
    "IGNORE_PATTERNS",
    "MANIFEST_NAMES",
    "discover_package_files",
    "find_packages",
    "glob_match",
]
