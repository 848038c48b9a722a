"""Parse pnpm-lock.yaml into locked versions per importer.

Handles both lock file shapes:

- monorepo lock files, where ``importers`` maps each project path to its own
  dependency sets;
- single-project lock files, where the dependency sets live at the top level
  (recorded under the ``"."`` scope).

Dependency entries are bare version strings in older lock files and
``{specifier, version}`` objects in v6+ importers. Peer resolution suffixes such
as ``1.0.0(react@18.2.0)`` are stripped.
"""

from __future__ import annotations

import posixpath
from typing import Any

from ..config import Settings
from ..decode import YAML_DECODE_ERRORS, safe_load_yaml
from ..fs import get_parent_dir, read_local_file
from ..logging import TRACE, get_logger
from ..models.lockfile import (
    LockedVersionsTable,
    LockFailureReason,
    LockShapeError,
    PnpmLock,
    VersionCarrier,
)

logger = get_logger("parsers.pnpm_lock")

DEPENDENCY_TYPES: tuple[str, ...] = (
    "dependencies",
    "devDependencies",
    "optionalDependencies",
)


def _lockfile_version(value: Any) -> int | float:
    # Numeric before v6, a string such as "6.0" or "9.0" since.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError as exc:
            raise LockShapeError(f"Invalid lockfileVersion: {value!r}") from exc
    raise LockShapeError(f"Invalid lockfileVersion: {value!r}")


def get_locked_dependency_versions(dependency_set: Any) -> dict[str, dict[str, str]]:
    """Return ``category -> package -> version`` for one importer."""
    if not isinstance(dependency_set, dict):
        raise LockShapeError(f"Dependency set must be a mapping, got {type(dependency_set).__name__}")

    res: dict[str, dict[str, str]] = {}
    for dep_type in DEPENDENCY_TYPES:
        entries = dependency_set.get(dep_type) or {}
        if not isinstance(entries, dict):
            raise LockShapeError(f"'{dep_type}' must be a mapping")
        res[dep_type] = {
            str(name): VersionCarrier.from_lock_value(carrier).version
            for name, carrier in entries.items()
        }
    return res


def get_locked_versions(lock_parsed: dict[str, Any]) -> LockedVersionsTable:
    importers = lock_parsed.get("importers")
    if isinstance(importers, dict) and importers:
        return {
            str(importer): get_locked_dependency_versions(imports)
            for importer, imports in importers.items()
        }
    return {".": get_locked_dependency_versions(lock_parsed)}


def _failed(reason: LockFailureReason, detail: str, file_path: str | None) -> PnpmLock:
    logger.debug(
        "Warning: Exception parsing pnpm lockfile %s (%s): %s",
        file_path or "<content>",
        reason.value,
        detail,
    )
    return PnpmLock.failed(reason, detail)


def parse_lock(content: str, file_path: str | None = None) -> PnpmLock:
    """Parse lock file content. Never raises; failures carry a typed reason."""
    try:
        lock_parsed = safe_load_yaml(content)
    except YAML_DECODE_ERRORS as exc:
        return _failed(LockFailureReason.DECODE_ERROR, str(exc), file_path)

    if not isinstance(lock_parsed, dict) or "lockfileVersion" not in lock_parsed:
        return _failed(LockFailureReason.MARKER_MISSING, "Invalid or empty lockfile", file_path)
    logger.log(TRACE, "pnpm lockfile parsed: %s", file_path or "<content>")

    try:
        lockfile_version = _lockfile_version(lock_parsed["lockfileVersion"])
        locked_versions = get_locked_versions(lock_parsed)
    except LockShapeError as exc:
        return _failed(LockFailureReason.SHAPE_ERROR, str(exc), file_path)

    return PnpmLock(
        lockfile_version=lockfile_version,
        locked_versions_with_path=locked_versions,
    )


def get_pnpm_lock(file_path: str, settings: Settings | None = None) -> PnpmLock:
    """Read and parse a local lock file."""
    content = read_local_file(file_path, settings)
    if not content:
        return _failed(LockFailureReason.READ_ERROR, "Unable to read pnpm-lock.yaml", file_path)
    return parse_lock(content, file_path)


def importer_scope(lock_file_path: str, package_file: str) -> str:
    """Return the importer key of a package file relative to its lock file."""
    lock_dir = get_parent_dir(lock_file_path) or "."
    package_dir = get_parent_dir(package_file) or "."
    return posixpath.relpath(package_dir, lock_dir)


def locked_versions_for(
    lock: PnpmLock, lock_file_path: str, package_file: str
) -> dict[str, dict[str, str]] | None:
    """Return the locked versions governing package_file, if any."""
    if lock.locked_versions_with_path is None:
        return None
    return lock.locked_versions_with_path.get(importer_scope(lock_file_path, package_file))


__all__ = [
    "DEPENDENCY_TYPES",
    "get_locked_dependency_versions",
    "get_locked_versions",
    "get_pnpm_lock",
    "importer_scope",
    "locked_versions_for",
    "parse_lock",
]
