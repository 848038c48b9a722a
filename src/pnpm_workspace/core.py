"""Core scanning entrypoints.

Runs workspace detection, lock file parsing and catalog extraction over a
checkout and assembles a JSON-friendly report.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .config import Settings, load_settings
from .discovery import discover_package_files
from .fs import get_sibling_file_name, local_path_exists, read_local_file
from .logging import get_logger
from .models.lockfile import PnpmLock
from .models.package_file import NpmManagerData, PackageFile
from .parsers.pnpm_lock import get_pnpm_lock, importer_scope, locked_versions_for
from .parsers.pnpm_workspace import extract_pnpm_workspace_file
from .report import aggregate
from .workspace import LOCKFILE_FILENAME, WORKSPACE_FILENAME, detect_pnpm_workspaces

logger = get_logger("core")


def _package_json_name(package_file: str, settings: Settings) -> str | None:
    content = read_local_file(package_file, settings)
    if content is None:
        return None
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        logger.debug("Invalid package.json %s: %s", package_file, exc)
        return None
    name = data.get("name") if isinstance(data, dict) else None
    return name if isinstance(name, str) else None


def build_package_files(paths: list[str], settings: Settings) -> list[PackageFile]:
    """Create records for package.json paths, pre-associating sibling lock files."""
    records: list[PackageFile] = []
    for package_file in paths:
        sibling_lock: str | None = get_sibling_file_name(package_file, LOCKFILE_FILENAME)
        if not local_path_exists(sibling_lock, settings):
            sibling_lock = None
        records.append(
            PackageFile(
                package_file=package_file,
                manager_data=NpmManagerData(
                    pnpm_shrinkwrap=sibling_lock,
                    package_json_name=_package_json_name(package_file, settings),
                ),
            )
        )
    return records


def scan_repository(root: Path) -> dict[str, Any]:
    """Resolve lock files, locked versions and catalogs for a checkout.

    Params:
        root: checkout directory; all reported paths are relative to it

    Returns: dict report (see report.aggregate)
    """
    settings = load_settings(root)

    package_jsons: list[str] = []
    workspace_files: list[str] = []
    for path in discover_package_files(settings.local_dir):
        rel = path.relative_to(settings.local_dir).as_posix()
        if path.name == WORKSPACE_FILENAME:
            workspace_files.append(rel)
        else:
            package_jsons.append(rel)

    records = build_package_files(package_jsons, settings)
    detect_pnpm_workspaces(records, settings=settings)

    locks: dict[str, PnpmLock] = {}
    projects: list[dict[str, Any]] = []
    for record in records:
        lock_file = record.manager_data.pnpm_shrinkwrap
        project: dict[str, Any] = {
            "path": record.package_file,
            "packageJsonName": record.manager_data.package_json_name,
            "lockFile": lock_file,
            "importer": None,
            "lockedVersions": None,
        }
        if lock_file is not None:
            if lock_file not in locks:
                locks[lock_file] = get_pnpm_lock(lock_file, settings)
            project["importer"] = importer_scope(lock_file, record.package_file)
            project["lockedVersions"] = locked_versions_for(
                locks[lock_file], lock_file, record.package_file
            )
        projects.append(project)

    workspaces: list[dict[str, Any]] = []
    for workspace_file in workspace_files:
        content = read_local_file(workspace_file, settings)
        if content is None:
            continue
        extracted = extract_pnpm_workspace_file(content, workspace_file)
        if extracted is not None:
            workspaces.append(extracted.to_dict())

    lock_files = {
        path: {
            "lockfileVersion": lock.lockfile_version,
            "importers": sorted(lock.locked_versions_with_path or {}),
            "failure": lock.failure.to_dict() if lock.failure else None,
        }
        for path, lock in sorted(locks.items())
    }

    return aggregate(projects, lock_files, workspaces)
