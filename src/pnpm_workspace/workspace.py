"""Associate package files with the pnpm workspace lock file governing them.

A package file belongs to a workspace when a ``pnpm-workspace.yaml`` sits in one
of its ancestor directories, a ``pnpm-lock.yaml`` sits next to it, and the
workspace's ``packages`` globs select the package's directory.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from .config import ConfigError, Settings, load_settings
from .decode import YAML_DECODE_ERRORS, safe_load_yaml
from .discovery import find_packages
from .fs import (
    find_local_sibling_or_parent,
    get_sibling_file_name,
    local_path_exists,
    read_local_file,
)
from .logging import TRACE, get_logger
from .models.package_file import PackageFile
from .models.workspace import WorkspaceDescriptor, WorkspaceMatchCache

logger = get_logger("workspace")

WORKSPACE_FILENAME = "pnpm-workspace.yaml"
LOCKFILE_FILENAME = "pnpm-lock.yaml"


def extract_pnpm_filters(file_name: str, settings: Settings | None = None) -> list[str] | None:
    """Return the ``packages`` globs of a workspace file, or None."""
    content = read_local_file(file_name, settings)
    if content is None:
        logger.log(TRACE, "Failed to parse pnpm-workspace.yaml (%s): unreadable", file_name)
        return None
    try:
        contents = safe_load_yaml(content)
    except YAML_DECODE_ERRORS as exc:
        logger.log(TRACE, "Failed to parse pnpm-workspace.yaml (%s): %s", file_name, exc)
        return None

    packages = contents.get("packages") if isinstance(contents, dict) else None
    if not isinstance(packages, list) or not all(isinstance(item, str) for item in packages):
        logger.log(
            TRACE,
            'Failed to find required "packages" array in pnpm-workspace.yaml (%s)',
            file_name,
        )
        return None
    return packages


def find_pnpm_workspace(
    package_file: str, settings: Settings | None = None
) -> WorkspaceDescriptor | None:
    """Locate the workspace config and sibling lock file for a package file."""
    workspace_yaml_path = find_local_sibling_or_parent(package_file, WORKSPACE_FILENAME, settings)
    if workspace_yaml_path is None:
        logger.log(
            TRACE,
            "Failed to locate pnpm-workspace.yaml in a parent directory. (%s)",
            package_file,
        )
        return None

    lock_file_path = get_sibling_file_name(workspace_yaml_path, LOCKFILE_FILENAME)
    if not local_path_exists(lock_file_path, settings):
        logger.log(
            TRACE,
            "Failed to find a pnpm-lock.yaml sibling for the workspace. (%s, %s)",
            workspace_yaml_path,
            package_file,
        )
        return None

    return WorkspaceDescriptor(
        workspace_yaml_path=workspace_yaml_path,
        lock_file_path=lock_file_path,
    )


def resolve_member_packages(base_dir: Path, filters: Sequence[str] | None) -> list[str]:
    """Expand workspace globs to absolute ``package.json`` paths."""
    return [
        (package_dir / "package.json").as_posix()
        for package_dir in find_packages(base_dir, filters)
    ]


def _workspace_packages(
    workspace: WorkspaceDescriptor, settings: Settings
) -> list[str] | None:
    filters = extract_pnpm_filters(workspace.workspace_yaml_path, settings)
    base_dir = settings.local_path(workspace.workspace_yaml_path).parent
    try:
        return resolve_member_packages(base_dir, filters)
    except OSError as exc:
        logger.debug(
            "Failed to expand pnpm workspace packages for %s: %s",
            workspace.workspace_yaml_path,
            exc,
        )
        return None


def detect_pnpm_workspaces(
    package_files: Sequence[PackageFile],
    cache: WorkspaceMatchCache | None = None,
    settings: Settings | None = None,
) -> WorkspaceMatchCache:
    """Set ``manager_data.pnpm_shrinkwrap`` on package files inside a pnpm workspace.

    Records are processed in order; each workspace is expanded at most once per
    cache. Records that already have a lock file are left untouched.
    """
    logger.debug("Detecting pnpm Workspaces")
    cache = cache if cache is not None else WorkspaceMatchCache()
    if settings is None:
        try:
            settings = load_settings()
        except ConfigError as exc:
            logger.debug("Skipping pnpm workspace detection: %s", exc)
            return cache

    for p in package_files:
        package_file = p.package_file
        pnpm_shrinkwrap = p.manager_data.pnpm_shrinkwrap

        if pnpm_shrinkwrap:
            logger.log(
                TRACE,
                "Found an existing pnpm shrinkwrap file; skipping pnpm monorepo check. (%s, %s)",
                package_file,
                pnpm_shrinkwrap,
            )
            continue

        workspace = find_pnpm_workspace(package_file, settings)
        if workspace is None:
            continue

        if workspace.workspace_yaml_path not in cache:
            cache.store(workspace.workspace_yaml_path, _workspace_packages(workspace, settings))
        package_paths = cache.get(workspace.workspace_yaml_path) or []

        # Suffix match: cached paths are absolute, package files are local-relative.
        if any(path.endswith(package_file) for path in package_paths):
            p.manager_data.pnpm_shrinkwrap = workspace.lock_file_path
        else:
            logger.log(
                TRACE,
                "Didn't find the package in the pnpm workspace (%s, %s)",
                package_file,
                workspace.workspace_yaml_path,
            )

    return cache


__all__ = [
    "LOCKFILE_FILENAME",
    "WORKSPACE_FILENAME",
    "detect_pnpm_workspaces",
    "extract_pnpm_filters",
    "find_pnpm_workspace",
    "resolve_member_packages",
]
