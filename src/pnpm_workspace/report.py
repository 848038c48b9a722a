"""Report aggregation and schema-friendly output."""

from __future__ import annotations

from typing import Any


def aggregate(
    projects: list[dict[str, Any]],
    lock_files: dict[str, dict[str, Any]],
    workspaces: list[dict[str, Any]],
) -> dict[str, Any]:
    """Aggregate per-package results into a single report.

    ``projects`` holds one dict per package file with at least ``path`` and
    ``lockFile``; ``lock_files`` maps lock file paths to their parse outcome;
    ``workspaces`` holds the catalog dependencies of each workspace file.
    """

    associated = sum(1 for p in projects if p.get("lockFile"))
    catalog_deps = sum(len(w.get("deps", [])) for w in workspaces)
    failed_locks = sum(1 for lock in lock_files.values() if lock.get("failure"))

    report: dict[str, Any] = {
        "version": "1",
        "projects": projects,
        "lockFiles": lock_files,
        "workspaces": workspaces,
        "totals": {
            "projects": len(projects),
            "withLockFile": associated,
            "lockFiles": len(lock_files),
            "failedLockFiles": failed_locks,
            "catalogDependencies": catalog_deps,
        },
    }

    return report
