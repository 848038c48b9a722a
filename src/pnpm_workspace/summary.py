"""Human-readable summary rendering for a scan report."""

from __future__ import annotations

from typing import Any


def render_summary(report: dict[str, Any]) -> str:
    """Return a Markdown string with totals and a table of package files."""
    totals = report.get("totals", {})
    projects = report.get("projects", [])

    lines = []
    lines.append("# pnpm workspace summary")
    lines.append("")
    lines.append(
        f"Package files: {totals.get('projects', 0)} | "
        f"With lock file: {totals.get('withLockFile', 0)} | "
        f"Catalog dependencies: {totals.get('catalogDependencies', 0)}"
    )
    lines.append("")
    lines.append("| Package file | Name | Lock file | Locked dependencies |")
    lines.append("| --- | --- | --- | --- |")

    for proj in projects:
        path = proj.get("path") or "(unknown package file)"
        name = proj.get("packageJsonName") or "n/a"
        lock_file = proj.get("lockFile") or "none"
        locked = proj.get("lockedVersions")
        count = sum(len(deps) for deps in locked.values()) if locked else 0
        lines.append(f"| {path} | {name} | {lock_file} | {count} |")

    if not projects:
        lines.append("| (no package files found) | n/a | none | 0 |")

    return "\n".join(lines) + "\n"
