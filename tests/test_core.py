from __future__ import annotations

import json
from pathlib import Path

from pnpm_workspace import cli
from pnpm_workspace.core import scan_repository
from pnpm_workspace.summary import render_summary


def _projects(report: dict) -> dict[str, dict]:
    return {p["path"]: p for p in report["projects"]}


def test_scan_repository_resolves_lock_files_and_versions(monorepo: Path) -> None:
    report = scan_repository(monorepo)
    projects = _projects(report)

    assert set(projects) == {
        "package.json",
        "nested/group/b/package.json",
        "other/c/package.json",
        "packages/a/package.json",
        "packages/excluded/package.json",
    }
    assert projects["package.json"]["lockFile"] == "pnpm-lock.yaml"
    assert projects["package.json"]["importer"] == "."
    assert projects["package.json"]["lockedVersions"]["devDependencies"] == {"typescript": "5.1.3"}

    member = projects["packages/a/package.json"]
    assert member["packageJsonName"] == "@demo/a"
    assert member["lockFile"] == "pnpm-lock.yaml"
    assert member["lockedVersions"]["dependencies"] == {"react": "18.2.0", "react-dom": "18.2.0"}

    assert projects["packages/excluded/package.json"]["lockFile"] is None
    assert projects["other/c/package.json"]["lockedVersions"] is None


def test_scan_repository_reports_lock_files_and_catalogs(monorepo: Path) -> None:
    report = scan_repository(monorepo)

    assert report["lockFiles"] == {
        "pnpm-lock.yaml": {
            "lockfileVersion": 6.0,
            "importers": [".", "nested/group/b", "packages/a"],
            "failure": None,
        }
    }
    assert [(d["catalogName"], d["currentValue"]) for d in report["workspaces"][0]["deps"]] == [
        ("default", "^18.2.0"),
        ("legacy", "17.0.2"),
    ]
    assert report["totals"] == {
        "projects": 5,
        "withLockFile": 3,
        "lockFiles": 1,
        "failedLockFiles": 0,
        "catalogDependencies": 2,
    }


def test_scan_repository_reports_broken_lock_file(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text('{"name": "solo"}', encoding="utf-8")
    (tmp_path / "pnpm-lock.yaml").write_text("{}\n", encoding="utf-8")

    report = scan_repository(tmp_path)

    assert report["lockFiles"]["pnpm-lock.yaml"]["failure"]["reason"] == "marker-missing"
    assert report["projects"][0]["lockedVersions"] is None
    assert report["totals"]["failedLockFiles"] == 1


def test_scan_repository_tolerates_invalid_package_json(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text("{not json", encoding="utf-8")

    report = scan_repository(tmp_path)

    assert report["projects"] == [
        {
            "path": "package.json",
            "packageJsonName": None,
            "lockFile": None,
            "importer": None,
            "lockedVersions": None,
        }
    ]


def test_render_summary_lists_package_files(monorepo: Path) -> None:
    summary = render_summary(scan_repository(monorepo))

    assert summary.startswith("# pnpm workspace summary")
    assert "| packages/a/package.json | @demo/a | pnpm-lock.yaml | 2 |" in summary
    assert "| other/c/package.json | @other/c | none | 0 |" in summary


def test_render_summary_without_projects() -> None:
    assert "(no package files found)" in render_summary({"projects": [], "totals": {}})


def test_cli_prints_json_report(monorepo: Path, monkeypatch, capsys) -> None:
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: None)

    assert cli.main(["--root", str(monorepo)]) == 0

    report = json.loads(capsys.readouterr().out)
    assert report["totals"]["withLockFile"] == 3


def test_cli_prints_summary(monorepo: Path, monkeypatch, capsys) -> None:
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: None)

    assert cli.main(["--root", str(monorepo), "--summary"]) == 0
    assert "# pnpm workspace summary" in capsys.readouterr().out


def test_cli_rejects_missing_root(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: None)

    assert cli.main(["--root", str(tmp_path / "missing")]) == 2
