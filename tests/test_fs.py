from __future__ import annotations

from pathlib import Path

import pytest

from pnpm_workspace.config import Settings
from pnpm_workspace.fs import (
    FsError,
    ensure_local_path,
    find_local_sibling_or_parent,
    get_sibling_file_name,
    local_path_exists,
    read_local_file,
)


def test_get_sibling_file_name_handles_root_and_nested_files() -> None:
    assert get_sibling_file_name("pnpm-workspace.yaml", "pnpm-lock.yaml") == "pnpm-lock.yaml"
    assert get_sibling_file_name("a/b/pnpm-workspace.yaml", "pnpm-lock.yaml") == "a/b/pnpm-lock.yaml"


def test_find_local_sibling_or_parent_walks_up(write, settings) -> None:
    write("pnpm-workspace.yaml", "packages: []\n")
    write("packages/a/package.json", "{}")

    found = find_local_sibling_or_parent("packages/a/package.json", "pnpm-workspace.yaml", settings)

    assert found == "pnpm-workspace.yaml"


def test_find_local_sibling_or_parent_prefers_nearest(write, settings) -> None:
    write("pnpm-workspace.yaml", "packages: []\n")
    write("sub/pnpm-workspace.yaml", "packages: []\n")

    found = find_local_sibling_or_parent("sub/pkg/package.json", "pnpm-workspace.yaml", settings)

    assert found == "sub/pnpm-workspace.yaml"


def test_find_local_sibling_or_parent_returns_none(settings) -> None:
    assert find_local_sibling_or_parent("a/package.json", "pnpm-workspace.yaml", settings) is None
    assert find_local_sibling_or_parent("/abs/package.json", "pnpm-workspace.yaml", settings) is None


def test_paths_outside_local_dir_are_refused(settings) -> None:
    with pytest.raises(FsError):
        ensure_local_path("../outside.txt", settings)

    assert local_path_exists("../outside.txt", settings) is False
    assert read_local_file("../outside.txt", settings) is None


def test_read_local_file_returns_none_when_missing(settings) -> None:
    assert read_local_file("missing.yaml", settings) is None


def test_read_local_file_reads_text(write, settings) -> None:
    write("a.txt", "hello")

    assert read_local_file("a.txt", settings) == "hello"


def test_filesystem_root_as_local_dir_accepts_children() -> None:
    settings = Settings(local_dir=Path("/"))

    assert ensure_local_path("etc/hosts", settings) == Path("/etc/hosts")
