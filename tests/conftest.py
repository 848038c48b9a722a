from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from pnpm_workspace.config import Settings

MONOREPO_LOCK = """\
lockfileVersion: '6.0'

importers:

  '.':
    devDependencies:
      typescript:
        specifier: ^5.0.0
        version: 5.1.3

  packages/a:
    dependencies:
      react:
        specifier: ^18.2.0
        version: 18.2.0
      react-dom:
        specifier: ^18.2.0
        version: 18.2.0(react@18.2.0)

  nested/group/b:
    optionalDependencies:
      fsevents:
        specifier: ^2.3.2
        version: 2.3.2
"""

WORKSPACE_YAML = """\
packages:
  - 'packages/*'
  - 'nested/**'
  - '!packages/excluded'

catalog:
  react: ^18.2.0

catalogs:
  legacy:
    react: 17.0.2
"""


Writer = Callable[[str, str], Path]


@pytest.fixture
def write(tmp_path: Path) -> Writer:
    """Write a file below tmp_path, creating parent directories."""

    def _write(rel: str, content: str) -> Path:
        path = tmp_path / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(local_dir=tmp_path.resolve())


@pytest.fixture
def monorepo(tmp_path: Path, write: Writer) -> Path:
    """A pnpm workspace with matched, excluded, vendored and unrelated packages."""

    def manifest(rel_dir: str, name: str) -> None:
        prefix = f"{rel_dir}/" if rel_dir else ""
        write(f"{prefix}package.json", json.dumps({"name": name}))

    manifest("", "root")
    manifest("packages/a", "@demo/a")
    manifest("packages/excluded", "@demo/excluded")
    manifest("packages/a/node_modules/react", "react")
    manifest("nested/group/b", "@demo/nested-b")
    manifest("other/c", "@other/c")
    write("pnpm-workspace.yaml", WORKSPACE_YAML)
    write("pnpm-lock.yaml", MONOREPO_LOCK)
    return tmp_path
