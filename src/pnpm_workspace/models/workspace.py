"""Workspace descriptor and the per-run membership cache."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class WorkspaceDescriptor:
    """Location of a pnpm workspace config and the lock file next to it."""

    workspace_yaml_path: str
    lock_file_path: str


@dataclass
class WorkspaceMatchCache:
    """Member manifest paths per workspace config, filled once per workspace.

    An entry of ``None`` records that expanding the workspace failed.
    """

    entries: dict[str, list[str] | None] = field(default_factory=dict)

    def __contains__(self, workspace_yaml_path: object) -> bool:
        return workspace_yaml_path in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, workspace_yaml_path: str) -> list[str] | None:
        return self.entries.get(workspace_yaml_path)

    def store(self, workspace_yaml_path: str, package_paths: list[str] | None) -> None:
        if workspace_yaml_path in self.entries:
            raise ValueError(f"Workspace already cached: {workspace_yaml_path}")
        self.entries[workspace_yaml_path] = package_paths
