"""Package file record annotated during workspace detection."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class NpmManagerData:
    """Mutable manager data attached to a package file."""

    pnpm_shrinkwrap: str | None = None
    package_json_name: str | None = None

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {}
        if self.pnpm_shrinkwrap is not None:
            data["pnpmShrinkwrap"] = self.pnpm_shrinkwrap
        if self.package_json_name is not None:
            data["packageJsonName"] = self.package_json_name
        return data


@dataclass
class PackageFile:
    """A ``package.json`` found in the checkout, by local-relative path."""

    package_file: str
    manager_data: NpmManagerData = field(default_factory=NpmManagerData)

    def __post_init__(self) -> None:
        if not self.package_file:
            raise ValueError("Package file path must be non-empty")

    def to_dict(self) -> dict[str, object]:
        return {
            "packageFile": self.package_file,
            "managerData": self.manager_data.to_dict(),
        }
