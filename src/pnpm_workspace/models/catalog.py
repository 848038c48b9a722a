"""Catalog models for pnpm-workspace.yaml."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field

CATALOG_DEPENDENCY = "pnpm.catalog"
DEFAULT_CATALOG = "default"


@dataclass(frozen=True)
class Catalog:
    """A named table of pinned dependency specs."""

    name: str
    dependencies: dict[str, str] = field(default_factory=dict)


@dataclass
class DependencyDetails:
    """Fields derived from a raw dependency spec."""

    current_value: str | None = None
    datasource: str | None = None
    package_name: str | None = None
    skip_reason: str | None = None
    npm_package_alias: bool = False
    current_raw_value: str | None = None
    current_digest: str | None = None
    source_url: str | None = None
    git_ref: bool = False


@dataclass
class CatalogDependency(DependencyDetails):
    """A dependency declared in a workspace catalog."""

    dep_name: str = ""
    catalog_name: str = DEFAULT_CATALOG
    dep_type: str = CATALOG_DEPENDENCY
    pretty_dep_type: str = CATALOG_DEPENDENCY
    original_key: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            _camel(key): value
            for key, value in asdict(self).items()
            if value is not None and value is not False
        }


@dataclass
class WorkspaceFileContent:
    """Catalog dependencies extracted from one workspace config."""

    deps: list[CatalogDependency]
    package_file: str

    def to_dict(self) -> dict[str, object]:
        return {
            "packageFile": self.package_file,
            "deps": [dep.to_dict() for dep in self.deps],
        }


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)
