"""Extract catalog dependencies from pnpm-workspace.yaml."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict
from typing import Any

from ..decode import YAML_DECODE_ERRORS, safe_load_yaml
from ..dependency import extract_dependency, parse_dep_name
from ..logging import TRACE, get_logger
from ..models.catalog import (
    CATALOG_DEPENDENCY,
    DEFAULT_CATALOG,
    Catalog,
    CatalogDependency,
    DependencyDetails,
    WorkspaceFileContent,
)

logger = get_logger("parsers.pnpm_workspace")

ExtractFunction = Callable[[str, str, Any], DependencyDetails]


class CatalogSchemaError(ValueError):
    """Raised when a workspace file does not match the catalog schema."""


def _string_map(value: Any, field: str) -> dict[str, str]:
    if not isinstance(value, dict):
        raise CatalogSchemaError(f"'{field}' must be a mapping of strings")
    for key, spec in value.items():
        if not isinstance(key, str) or not isinstance(spec, str):
            raise CatalogSchemaError(f"'{field}' entry {key!r} must map a string to a string")
    return value


def parse_pnpm_catalogs(content: str) -> list[Catalog]:
    """Return the default catalog followed by the named catalogs.

    Raises:
        CatalogSchemaError: If the content is not valid YAML or does not match
            ``{catalog?: {name: spec}, catalogs?: {catalog: {name: spec}}}``.
    """
    try:
        data = safe_load_yaml(content)
    except YAML_DECODE_ERRORS as exc:
        raise CatalogSchemaError(f"Invalid YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise CatalogSchemaError("Workspace file must be a mapping")

    default_deps: dict[str, str] = {}
    if "catalog" in data:
        default_deps = _string_map(data["catalog"], "catalog")

    result = [Catalog(name=DEFAULT_CATALOG, dependencies=default_deps)]

    if "catalogs" not in data:
        return result

    named = data["catalogs"]
    if not isinstance(named, dict):
        raise CatalogSchemaError("'catalogs' must be a mapping of catalogs")
    for name, dependencies in named.items():
        if not isinstance(name, str):
            raise CatalogSchemaError(f"Catalog name {name!r} must be a string")
        result.append(
            Catalog(name=name, dependencies=_string_map(dependencies, f"catalogs.{name}"))
        )

    return result


def extract_catalog_deps(
    catalogs: list[Catalog], extract: ExtractFunction = extract_dependency
) -> list[CatalogDependency]:
    """Turn every catalog entry into a dependency tagged with its catalog name."""
    deps: list[CatalogDependency] = []
    for catalog in catalogs:
        for key, value in catalog.dependencies.items():
            dep_name = parse_dep_name(CATALOG_DEPENDENCY, key)
            details = extract(CATALOG_DEPENDENCY, dep_name, value)
            deps.append(
                CatalogDependency(
                    **asdict(details),
                    dep_name=dep_name,
                    catalog_name=catalog.name,
                    original_key=key if dep_name != key else None,
                )
            )
    return deps


def extract_pnpm_workspace_file(content: str, package_file: str) -> WorkspaceFileContent | None:
    """Return the catalog dependencies of a workspace file, or None if there are none."""
    logger.log(TRACE, "pnpm.extract_pnpm_workspace_file(%s)", package_file)

    try:
        catalogs = parse_pnpm_catalogs(content)
    except CatalogSchemaError as exc:
        logger.debug("Invalid pnpm workspace YAML. %s: %s", package_file, exc)
        return None

    deps = extract_catalog_deps(catalogs)
    if not deps:
        return None

    return WorkspaceFileContent(deps=deps, package_file=package_file)


__all__ = [
    "CatalogSchemaError",
    "extract_catalog_deps",
    "extract_pnpm_workspace_file",
    "parse_pnpm_catalogs",
]
