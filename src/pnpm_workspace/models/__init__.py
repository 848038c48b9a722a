"""Data models for workspace resolution."""

from __future__ import annotations

from .catalog import (
    CATALOG_DEPENDENCY,
    DEFAULT_CATALOG,
    Catalog,
    CatalogDependency,
    DependencyDetails,
    WorkspaceFileContent,
)
from .lockfile import (
    LockedVersionsTable,
    LockFailure,
    LockFailureReason,
    LockShapeError,
    PnpmLock,
    VersionCarrier,
)
from .package_file import NpmManagerData, PackageFile
from .workspace import WorkspaceDescriptor, WorkspaceMatchCache

__all__ = [
    "CATALOG_DEPENDENCY",
    "DEFAULT_CATALOG",
    "Catalog",
    "CatalogDependency",
    "DependencyDetails",
    "LockFailure",
    "LockFailureReason",
    "LockShapeError",
    "LockedVersionsTable",
    "NpmManagerData",
    "PackageFile",
    "PnpmLock",
    "VersionCarrier",
    "WorkspaceDescriptor",
    "WorkspaceFileContent",
    "WorkspaceMatchCache",
]
