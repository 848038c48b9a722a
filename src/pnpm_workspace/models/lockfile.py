"""Outcome types for pnpm lock file parsing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal

LockedVersionsTable = dict[str, dict[str, dict[str, str]]]


class LockShapeError(ValueError):
    """Raised when a decoded lock file does not have the expected shape."""


class LockFailureReason(str, Enum):
    READ_ERROR = "read-error"
    DECODE_ERROR = "decode-error"
    MARKER_MISSING = "marker-missing"
    SHAPE_ERROR = "shape-error"


@dataclass(frozen=True)
class LockFailure:
    """Why a lock file produced no locked versions."""

    reason: LockFailureReason
    detail: str

    def to_dict(self) -> dict[str, object]:
        return {"reason": self.reason.value, "detail": self.detail}


@dataclass(frozen=True)
class VersionCarrier:
    """A locked dependency entry in either of its encodings.

    Lock files before v6 map a package to a bare version string; later
    importers map it to an object carrying ``specifier`` and ``version``.
    """

    kind: Literal["bare", "object"]
    raw: str

    @classmethod
    def from_lock_value(cls, value: Any) -> VersionCarrier:
        if isinstance(value, dict):
            version = _version_text(value.get("version"))
            if version is None:
                raise LockShapeError(f"Locked entry has no version: {value!r}")
            return cls(kind="object", raw=version)
        version = _version_text(value)
        if version is None:
            raise LockShapeError(f"Unsupported locked entry: {value!r}")
        return cls(kind="bare", raw=version)

    @property
    def version(self) -> str:
        """The resolved version with any ``(peer@x)`` suffix removed."""
        return self.raw.split("(", 1)[0].strip()


@dataclass(frozen=True)
class PnpmLock:
    """Result of parsing a lock file.

    Either ``locked_versions_with_path`` is set, or ``failure`` explains why not.
    """

    lockfile_version: int | float | None = None
    locked_versions_with_path: LockedVersionsTable | None = None
    failure: LockFailure | None = None

    def __bool__(self) -> bool:
        return self.locked_versions_with_path is not None

    @classmethod
    def failed(cls, reason: LockFailureReason, detail: str) -> PnpmLock:
        return cls(failure=LockFailure(reason=reason, detail=detail))

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {}
        if self.lockfile_version is not None:
            data["lockfileVersion"] = self.lockfile_version
        if self.locked_versions_with_path is not None:
            data["lockedVersionsWithPath"] = self.locked_versions_with_path
        if self.failure is not None:
            data["failure"] = self.failure.to_dict()
        return data


def _version_text(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    # Unquoted YAML versions like ``1.2`` decode as numbers
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None
