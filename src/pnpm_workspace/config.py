"""Settings for resolving local workspace paths.

Every path handled by this package (package files, workspace configs, lock
files) is relative to a single local checkout directory. The directory is
resolved from an explicit argument, the ``PNPM_WORKSPACE_LOCAL_DIR`` environment
variable, or the current working directory, in that order.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


LOCAL_DIR_ENV_VAR = "PNPM_WORKSPACE_LOCAL_DIR"


class ConfigError(RuntimeError):
    """Raised when the settings cannot be resolved or are invalid."""


@dataclass(slots=True, frozen=True)
class Settings:
    """Top-level settings container."""

    local_dir: Path

    def local_path(self, relative: str) -> Path:
        """Return the absolute path of a local-relative path."""
        return self.local_dir / relative


def _resolve_local_dir(local_dir: Path | str | None = None) -> Path:
    """Resolve the local checkout directory.

    Priority:
    1. Explicit local_dir argument
    2. PNPM_WORKSPACE_LOCAL_DIR environment variable
    3. Current working directory
    """
    if local_dir is not None:
        return Path(local_dir)

    env_dir = os.environ.get(LOCAL_DIR_ENV_VAR)
    if env_dir:
        return Path(env_dir)

    return Path.cwd()


def load_settings(local_dir: Path | str | None = None) -> Settings:
    """Resolve and validate settings.

    Raises:
        ConfigError: If the local directory does not exist or is not a directory.
    """
    resolved = _resolve_local_dir(local_dir)

    if not resolved.exists():
        raise ConfigError(f"Local directory not found: {resolved}")
    if not resolved.is_dir():
        raise ConfigError(f"Local directory is not a directory: {resolved}")

    return Settings(local_dir=resolved.resolve())


__all__ = ["ConfigError", "LOCAL_DIR_ENV_VAR", "Settings", "load_settings"]
