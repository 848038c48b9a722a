"""pnpm workspace resolution.

Finds the lock file governing each package file of a pnpm workspace, reads the
locked versions per importer, and extracts workspace catalogs.
"""

from .parsers.pnpm_lock import get_pnpm_lock, parse_lock
from .parsers.pnpm_workspace import extract_pnpm_workspace_file, parse_pnpm_catalogs
from .workspace import detect_pnpm_workspaces, extract_pnpm_filters, find_pnpm_workspace

__all__ = [
    "detect_pnpm_workspaces",
    "extract_pnpm_filters",
    "extract_pnpm_workspace_file",
    "find_pnpm_workspace",
    "get_pnpm_lock",
    "parse_lock",
    "parse_pnpm_catalogs",
]
