"""Dependency name normalisation and spec classification.

Classifies a raw dependency spec (``"^1.2.3"``, ``"npm:other@1.0.0"``,
``"file:../lib"``, ``"owner/repo#v1.0.0"``...) into the datasource and current
value a downstream updater would look up.
"""

from __future__ import annotations

import re
from typing import Any

from .logging import get_logger
from .models.catalog import DependencyDetails
from .parsers.semver import is_valid, is_version

logger = get_logger("dependency")

NPM_DATASOURCE = "npm"
GITHUB_TAGS_DATASOURCE = "github-tags"

_URL_SAFE = re.compile(r"^[A-Za-z0-9\-_.!~*'()]+$")
_SCOPED = re.compile(r"^@([^/]+)/([^/]+)$")
_BLACKLISTED_NAMES = {"node_modules", "favicon.ico"}
_RESOLUTION_NAME = re.compile(r"((?:@[^/]+/)?[^/@]+)$")
_GITHUB_SSH = re.compile(r"^git\+ssh://git@github\.com[:/](?P<owner>[^/]+)/(?P<repo>[^/]+?)(?:\.git)?$")
_GITHUB_OWNER = re.compile(r"^[a-z\d](?:[a-z\d]|-(?=[a-z\d])){0,38}$", re.IGNORECASE)
_GITHUB_REPO = re.compile(r"^[a-z\d\-_.]+$", re.IGNORECASE)
_SHORT_DIGEST = re.compile(r"^[0-9a-f]{7}$")
_LONG_DIGEST = re.compile(r"^[0-9a-f]{40}$")


def is_valid_package_name(name: str) -> bool:
    """Apply npm's legacy package name rules (uppercase is tolerated)."""
    if not name or name != name.strip():
        return False
    if name.startswith((".", "_")) or name.lower() in _BLACKLISTED_NAMES:
        return False
    scoped = _SCOPED.match(name)
    if scoped:
        return all(_URL_SAFE.match(part) for part in scoped.groups())
    return _URL_SAFE.match(name) is not None


def parse_dep_name(dep_type: str, key: str) -> str:
    """Return the dependency name for a manifest key.

    Only ``resolutions`` keys carry a path (``"a/**/@scope/b"``); the name is
    the trailing segment.
    """
    if dep_type != "resolutions":
        return key
    match = _RESOLUTION_NAME.search(key)
    return match.group(1) if match else key


def _github_owner_repo(ref_part: str) -> tuple[str, str, str] | None:
    ssh = _GITHUB_SSH.match(ref_part)
    if ssh:
        owner, repo = ssh.group("owner"), ssh.group("repo")
        return f"{owner}/{repo}", owner, repo

    owner_repo = re.sub(r"^github:", "", ref_part)
    owner_repo = re.sub(r"^git\+", "", owner_repo)
    owner_repo = re.sub(r"^https://github\.com/", "", owner_repo)
    owner_repo = re.sub(r"\.git$", "", owner_repo)
    split = owner_repo.split("/")
    if len(split) != 2:
        return None
    return owner_repo, split[0], split[1]


def extract_dependency(dep_type: str, dep_name: str, value: Any) -> DependencyDetails:
    """Classify a raw spec for ``dep_name`` into dependency details."""
    dep = DependencyDetails()
    if not is_valid_package_name(dep_name):
        dep.skip_reason = "invalid-name"
        return dep
    if not isinstance(value, str):
        dep.skip_reason = "invalid-value"
        return dep

    current = value.strip()
    dep.current_value = current

    if current.startswith("npm:"):
        dep.npm_package_alias = True
        alias = current[len("npm:") :].split("@")
        if len(alias) == 2:
            dep.package_name, dep.current_value = alias
        elif len(alias) == 3:
            dep.package_name = f"{alias[0]}@{alias[1]}"
            dep.current_value = alias[2]
        else:
            logger.debug("Invalid npm package alias for %s (%s): %s", dep_name, dep_type, current)
        current = dep.current_value

    if current.startswith("file:"):
        dep.skip_reason = "file"
        return dep

    if is_valid(current):
        dep.datasource = NPM_DATASOURCE
        if current == "":
            dep.skip_reason = "empty"
        return dep

    hash_split = current.split("#")
    if len(hash_split) != 2:
        dep.skip_reason = "unspecified-version"
        return dep

    name_part, ref_part = hash_split
    github = _github_owner_repo(name_part)
    if github is None:
        dep.skip_reason = "unspecified-version"
        return dep
    owner_repo, owner, repo = github
    if not _GITHUB_OWNER.match(owner) or not _GITHUB_REPO.match(repo):
        dep.skip_reason = "unspecified-version"
        return dep

    if is_version(ref_part):
        dep.current_raw_value = current
        dep.current_value = ref_part
    elif _SHORT_DIGEST.match(ref_part) or _LONG_DIGEST.match(ref_part):
        dep.current_raw_value = current
        dep.current_value = None
        dep.current_digest = ref_part
    else:
        dep.skip_reason = "unversioned-reference"
        return dep

    dep.datasource = GITHUB_TAGS_DATASOURCE
    dep.package_name = owner_repo
    dep.source_url = f"https://github.com/{owner_repo}"
    dep.git_ref = True
    return dep


__all__ = [
    "GITHUB_TAGS_DATASOURCE",
    "NPM_DATASOURCE",
    "extract_dependency",
    "is_valid_package_name",
    "parse_dep_name",
]
