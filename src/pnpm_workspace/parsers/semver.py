"""npm version and range validity built atop packaging.version.

Supported expressions:
- exact versions (e.g., "1.2.3", "v1.2.3", "1.2.3-beta.1+build")
- caret and tilde ranges (^x.y.z, ~x.y, ~>x)
- comparators (>=, >, <=, <, =), space separated within a set
- x-ranges (1.x, 1.2.*, *, "")
- hyphen ranges ("1.0.0 - 2.0.0")
- alternatives joined by "||"
"""

from __future__ import annotations

import re

from packaging.version import InvalidVersion, Version


_PRERELEASE = r"(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
_EXACT = re.compile(rf"^v?(\d+\.\d+\.\d+){_PRERELEASE}$")
_PARTIAL = re.compile(
    rf"^v?((?:\d+|[xX*])(?:\.(?:\d+|[xX*])){{0,2}}){_PRERELEASE}$"
)
_OPERATOR = re.compile(r"^(\^|~>|~|>=|<=|>|<|=)\s*")
_HYPHEN = re.compile(r"^\s*(\S+)\s+-\s+(\S+)\s*$")


def _parse_version(v: str) -> Version:
    return Version(v)


def is_version(value: str) -> bool:
    """Return True when value is a single exact semver version."""
    match = _EXACT.match(value.strip())
    if match is None:
        return False
    try:
        _parse_version(match.group(1))
    except InvalidVersion:
        return False
    return True


def _is_partial(operand: str) -> bool:
    match = _PARTIAL.match(operand)
    if match is None:
        return False
    release = re.sub(r"[xX*]", "0", match.group(1))
    try:
        _parse_version(release)
    except InvalidVersion:
        return False
    return True


def _is_comparator_set(expr: str) -> bool:
    hyphen = _HYPHEN.match(expr)
    if hyphen:
        return _is_partial(hyphen.group(1)) and _is_partial(hyphen.group(2))

    # Operators may be separated from their operand: ">= 1.0.0"
    tokens = re.sub(r"(\^|~>|~|>=|<=|>|<|=)\s+", r"\1", expr).split()
    if not tokens:
        return True
    for token in tokens:
        operand = _OPERATOR.sub("", token, count=1)
        if not operand or not _is_partial(operand):
            return False
    return True


def is_valid(expr: str) -> bool:
    """Return True when expr is an exact version or a valid npm range."""
    return all(_is_comparator_set(part.strip()) for part in expr.split("||"))


__all__ = ["is_valid", "is_version"]
