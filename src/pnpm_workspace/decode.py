"""YAML decoding shared by the workspace and lock file parsers."""

from __future__ import annotations

from typing import Any

import yaml

# SafeLoader raises more than YAMLError on well-formed input: impossible
# timestamps (``2024-13-45``) surface as ValueError, deep nesting as RecursionError.
YAML_DECODE_ERRORS: tuple[type[BaseException], ...] = (
    yaml.YAMLError,
    ValueError,
    TypeError,
    RecursionError,
)


def safe_load_yaml(content: str) -> Any:
    """Decode a single YAML document.

    Raises:
        One of YAML_DECODE_ERRORS when the content cannot be decoded.
    """
    return yaml.safe_load(content)


__all__ = ["YAML_DECODE_ERRORS", "safe_load_yaml"]
