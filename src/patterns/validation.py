"""Validation helpers for glob rules and user-supplied directory names."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from errors import PatternValidationError

LOGGER = logging.getLogger(__name__)

_REGEX_SHORTHAND = re.compile(r"(?<!\\)\\([dDwWsS])")
_BROAD_DIRECTORY_NAMES = frozenset({"temp", "tmp", "cache", "build"})


def validate_glob_pattern(source: str) -> None:
    """Reject regular-expression syntax inside a glob rule.

    Parameters
    ----------
    source
        Glob source to validate.

    Raises
    ------
    PatternValidationError
        Raised when the source is empty or carries regex-only tokens.
    """
    if not source:
        msg = "Invalid glob pattern '': pattern must not be empty"
        raise PatternValidationError(msg)
    shorthand = _REGEX_SHORTHAND.search(source)
    if shorthand is not None:
        token = shorthand.group(0)
        msg = (
            f"Invalid glob pattern {source!r}: {token!r} is regular-expression syntax; "
            "use a regex rule or a character class such as [0-9]"
        )
        raise PatternValidationError(msg)
    if source.startswith("^"):
        msg = f"Invalid glob pattern {source!r}: leading '^' anchor is regular-expression syntax"
        raise PatternValidationError(msg)
    if source.endswith("$") and not source.endswith("\\$"):
        msg = f"Invalid glob pattern {source!r}: trailing '$' anchor is regular-expression syntax"
        raise PatternValidationError(msg)


def validate_directory_name(name: str) -> str:
    """Validate one custom directory name and return it stripped.

    Returns:
    -------
    str
        The name without surrounding whitespace.

    Raises
    ------
    PatternValidationError
        Raised when the name is empty, a path, a traversal, or a bare wildcard.
    """
    stripped = name.strip()
    if not stripped:
        msg = "Invalid directory name: name must not be empty or whitespace"
        raise PatternValidationError(msg)
    if ".." in stripped:
        msg = f"Invalid directory name {stripped!r}: path traversal ('..') is not allowed"
        raise PatternValidationError(msg)
    if stripped.startswith("/"):
        msg = f"Invalid directory name {stripped!r}: absolute paths are not allowed"
        raise PatternValidationError(msg)
    if "/" in stripped:
        msg = (
            f"Invalid directory name {stripped!r}: path separators are not allowed; "
            "use a single directory name"
        )
        raise PatternValidationError(msg)
    if stripped == "*":
        msg = "Invalid directory name '*': a bare wildcard would match every directory"
        raise PatternValidationError(msg)
    if len(stripped) == 1 or stripped.lower() in _BROAD_DIRECTORY_NAMES:
        LOGGER.warning(
            "Directory name %r is very broad and may match unrelated directories",
            stripped,
        )
    return stripped


def validate_custom_dirs(names: Iterable[str]) -> tuple[str, ...]:
    """Validate custom directory names, preserving order and dropping duplicates.

    Returns:
    -------
    tuple[str, ...]
        Validated names.
    """
    validated: dict[str, None] = {}
    for name in names:
        validated.setdefault(validate_directory_name(name), None)
    return tuple(validated)


__all__ = ["validate_custom_dirs", "validate_directory_name", "validate_glob_pattern"]
