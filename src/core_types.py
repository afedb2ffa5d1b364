"""Shared type aliases and small typing helpers."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import Annotated

from msgspec import Meta

type PathLike = str | Path

PositiveInt = Annotated[int, Meta(gt=0)]


class PathKind(StrEnum):
    """Kind of a historical path."""

    FILE = "file"
    DIRECTORY = "directory"


class RuleKind(StrEnum):
    """Syntax of a configured pattern rule."""

    GLOB = "glob"
    REGEX = "regex"


def ensure_path(p: PathLike) -> Path:
    """Return a normalized ``Path`` for the provided value.

    Parameters
    ----------
    p:
        String or ``Path`` input to normalize.

    Returns:
    -------
    pathlib.Path
        Normalized path instance.
    """
    return p if isinstance(p, Path) else Path(p)


def short_id(commit_id: str, length: int = 7) -> str:
    """Return the abbreviated form of a commit id.

    Returns:
    -------
    str
        Leading ``length`` characters of the id.
    """
    return commit_id[:length]


__all__ = [
    "PathKind",
    "PathLike",
    "PositiveInt",
    "RuleKind",
    "ensure_path",
    "short_id",
]
