"""Scan result records."""

from __future__ import annotations

from core_types import PathKind
from serde_msgspec import StructBaseStrict

SUMMARY_LIMIT = 60
_ELLIPSIS = "..."


def summarize_subject(subject: str, *, limit: int = SUMMARY_LIMIT) -> str:
    """Return ``subject`` shortened to at most ``limit`` characters.

    Returns:
    -------
    str
        The subject, or its leading characters followed by ``...``.
    """
    subject = subject.strip()
    if len(subject) <= limit:
        return subject
    return subject[: limit - len(_ELLIPSIS)] + _ELLIPSIS


class ChangeInfo(StructBaseStrict, frozen=True):
    """Commit that first introduced a path."""

    id: str
    timestamp: str
    summary: str


class Candidate(StructBaseStrict, frozen=True):
    """Historical path selected for removal."""

    path: str
    kind: PathKind
    reason: str
    earliest_change: ChangeInfo | None = None

    @property
    def basename(self) -> str:
        return self.path.rstrip("/").rsplit("/", 1)[-1]

    @property
    def is_directory(self) -> bool:
        return self.kind == PathKind.DIRECTORY


__all__ = ["SUMMARY_LIMIT", "Candidate", "ChangeInfo", "summarize_subject"]
