"""Find commits carrying trailers and preview their cleaned messages."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from commits.trailers import DEFAULT_TRAILER_RULES, TrailerRule, clean_message
from core_types import short_id
from gitops.plumbing import GitPlumbing
from serde_msgspec import StructBaseStrict

LOGGER = logging.getLogger(__name__)

DEFAULT_PREVIEW_LIMIT = 5


class CommitPreview(StructBaseStrict, frozen=True):
    """Before/after view of one affected commit message."""

    id: str
    short_id: str
    original_message: str
    cleaned_message: str
    trailers_found: tuple[str, ...] = ()


class AnalysisResult(StructBaseStrict, frozen=True):
    """Counts over one branch plus a capped preview."""

    branch: str
    total_commits: int = 0
    affected_commits: int = 0
    trailers_removed: int = 0
    earliest_affected: str | None = None
    affected_ids: tuple[str, ...] = ()
    preview: tuple[CommitPreview, ...] = ()

    @property
    def has_changes(self) -> bool:
        return self.affected_commits > 0


class CommitAnalyzer:
    """Walk a branch newest-first and apply :func:`clean_message` to each commit."""

    def __init__(
        self,
        plumbing: GitPlumbing,
        *,
        rules: Sequence[TrailerRule] = DEFAULT_TRAILER_RULES,
        preview_limit: int = DEFAULT_PREVIEW_LIMIT,
    ) -> None:
        self._plumbing = plumbing
        self._rules = tuple(rules)
        self._preview_limit = preview_limit

    @property
    def rules(self) -> tuple[TrailerRule, ...]:
        return self._rules

    def analyze(self, branch: str = "HEAD") -> AnalysisResult:
        """Return trailer counts for every commit reachable from ``branch``.

        ``earliest_affected`` is the last affected commit in the newest-first
        walk, which is the chronologically earliest one.

        Returns:
        -------
        AnalysisResult
            Exact counts; the preview holds at most ``preview_limit`` entries.

        Raises
        ------
        CommitReadError
            Raised when the branch cannot be resolved or walked.
        """
        LOGGER.info("Analyzing commit messages on %s", branch)
        total = 0
        trailers_removed = 0
        affected: list[str] = []
        preview: list[CommitPreview] = []
        for record in self._plumbing.iter_commits(branch):
            total += 1
            result = clean_message(record.message, self._rules)
            if not result.changed:
                continue
            affected.append(record.id)
            trailers_removed += len(result.matched_trailers)
            if len(preview) < self._preview_limit:
                preview.append(
                    CommitPreview(
                        id=record.id,
                        short_id=short_id(record.id),
                        original_message=record.message,
                        cleaned_message=result.cleaned,
                        trailers_found=result.matched_trailers,
                    )
                )
        LOGGER.info(
            "Found %d of %d commits with trailers (%d trailers)",
            len(affected),
            total,
            trailers_removed,
        )
        return AnalysisResult(
            branch=branch,
            total_commits=total,
            affected_commits=len(affected),
            trailers_removed=trailers_removed,
            earliest_affected=affected[-1] if affected else None,
            affected_ids=tuple(affected),
            preview=tuple(preview),
        )


__all__ = ["DEFAULT_PREVIEW_LIMIT", "AnalysisResult", "CommitAnalyzer", "CommitPreview"]
