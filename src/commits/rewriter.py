"""Rewrite commit messages on one branch to drop trailers."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from commits.analyzer import AnalysisResult
from commits.filter_branch import filter_branch_args, filter_branch_env, message_filter_script
from commits.trailers import DEFAULT_TRAILER_RULES, TrailerRule
from core_types import short_id
from errors import DetachedHeadError, DirtyWorkingTreeError, RewriteFailedError
from gitops.backup import BackupRef, require_backup
from gitops.plumbing import GitPlumbing
from serde_msgspec import StructBaseStrict, dumps_json

LOGGER = logging.getLogger(__name__)


class RewritePlan(StructBaseStrict, frozen=True):
    """Revision range and filter used for one rewrite."""

    revision_range_end: str
    filter_definition: str
    revision_range_start: str | None = None

    @property
    def revision_range(self) -> str:
        if self.revision_range_start is None:
            return self.revision_range_end
        return f"{self.revision_range_start}..{self.revision_range_end}"


class CommitRewriter:
    """Run ``git filter-branch`` over the smallest range covering affected commits."""

    def __init__(
        self,
        plumbing: GitPlumbing,
        *,
        rules: Sequence[TrailerRule] = DEFAULT_TRAILER_RULES,
    ) -> None:
        self._plumbing = plumbing
        self._rules = tuple(rules)

    def resolve_branch(self, branch: str) -> str:
        """Return a branch name, mapping ``HEAD`` to the checked-out branch.

        Raises
        ------
        DetachedHeadError
            Raised when ``HEAD`` is detached.
        """
        if branch != "HEAD":
            return branch
        current = self._plumbing.current_branch()
        if current is None:
            msg = "Cannot rewrite commit messages on a detached HEAD; pass --branch"
            raise DetachedHeadError(msg)
        return current

    def plan(self, branch: str, analysis: AnalysisResult) -> RewritePlan:
        """Return the rewrite range for ``analysis``.

        The range starts at the parent of the earliest affected commit. The
        whole branch is rewritten when that commit is a root, or when another
        affected commit is an ancestor of the parent (merged side histories).

        Returns:
        -------
        RewritePlan
            Range and serialized filter rules.
        """
        definition = dumps_json(self._rules).decode("utf-8")
        earliest = analysis.earliest_affected
        if earliest is None:
            return RewritePlan(revision_range_end=branch, filter_definition=definition)
        parents = self._plumbing.parents(earliest)
        if not parents:
            LOGGER.info(
                "Earliest commit %s is the first commit, rewriting entire branch history",
                short_id(earliest),
            )
            return RewritePlan(revision_range_end=branch, filter_definition=definition)
        parent = parents[0]
        if any(self._plumbing.is_ancestor(commit, parent) for commit in analysis.affected_ids):
            LOGGER.info("Affected commits precede %s, rewriting entire branch", short_id(parent))
            return RewritePlan(revision_range_end=branch, filter_definition=definition)
        LOGGER.info("Optimizing: rewriting from %s to %s", short_id(earliest), branch)
        return RewritePlan(
            revision_range_start=parent,
            revision_range_end=branch,
            filter_definition=definition,
        )

    def rewrite(
        self,
        branch: str,
        analysis: AnalysisResult,
        backup: BackupRef | None,
    ) -> RewritePlan | None:
        """Rewrite affected commit messages on ``branch``.

        Returns:
        -------
        RewritePlan | None
            Plan that was executed, or ``None`` when nothing was affected.

        Raises
        ------
        DirtyWorkingTreeError
            Raised when the working tree has uncommitted changes.
        DetachedHeadError
            Raised when ``branch`` is ``HEAD`` and ``HEAD`` is detached.
        MissingBackupError
            Raised when ``backup`` does not pin the branch head.
        RewriteFailedError
            Raised when ``git filter-branch`` fails.
        """
        if not analysis.has_changes:
            LOGGER.info("No trailers found in commit messages")
            return None
        if not self._plumbing.is_clean():
            msg = "Working tree has uncommitted changes; commit or stash them first"
            raise DirtyWorkingTreeError(msg)
        name = self.resolve_branch(branch)
        head = self._plumbing.resolve(name)
        if head is None:
            msg = f"Unable to resolve branch {name!r}"
            raise RewriteFailedError(msg)
        require_backup(self._plumbing, backup, head=head)
        plan = self.plan(name, analysis)
        LOGGER.info("Starting git filter-branch to clean commit messages...")
        with message_filter_script(self._rules) as wrapper:
            self._plumbing.run_git(
                filter_branch_args(wrapper, plan.revision_range),
                error_type=RewriteFailedError,
                env=filter_branch_env(),
            )
        LOGGER.info("Commit cleaning completed on %s", name)
        return plan


__all__ = ["CommitRewriter", "RewritePlan"]
