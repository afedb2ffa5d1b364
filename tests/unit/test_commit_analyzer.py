"""Tests for commit analysis and the rewrite range."""

from __future__ import annotations

import pytest

from commits import CommitAnalyzer, CommitRewriter
from errors import (
    DetachedHeadError,
    DirtyWorkingTreeError,
    ErrorCode,
    MissingBackupError,
    RewriteFailedError,
    ValidationError,
)
from gitops.backup import create_backup_ref
from tests.test_helpers.fakes import FakePlumbing, commit

_TRAILER = "Co-Authored-By: Claude <noreply@anthropic.com>"
_C0 = "0" * 40
_C1 = "1" * 40
_C2 = "2" * 40
_C3 = "a" * 40


def _history(plumbing: FakePlumbing) -> None:
    plumbing.commits = [
        commit(_C3, f"Third\n\n{_TRAILER}\n"),
        commit(_C2, "Second\n"),
        commit(_C1, f"First\n\n{_TRAILER}\n"),
        commit(_C0, "Root\n"),
    ]
    plumbing.parent_map = {_C3: (_C2,), _C2: (_C1,), _C1: (_C0,), _C0: ()}


def test_analyze_counts_and_earliest(fake_plumbing: FakePlumbing) -> None:
    """Ensure counts are exact and the earliest affected commit is found."""
    _history(fake_plumbing)
    analysis = CommitAnalyzer(fake_plumbing).analyze("main")
    assert analysis.total_commits == 4
    assert analysis.affected_commits == 2
    assert analysis.trailers_removed == 2
    assert analysis.earliest_affected == _C1
    assert analysis.affected_ids == (_C3, _C1)
    assert analysis.has_changes


def test_preview_is_capped(fake_plumbing: FakePlumbing) -> None:
    """Ensure the preview never exceeds its limit while counts stay exact."""
    fake_plumbing.commits = [
        commit(f"{index:040d}", f"Change {index}\n\n{_TRAILER}\n") for index in range(7)
    ]
    analysis = CommitAnalyzer(fake_plumbing, preview_limit=3).analyze()
    assert analysis.affected_commits == 7
    assert len(analysis.preview) == 3
    first = analysis.preview[0]
    assert first.short_id == first.id[:7]
    assert first.cleaned_message == "Change 0\n"
    assert first.trailers_found == (_TRAILER,)


def test_analyze_without_trailers(fake_plumbing: FakePlumbing) -> None:
    """Ensure clean histories report no changes."""
    fake_plumbing.commits = [commit(_C0, "Root\n")]
    analysis = CommitAnalyzer(fake_plumbing).analyze()
    assert not analysis.has_changes
    assert analysis.earliest_affected is None
    assert analysis.preview == ()


def test_plan_starts_at_parent_of_earliest(fake_plumbing: FakePlumbing) -> None:
    """Ensure the rewrite range begins just before the earliest affected commit."""
    _history(fake_plumbing)
    analysis = CommitAnalyzer(fake_plumbing).analyze("main")
    plan = CommitRewriter(fake_plumbing).plan("main", analysis)
    assert plan.revision_range == f"{_C0}..main"
    assert "claude-coauthor" in plan.filter_definition


def test_plan_rewrites_whole_branch_from_root(fake_plumbing: FakePlumbing) -> None:
    """Ensure a root commit with trailers rewrites the entire branch."""
    _history(fake_plumbing)
    fake_plumbing.commits[-1] = commit(_C0, f"Root\n\n{_TRAILER}\n")
    analysis = CommitAnalyzer(fake_plumbing).analyze("main")
    assert analysis.earliest_affected == _C0
    assert CommitRewriter(fake_plumbing).plan("main", analysis).revision_range == "main"


def test_plan_rewrites_whole_branch_for_merged_history(fake_plumbing: FakePlumbing) -> None:
    """Ensure affected ancestors of the range start force a full rewrite."""
    _history(fake_plumbing)
    fake_plumbing.ancestry.add((_C3, _C0))
    analysis = CommitAnalyzer(fake_plumbing).analyze("main")
    assert CommitRewriter(fake_plumbing).plan("main", analysis).revision_range == "main"


def test_resolve_branch_rejects_detached_head(fake_plumbing: FakePlumbing) -> None:
    """Ensure HEAD maps to the current branch and detached HEAD fails."""
    rewriter = CommitRewriter(fake_plumbing)
    assert rewriter.resolve_branch("HEAD") == "main"
    assert rewriter.resolve_branch("feature") == "feature"
    fake_plumbing.branch = None
    with pytest.raises(DetachedHeadError, match="detached HEAD") as excinfo:
        rewriter.resolve_branch("HEAD")
    assert isinstance(excinfo.value, ValidationError)
    assert excinfo.value.code == ErrorCode.DETACHED_HEAD


def test_rewrite_requires_clean_tree(fake_plumbing: FakePlumbing) -> None:
    """Ensure uncommitted changes block the rewrite."""
    _history(fake_plumbing)
    fake_plumbing.clean = False
    analysis = CommitAnalyzer(fake_plumbing).analyze("main")
    backup = create_backup_ref(fake_plumbing)
    with pytest.raises(DirtyWorkingTreeError):
        CommitRewriter(fake_plumbing).rewrite("HEAD", analysis, backup)
    assert fake_plumbing.git_calls == []


def test_rewrite_requires_backup(fake_plumbing: FakePlumbing) -> None:
    """Ensure the rewrite refuses to run without a backup ref."""
    _history(fake_plumbing)
    analysis = CommitAnalyzer(fake_plumbing).analyze("main")
    with pytest.raises(MissingBackupError):
        CommitRewriter(fake_plumbing).rewrite("HEAD", analysis, None)
    assert fake_plumbing.git_calls == []


def test_rewrite_runs_filter_branch(fake_plumbing: FakePlumbing) -> None:
    """Ensure filter-branch runs over the planned range with warnings squelched."""
    _history(fake_plumbing)
    analysis = CommitAnalyzer(fake_plumbing).analyze("main")
    backup = create_backup_ref(fake_plumbing)
    plan = CommitRewriter(fake_plumbing).rewrite("HEAD", analysis, backup)
    assert plan is not None
    [call] = fake_plumbing.git_calls
    assert call.args[:3] == ("filter-branch", "-f", "--msg-filter")
    assert call.args[-1] == f"{_C0}..main"
    assert call.env is not None
    assert call.env["FILTER_BRANCH_SQUELCH_WARNING"] == "1"
    assert not CommitAnalyzer(fake_plumbing).analyze("main").has_changes


def test_rewrite_skips_when_nothing_affected(fake_plumbing: FakePlumbing) -> None:
    """Ensure clean histories are left alone even without a backup."""
    fake_plumbing.commits = [commit(_C0, "Root\n")]
    analysis = CommitAnalyzer(fake_plumbing).analyze()
    assert CommitRewriter(fake_plumbing).rewrite("HEAD", analysis, None) is None
    assert fake_plumbing.git_calls == []


def test_filter_branch_without_backup_fails_at_call_time(fake_plumbing: FakePlumbing) -> None:
    """Ensure the fake plumbing rejects a filter-branch run no backup ref protects."""
    _history(fake_plumbing)
    with pytest.raises(AssertionError, match="refs/backup/pre-clean-"):
        fake_plumbing.run_git(["filter-branch", "-f", "main"], error_type=RewriteFailedError)
    assert fake_plumbing.commits[0].message == f"Third\n\n{_TRAILER}\n"
