"""Drive file removal and commit cleaning through the pipeline states."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from commits.analyzer import DEFAULT_PREVIEW_LIMIT, AnalysisResult, CommitAnalyzer
from commits.rewriter import CommitRewriter, RewritePlan
from commits.trailers import DEFAULT_TRAILER_RULES, TrailerRule
from errors import CommitReadError, DirtyWorkingTreeError, EmptyHistoryError
from gitops.backup import BackupRef, create_backup_ref
from gitops.plumbing import GitPlumbing
from patterns.selection import TargetSelector
from pipeline.states import PipelineState, PipelineStateMachine
from removal.bfg import BfgTool
from removal.planner import RemovalPlan, RemovalPlanner
from scan.history import HistoryScanner
from scan.models import Candidate
from serde_msgspec import StructBaseStrict
from utils.process import ToolRunner, run_tool

LOGGER = logging.getLogger(__name__)


class PipelineOptions(StructBaseStrict, frozen=True):
    """Run-wide options shared by both phases."""

    dry_run: bool = True
    branch: str = "HEAD"
    preview_limit: int = DEFAULT_PREVIEW_LIMIT


class FilesOutcome(StructBaseStrict, frozen=True):
    """Result of the file-removal phase."""

    candidates: tuple[Candidate, ...]
    plan: RemovalPlan
    commands: tuple[tuple[str, ...], ...] = ()
    backup: BackupRef | None = None
    remaining: int | None = None
    states: tuple[PipelineState, ...] = ()


class CommitsOutcome(StructBaseStrict, frozen=True):
    """Result of the commit-cleaning phase."""

    analysis: AnalysisResult
    rewrite: RewritePlan | None = None
    backup: BackupRef | None = None
    remaining: int | None = None
    states: tuple[PipelineState, ...] = ()


class PipelineResult(StructBaseStrict, frozen=True):
    """Outcome of a run covering one or both phases."""

    dry_run: bool
    files: FilesOutcome | None = None
    commits: CommitsOutcome | None = None


class PipelineRunner:
    """Run the cleaning phases strictly in sequence.

    In execute mode each phase creates its own backup ref before mutating, so
    the commit phase of ``run_all`` pins the head produced by file removal.
    """

    def __init__(
        self,
        plumbing: GitPlumbing,
        *,
        selector: TargetSelector,
        bfg: BfgTool,
        rules: Sequence[TrailerRule] = DEFAULT_TRAILER_RULES,
        options: PipelineOptions | None = None,
        runner: ToolRunner = run_tool,
    ) -> None:
        self._plumbing = plumbing
        self._bfg = bfg
        self.options = options or PipelineOptions()
        self._scanner = HistoryScanner(plumbing, selector)
        self._planner = RemovalPlanner(plumbing, bfg, runner=runner)
        self._analyzer = CommitAnalyzer(
            plumbing,
            rules=rules,
            preview_limit=self.options.preview_limit,
        )
        self._rewriter = CommitRewriter(plumbing, rules=rules)

    @property
    def dry_run(self) -> bool:
        return self.options.dry_run

    def run_files(self) -> FilesOutcome:
        """Scan history and remove matching paths.

        Returns:
        -------
        FilesOutcome
            Candidates, plan, and (execute mode) the verification count.
        """
        machine = PipelineStateMachine("files")
        try:
            machine.advance(PipelineState.VALIDATING)
            self._require_history()
            if not self.dry_run:
                self._bfg.ensure_available()
            backup = self._backup(machine)
            machine.advance(PipelineState.SCANNING)
            candidates = tuple(self._scanner.scan())
            plan = self._planner.plan(candidates)
            commands = tuple(self._planner.commands(plan))
            if self.dry_run:
                machine.advance(PipelineState.PREVIEWING)
                self._planner.apply(plan, dry_run=True)
                return FilesOutcome(
                    candidates=candidates,
                    plan=plan,
                    commands=commands,
                    states=machine.history,
                )
            if plan.is_empty:
                machine.advance(PipelineState.DONE)
                LOGGER.info("No files found to remove")
                return FilesOutcome(
                    candidates=candidates,
                    plan=plan,
                    backup=backup,
                    remaining=0,
                    states=machine.history,
                )
            machine.advance(PipelineState.MUTATING)
            self._planner.apply(plan, dry_run=False, backup=backup)
            machine.advance(PipelineState.VERIFYING)
            remaining = len(self._scanner.scan())
            LOGGER.info("Verification: %d matching paths remain in history", remaining)
            machine.advance(PipelineState.DONE)
        except Exception:
            machine.fail()
            raise
        return FilesOutcome(
            candidates=candidates,
            plan=plan,
            commands=commands,
            backup=backup,
            remaining=remaining,
            states=machine.history,
        )

    def run_commits(self) -> CommitsOutcome:
        """Analyze the branch and strip trailers from its commit messages.

        Returns:
        -------
        CommitsOutcome
            Analysis, executed rewrite plan, and verification count.
        """
        machine = PipelineStateMachine("commits")
        branch = self.options.branch
        try:
            machine.advance(PipelineState.VALIDATING)
            self._require_history()
            if self._plumbing.resolve(branch) is None:
                msg = f"Unable to resolve branch {branch!r}"
                raise CommitReadError(msg)
            if not self.dry_run:
                self._rewriter.resolve_branch(branch)
                if not self._plumbing.is_clean():
                    msg = "Working tree has uncommitted changes; commit or stash them first"
                    raise DirtyWorkingTreeError(msg)
            backup = self._backup(machine, target=self._plumbing.resolve(branch))
            machine.advance(PipelineState.ANALYZING)
            analysis = self._analyzer.analyze(branch)
            if self.dry_run:
                machine.advance(PipelineState.PREVIEWING)
                return CommitsOutcome(analysis=analysis, states=machine.history)
            if not analysis.has_changes:
                machine.advance(PipelineState.DONE)
                LOGGER.info("No trailers found in commit messages")
                return CommitsOutcome(
                    analysis=analysis,
                    backup=backup,
                    remaining=0,
                    states=machine.history,
                )
            machine.advance(PipelineState.MUTATING)
            rewrite = self._rewriter.rewrite(branch, analysis, backup)
            machine.advance(PipelineState.VERIFYING)
            remaining = self._analyzer.analyze(branch).affected_commits
            LOGGER.info("Verification: %d commits still carry trailers", remaining)
            machine.advance(PipelineState.DONE)
        except Exception:
            machine.fail()
            raise
        return CommitsOutcome(
            analysis=analysis,
            rewrite=rewrite,
            backup=backup,
            remaining=remaining,
            states=machine.history,
        )

    def run_all(self) -> PipelineResult:
        """Run file removal, then commit cleaning.

        Returns:
        -------
        PipelineResult
            Outcomes of both phases.
        """
        files = self.run_files()
        commits = self.run_commits()
        return PipelineResult(dry_run=self.dry_run, files=files, commits=commits)

    def _require_history(self) -> None:
        if self._plumbing.head_sha() is None:
            msg = f"Repository has no commits: {self._plumbing.repo_root}"
            raise EmptyHistoryError(msg)

    def _backup(
        self,
        machine: PipelineStateMachine,
        *,
        target: str | None = None,
    ) -> BackupRef | None:
        if self.dry_run:
            return None
        machine.advance(PipelineState.BACKING_UP)
        return create_backup_ref(self._plumbing, target=target)


__all__ = [
    "CommitsOutcome",
    "FilesOutcome",
    "PipelineOptions",
    "PipelineResult",
    "PipelineRunner",
]
