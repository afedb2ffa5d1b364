"""Plan and apply removal of candidates from every commit."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from errors import EmptyHistoryError
from gitops.backup import BackupRef, create_backup_ref, require_backup
from gitops.plumbing import GitPlumbing
from removal.bfg import BfgTool, DeleteMode
from scan.models import Candidate
from serde_msgspec import StructBaseStrict
from utils.process import ToolRunner, format_command, run_tool

LOGGER = logging.getLogger(__name__)

REFLOG_EXPIRE_ARGS: tuple[str, ...] = ("git", "reflog", "expire", "--expire=now", "--all")
GC_ARGS: tuple[str, ...] = ("git", "gc", "--prune=now", "--aggressive")


class RemovalPlan(StructBaseStrict, frozen=True):
    """Unique basenames to delete, split by kind."""

    repo_path: str
    file_names: tuple[str, ...] = ()
    directory_names: tuple[str, ...] = ()
    candidates: tuple[Candidate, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.file_names and not self.directory_names


class RemovalPlanner:
    """Turn candidates into BFG invocations and run them.

    Dry runs and executions share :meth:`plan` and :meth:`commands`; only
    :meth:`apply` with ``dry_run=False`` touches the repository.
    """

    def __init__(
        self,
        plumbing: GitPlumbing,
        bfg: BfgTool,
        *,
        runner: ToolRunner = run_tool,
    ) -> None:
        self._plumbing = plumbing
        self._bfg = bfg
        self._runner = runner

    def plan(self, candidates: Iterable[Candidate]) -> RemovalPlan:
        """Partition candidates into unique file and folder basenames.

        Files beneath a directory candidate are dropped: deleting the folder
        removes them, and deleting their basename would also hit unrelated
        files elsewhere in the tree.

        Returns:
        -------
        RemovalPlan
            Names in order of first appearance.
        """
        items = tuple(candidates)
        directories = [item.path for item in items if item.is_directory]
        file_names: dict[str, None] = {}
        directory_names: dict[str, None] = {}
        for item in items:
            if item.is_directory:
                directory_names.setdefault(item.basename, None)
            elif not _under_any(item.path, directories):
                file_names.setdefault(item.basename, None)
        return RemovalPlan(
            repo_path=str(self._plumbing.repo_root),
            file_names=tuple(file_names),
            directory_names=tuple(directory_names),
            candidates=items,
        )

    def commands(self, plan: RemovalPlan) -> list[tuple[str, ...]]:
        """Return every command :meth:`apply` would run, in order."""
        if plan.is_empty:
            return []
        commands = [
            self._bfg.command(DeleteMode.FILES, name, plan.repo_path) for name in plan.file_names
        ]
        commands.extend(
            self._bfg.command(DeleteMode.FOLDERS, name, plan.repo_path)
            for name in plan.directory_names
        )
        commands.extend((REFLOG_EXPIRE_ARGS, GC_ARGS))
        return commands

    def apply(
        self,
        plan: RemovalPlan,
        *,
        dry_run: bool,
        backup: BackupRef | None = None,
    ) -> BackupRef | None:
        """Log (dry run) or run (execute) the plan.

        Returns:
        -------
        BackupRef | None
            Backup pinning the pre-removal head, or ``None`` for dry runs and
            empty plans.

        Raises
        ------
        ToolNotFoundError
            Raised in execute mode when BFG or java is unavailable.
        MissingBackupError
            Raised when the given backup does not pin the current head.
        RemovalFailedError
            Raised when BFG, reflog expiry, or gc fails.
        """
        if plan.is_empty:
            LOGGER.info("No files found to remove")
            return None
        if dry_run:
            LOGGER.info("[DRY RUN] Would remove %d paths from history:", len(plan.candidates))
            for command in self.commands(plan):
                LOGGER.info("[DRY RUN] Would run: %s", format_command(command))
            return None
        self._bfg.ensure_available()
        head = self._plumbing.head_sha()
        if head is None:
            msg = "Cannot remove files from a repository without commits"
            raise EmptyHistoryError(msg)
        if backup is None:
            backup = create_backup_ref(self._plumbing, target=head)
        require_backup(self._plumbing, backup, head=head)
        repo_root = self._plumbing.repo_root
        deletions = [(DeleteMode.FILES, name) for name in plan.file_names]
        deletions.extend((DeleteMode.FOLDERS, name) for name in plan.directory_names)
        for mode, name in deletions:
            LOGGER.info("Running: %s", format_command(self._bfg.command(mode, name, repo_root)))
            self._bfg.run(mode, name, repo_root, runner=self._runner)
        LOGGER.info("Running: %s", format_command(REFLOG_EXPIRE_ARGS))
        self._plumbing.expire_reflog()
        LOGGER.info("Running: %s", format_command(GC_ARGS))
        self._plumbing.compact()
        LOGGER.info("Removed %d paths from history", len(plan.candidates))
        return backup


def _under_any(path: str, directories: Iterable[str]) -> bool:
    return any(path.startswith(f"{directory}/") for directory in directories)


__all__ = ["GC_ARGS", "REFLOG_EXPIRE_ARGS", "RemovalPlan", "RemovalPlanner"]
