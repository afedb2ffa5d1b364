"""Version-control plumbing used by the scanner, planner, and rewriter.

Reads go through pygit2 where it offers an API (commit walks, ancestry, ref
creation, status); the single history stream, garbage collection and
``filter-branch`` go through the ``git`` executable.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path
from typing import Protocol

import pygit2
from pygit2.enums import SortMode

from errors import BackupError, CommitReadError, ExternalToolError, RemovalFailedError, ScanError
from gitops.context import GitContext
from serde_msgspec import StructBaseStrict
from utils.process import ToolResult, run_tool

LOGGER = logging.getLogger(__name__)

RECORD_SEPARATOR = "\x1e"
FIELD_SEPARATOR = "\x1f"
HISTORY_LOG_ARGS: tuple[str, ...] = (
    "-c",
    "core.quotePath=false",
    "log",
    "--exclude=refs/backup/*",
    "--all",
    "--reverse",
    "--no-renames",
    "--diff-filter=A",
    "--name-only",
    "--format=%x1e%H%x1f%aI%x1f%s%x1f",
)


class HistoryAddition(StructBaseStrict, frozen=True):
    """Paths added by one commit, oldest commits first."""

    commit_id: str
    timestamp: str
    subject: str
    paths: tuple[str, ...] = ()


class CommitRecord(StructBaseStrict, frozen=True):
    """Commit identity with its full message."""

    id: str
    subject: str
    message: str


class GitPlumbing(Protocol):
    """Repository operations needed by the cleaning pipeline."""

    @property
    def repo_root(self) -> Path: ...

    def head_sha(self) -> str | None: ...

    def current_branch(self) -> str | None: ...

    def history_additions(self) -> Iterator[HistoryAddition]: ...

    def iter_commits(self, branch: str) -> Iterator[CommitRecord]: ...

    def parents(self, commit_id: str) -> tuple[str, ...]: ...

    def is_ancestor(self, ancestor: str, descendant: str) -> bool: ...

    def resolve(self, ref: str) -> str | None: ...

    def create_ref(self, name: str, target: str) -> None: ...

    def is_clean(self) -> bool: ...

    def run_git(
        self,
        args: Sequence[str],
        *,
        error_type: type[ExternalToolError],
        env: Mapping[str, str] | None = None,
    ) -> ToolResult: ...

    def expire_reflog(self) -> None: ...

    def compact(self) -> None: ...


class RepositoryPlumbing:
    """pygit2 and git-CLI implementation of :class:`GitPlumbing`."""

    def __init__(self, ctx: GitContext, *, git_executable: str = "git") -> None:
        self._ctx = ctx
        self._git = git_executable

    @property
    def repo_root(self) -> Path:
        return self._ctx.repo_root

    @property
    def repo(self) -> pygit2.Repository:
        return self._ctx.repo

    def head_sha(self) -> str | None:
        repo = self.repo
        if repo.head_is_unborn:
            return None
        return str(repo.head.peel(pygit2.Commit).id)

    def current_branch(self) -> str | None:
        repo = self.repo
        if repo.head_is_unborn or repo.head_is_detached:
            return None
        return repo.head.shorthand

    def history_additions(self) -> Iterator[HistoryAddition]:
        """Yield every path addition across all refs, oldest first.

        Raises
        ------
        ScanError
            Raised when the history log cannot be read.
        """
        result = self.run_git(HISTORY_LOG_ARGS, error_type=ScanError)
        yield from parse_history_log(result.stdout)

    def iter_commits(self, branch: str) -> Iterator[CommitRecord]:
        """Yield commits reachable from ``branch``, newest first.

        Raises
        ------
        CommitReadError
            Raised when the branch cannot be resolved or walked.
        """
        commit = _resolve_commit(self.repo, branch)
        if commit is None:
            msg = f"Unable to resolve branch {branch!r}"
            raise CommitReadError(msg)
        try:
            for entry in self.repo.walk(commit.id, SortMode.TOPOLOGICAL | SortMode.TIME):
                message = entry.message
                subject = message.split("\n", 1)[0]
                yield CommitRecord(id=str(entry.id), subject=subject, message=message)
        except (LookupError, ValueError, pygit2.GitError) as exc:
            msg = f"Failed to read commits on {branch!r}: {exc}"
            raise CommitReadError(msg, cause=exc) from exc

    def parents(self, commit_id: str) -> tuple[str, ...]:
        commit = _resolve_commit(self.repo, commit_id)
        if commit is None:
            msg = f"Unknown commit {commit_id!r}"
            raise CommitReadError(msg)
        return tuple(str(parent_id) for parent_id in commit.parent_ids)

    def is_ancestor(self, ancestor: str, descendant: str) -> bool:
        if ancestor == descendant:
            return True
        try:
            return self.repo.descendant_of(descendant, ancestor)
        except (KeyError, ValueError, pygit2.GitError) as exc:
            msg = f"Failed to compare {ancestor} and {descendant}: {exc}"
            raise CommitReadError(msg, cause=exc) from exc

    def resolve(self, ref: str) -> str | None:
        commit = _resolve_commit(self.repo, ref)
        return None if commit is None else str(commit.id)

    def create_ref(self, name: str, target: str) -> None:
        """Create a direct reference; never overwrites an existing one.

        Raises
        ------
        BackupError
            Raised when the reference exists or cannot be written.
        """
        try:
            self.repo.references.create(name, pygit2.Oid(hex=target))
        except (ValueError, pygit2.GitError) as exc:
            msg = f"Failed to create reference {name}: {exc}"
            raise BackupError(msg, cause=exc) from exc
        LOGGER.info("Created reference %s -> %s", name, target)

    def is_clean(self) -> bool:
        status = self.repo.status(untracked_files="no", ignored=False)
        return not status

    def run_git(
        self,
        args: Sequence[str],
        *,
        error_type: type[ExternalToolError],
        env: Mapping[str, str] | None = None,
    ) -> ToolResult:
        return run_tool(
            (self._git, *args),
            cwd=self.repo_root,
            env=env,
            error_type=error_type,
            description=_git_label(args),
        )

    def expire_reflog(self) -> None:
        self.run_git(("reflog", "expire", "--expire=now", "--all"), error_type=RemovalFailedError)

    def compact(self) -> None:
        self.run_git(("gc", "--prune=now", "--aggressive"), error_type=RemovalFailedError)


def parse_history_log(text: str) -> Iterator[HistoryAddition]:
    """Parse the record-separated output of :data:`HISTORY_LOG_ARGS`.

    Yields:
    ------
    HistoryAddition
        One record per commit, in log order.
    """
    for record in text.split(RECORD_SEPARATOR):
        if not record.strip():
            continue
        fields = record.split(FIELD_SEPARATOR, 3)
        if len(fields) != 4:
            LOGGER.debug("Skipping malformed history record: %r", record[:80])
            continue
        commit_id, timestamp, subject, body = fields
        paths = tuple(unquote_path(line) for line in body.splitlines() if line.strip())
        yield HistoryAddition(
            commit_id=commit_id.strip(),
            timestamp=timestamp,
            subject=subject,
            paths=paths,
        )


def unquote_path(raw: str) -> str:
    """Return a path with git's C-style quoting removed.

    Returns:
    -------
    str
        Unquoted path; unquoted input is returned unchanged.
    """
    if len(raw) < 2 or not (raw.startswith('"') and raw.endswith('"')):
        return raw
    inner = raw[1:-1]
    decoded = inner.encode("utf-8").decode("unicode_escape")
    return decoded.encode("latin-1").decode("utf-8", errors="replace")


def _git_label(args: Sequence[str]) -> str:
    index = 0
    while index < len(args) and args[index] == "-c":
        index += 2
    return f"git {args[index]}" if index < len(args) else "git"


def _resolve_commit(repo: pygit2.Repository, ref: str) -> pygit2.Commit | None:
    try:
        obj = repo.revparse_single(ref)
        return obj.peel(pygit2.Commit)
    except (KeyError, ValueError, pygit2.GitError):
        return None


__all__ = [
    "HISTORY_LOG_ARGS",
    "CommitRecord",
    "GitPlumbing",
    "HistoryAddition",
    "RepositoryPlumbing",
    "parse_history_log",
    "unquote_path",
]
