"""Git repository context helpers backed by pygit2."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pygit2

from core_types import PathLike, ensure_path
from errors import EmptyHistoryError, NotVersionedError
from gitops.settings import apply_git_settings_once


@dataclass(frozen=True)
class GitContext:
    """Resolved Git repository context."""

    repo: pygit2.Repository
    repo_root: Path
    head_sha: str | None
    branch: str | None


def open_git_context(path: PathLike) -> GitContext | None:
    """Return a GitContext if the path belongs to a git repository.

    Returns:
    -------
    GitContext | None
        Git context when discovery succeeds.
    """
    apply_git_settings_once()
    repo_path = _discover_repo_path(path)
    if repo_path is None:
        return None
    repo = pygit2.Repository(str(repo_path))
    repo_root = Path(repo.workdir) if repo.workdir else Path(repo.path)
    return GitContext(
        repo=repo,
        repo_root=repo_root,
        head_sha=_head_sha(repo),
        branch=_branch_name(repo),
    )


def require_git_context(path: PathLike) -> GitContext:
    """Return the repository context for a path with at least one commit.

    Returns:
    -------
    GitContext
        Git context with a resolved head.

    Raises
    ------
    NotVersionedError
        Raised when the path does not belong to a repository.
    EmptyHistoryError
        Raised when the repository has no commits.
    """
    resolved = ensure_path(path)
    if not resolved.exists():
        msg = f"Repository path does not exist: {resolved}"
        raise NotVersionedError(msg)
    ctx = open_git_context(resolved)
    if ctx is None:
        msg = f"Not a git repository: {resolved}"
        raise NotVersionedError(msg)
    if ctx.head_sha is None:
        msg = f"Repository has no commits: {ctx.repo_root}"
        raise EmptyHistoryError(msg)
    return ctx


def _discover_repo_path(path: PathLike) -> Path | None:
    try:
        repo_path = pygit2.discover_repository(str(ensure_path(path)))
    except (KeyError, ValueError, pygit2.GitError):
        return None
    if repo_path is None:
        return None
    return Path(repo_path)


def _head_sha(repo: pygit2.Repository) -> str | None:
    if repo.head_is_unborn:
        return None
    try:
        head = repo.head.peel(pygit2.Commit)
    except (KeyError, ValueError, pygit2.GitError):
        return None
    return str(head.id)


def _branch_name(repo: pygit2.Repository) -> str | None:
    if repo.head_is_unborn or repo.head_is_detached:
        return None
    return repo.head.shorthand


__all__ = ["GitContext", "open_git_context", "require_git_context"]
