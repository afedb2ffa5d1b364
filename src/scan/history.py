"""Scan repository history for paths matching the selection rules."""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from pathspec.util import normalize_file

from core_types import PathKind, PathLike
from errors import EmptyHistoryError
from gitops.context import require_git_context
from gitops.plumbing import GitPlumbing, HistoryAddition, RepositoryPlumbing
from patterns.selection import TargetSelector
from scan.models import Candidate, ChangeInfo, summarize_subject
from scan.path_trie import PathTrie

LOGGER = logging.getLogger(__name__)


@dataclass
class HistoryIndex:
    """Unique historical paths with the change that first introduced each.

    Directory entries in ``first_change`` carry the earliest change of any
    path beneath them.
    """

    paths: set[str] = field(default_factory=set)
    first_change: dict[str, ChangeInfo] = field(default_factory=dict)

    def earliest(self, path: str) -> ChangeInfo | None:
        return self.first_change.get(path)


def build_history_index(additions: Iterable[HistoryAddition]) -> HistoryIndex:
    """Build the path set and first-change map in one pass.

    ``additions`` must be ordered oldest first; the first record seen for a
    path wins.

    Returns:
    -------
    HistoryIndex
        Index over every added path and its ancestors.
    """
    index = HistoryIndex()
    for addition in additions:
        change = ChangeInfo(
            id=addition.commit_id,
            timestamp=addition.timestamp,
            summary=summarize_subject(addition.subject),
        )
        for raw_path in addition.paths:
            path = normalize_file(raw_path)
            if not path:
                continue
            index.paths.add(path)
            index.first_change.setdefault(path, change)
            for ancestor in _ancestors(path):
                index.first_change.setdefault(ancestor, change)
    return index


class HistoryScanner:
    """Produce removal candidates from every path ever added to a repository."""

    def __init__(self, plumbing: GitPlumbing, selector: TargetSelector) -> None:
        self._plumbing = plumbing
        self._selector = selector

    @classmethod
    def for_repository(cls, path: PathLike, selector: TargetSelector) -> HistoryScanner:
        """Open the repository at ``path`` and return a scanner over it.

        Raises
        ------
        NotVersionedError
            Raised when ``path`` is not inside a repository.
        EmptyHistoryError
            Raised when the repository has no commits.
        """
        return cls(RepositoryPlumbing(require_git_context(path)), selector)

    def scan(self) -> list[Candidate]:
        """Return candidates in sorted path order, each path at most once.

        Returns:
        -------
        list[Candidate]
            Directory candidates precede the matched paths beneath them.

        Raises
        ------
        EmptyHistoryError
            Raised when the repository has no commits.
        """
        if self._plumbing.head_sha() is None:
            msg = f"Repository has no commits: {self._plumbing.repo_root}"
            raise EmptyHistoryError(msg)
        LOGGER.debug("Scanning history of %s", self._plumbing.repo_root)
        index = build_history_index(self._plumbing.history_additions())
        LOGGER.debug("Checking %d paths from history", len(index.paths))
        trie = PathTrie.from_paths(index.paths)
        candidates = list(self._select(index, trie))
        LOGGER.info("Found %d files/directories to remove from history", len(candidates))
        return candidates

    def _select(self, index: HistoryIndex, trie: PathTrie) -> Iterator[Candidate]:
        seen: set[str] = set()
        for path in sorted(index.paths):
            reason = self._selector.classify(path)
            if reason is None:
                continue
            for ancestor in _ancestors(path):
                if ancestor in seen:
                    continue
                ancestor_reason = self._selector.classify(ancestor)
                if ancestor_reason is None:
                    continue
                seen.add(ancestor)
                yield Candidate(
                    path=ancestor,
                    kind=PathKind.DIRECTORY,
                    reason=ancestor_reason,
                    earliest_change=index.earliest(ancestor),
                )
            if path in seen:
                continue
            seen.add(path)
            kind = PathKind.DIRECTORY if trie.has_children(path) else PathKind.FILE
            yield Candidate(
                path=path,
                kind=kind,
                reason=reason,
                earliest_change=index.earliest(path),
            )


def _ancestors(path: str) -> list[str]:
    """Return the ancestor directories of ``path``, shallowest first."""
    parent = posixpath.dirname(path)
    ancestors: list[str] = []
    while parent:
        ancestors.append(parent)
        parent = posixpath.dirname(parent)
    ancestors.reverse()
    return ancestors


__all__ = ["HistoryIndex", "HistoryScanner", "build_history_index"]
