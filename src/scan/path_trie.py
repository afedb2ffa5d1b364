"""Prefix tree over slash-separated repository paths."""

from __future__ import annotations

from collections.abc import Iterable


class PathTrie:
    """Segment trie answering whether a path has descendants."""

    def __init__(self) -> None:
        self._root: dict[str, dict] = {}

    @classmethod
    def from_paths(cls, paths: Iterable[str]) -> PathTrie:
        trie = cls()
        for path in paths:
            trie.insert(path)
        return trie

    def insert(self, path: str) -> None:
        node = self._root
        for segment in _segments(path):
            child = node.get(segment)
            if child is None:
                child = node[segment] = {}
            node = child

    def _find(self, path: str) -> dict[str, dict] | None:
        node = self._root
        for segment in _segments(path):
            child = node.get(segment)
            if child is None:
                return None
            node = child
        return node

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self._find(path) is not None

    def has_children(self, path: str) -> bool:
        """Return whether any recorded path lies beneath ``path``."""
        node = self._find(path)
        return bool(node)


def _segments(path: str) -> list[str]:
    return [segment for segment in path.split("/") if segment]


__all__ = ["PathTrie"]
