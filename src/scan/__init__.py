"""History scanning: collect every path ever added and select targets."""

from __future__ import annotations

from scan.history import HistoryIndex, HistoryScanner, build_history_index
from scan.models import Candidate, ChangeInfo, summarize_subject
from scan.path_trie import PathTrie

__all__ = [
    "Candidate",
    "ChangeInfo",
    "HistoryIndex",
    "HistoryScanner",
    "PathTrie",
    "build_history_index",
    "summarize_subject",
]
