"""Commit-message trailer detection and rewriting."""

from __future__ import annotations

from commits.analyzer import AnalysisResult, CommitAnalyzer, CommitPreview
from commits.rewriter import CommitRewriter, RewritePlan
from commits.trailers import DEFAULT_TRAILER_RULES, CleanedMessage, TrailerRule, clean_message

__all__ = [
    "DEFAULT_TRAILER_RULES",
    "AnalysisResult",
    "CleanedMessage",
    "CommitAnalyzer",
    "CommitPreview",
    "CommitRewriter",
    "RewritePlan",
    "TrailerRule",
    "clean_message",
]
