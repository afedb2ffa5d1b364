"""Trailer rules and the commit-message cleaning function.

:func:`clean_message` is the single implementation used both when analyzing
commits in-process and inside the ``git filter-branch`` message filter.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from functools import lru_cache

from serde_msgspec import StructBaseStrict

_EXCESS_BLANK_LINES = re.compile(r"\n{3,}")
_TRAILING_BLANK_LINES = re.compile(r"\n\s*\n\s*\Z")


class TrailerRule(StructBaseStrict, frozen=True):
    """Named pattern for one kind of attribution line."""

    name: str
    pattern: str
    description: str


class CleanedMessage(StructBaseStrict, frozen=True):
    """Cleaned message text and the trailer text that was removed."""

    cleaned: str
    matched_trailers: tuple[str, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.matched_trailers)


DEFAULT_TRAILER_RULES: tuple[TrailerRule, ...] = (
    TrailerRule(
        name="claude-code-generated",
        pattern=r"🤖 Generated with \[Claude Code\]\([^)]+\)",
        description="Claude Code generation attribution",
    ),
    TrailerRule(
        name="claude-coauthor",
        pattern=r"Co-Authored-By: Claude <noreply@anthropic\.com>",
        description="Claude co-author trailer",
    ),
    TrailerRule(
        name="claude-emoji-attribution",
        pattern=r"🤖[^\n]*Claude[^\n]*",
        description="Claude emoji attribution lines",
    ),
    TrailerRule(
        name="claude-generated-generic",
        pattern=r"Generated with Claude[^\n]*",
        description="Generic Claude generation attribution",
    ),
)


@lru_cache(maxsize=64)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.MULTILINE)


def clean_message(
    raw: str,
    rules: Sequence[TrailerRule] = DEFAULT_TRAILER_RULES,
) -> CleanedMessage:
    """Remove trailer lines from a commit message.

    Each rule removes every match from the text left by the previous rules,
    so overlapping rules never count the same line twice. Runs of blank lines
    collapse to one, trailing blank lines are dropped, and a non-empty result
    ends with exactly one newline.

    Parameters
    ----------
    raw
        Original commit message.
    rules
        Trailer rules applied in order.

    Returns:
    -------
    CleanedMessage
        Cleaned text with the removed trailer strings.
    """
    cleaned = raw
    matched: list[str] = []
    for rule in rules:
        regex = _compile(rule.pattern)
        found = [match.group(0) for match in regex.finditer(cleaned)]
        if found:
            matched.extend(found)
            cleaned = regex.sub("", cleaned)
    cleaned = _EXCESS_BLANK_LINES.sub("\n\n", cleaned)
    cleaned = _TRAILING_BLANK_LINES.sub("\n", cleaned)
    cleaned = cleaned.strip()
    if cleaned:
        cleaned += "\n"
    return CleanedMessage(cleaned=cleaned, matched_trailers=tuple(matched))


__all__ = ["DEFAULT_TRAILER_RULES", "CleanedMessage", "TrailerRule", "clean_message"]
