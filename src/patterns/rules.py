"""Tagged pattern rules and their compiled form."""

from __future__ import annotations

import re
from dataclasses import dataclass

from wcmatch import glob

from core_types import RuleKind
from errors import PatternValidationError
from patterns.validation import validate_glob_pattern
from serde_msgspec import StructBaseStrict

# Bash extglob semantics with globstar, brace expansion and dotfiles, ignoring case.
GLOB_FLAGS = glob.GLOBSTAR | glob.EXTGLOB | glob.BRACE | glob.IGNORECASE | glob.DOTGLOB


class PatternRule(StructBaseStrict, frozen=True):
    """Glob or regex rule with the human-readable reason reported on a match."""

    kind: RuleKind
    source: str
    reason: str


def glob_rule(source: str, reason: str) -> PatternRule:
    """Return a glob rule.

    Returns:
    -------
    PatternRule
        Rule tagged as a glob.
    """
    return PatternRule(kind=RuleKind.GLOB, source=source, reason=reason)


def regex_rule(source: str, reason: str) -> PatternRule:
    """Return a regex rule.

    Returns:
    -------
    PatternRule
        Rule tagged as a regular expression.
    """
    return PatternRule(kind=RuleKind.REGEX, source=source, reason=reason)


@dataclass(frozen=True)
class CompiledRule:
    """Pattern rule paired with its case-insensitive expressions.

    A glob with braces expands to several anchored expressions; the rule
    matches when any of them does and no exclusion does.
    """

    rule: PatternRule
    include: tuple[re.Pattern[str], ...]
    exclude: tuple[re.Pattern[str], ...] = ()

    @property
    def reason(self) -> str:
        return self.rule.reason

    def test(self, path: str) -> bool:
        """Return whether the rule matches ``path``."""
        if self.rule.kind == RuleKind.GLOB:
            path = path.rstrip("/")
        if not any(regex.search(path) is not None for regex in self.include):
            return False
        return not any(regex.search(path) is not None for regex in self.exclude)


def _compile_all(rule: PatternRule, sources: list[str]) -> tuple[re.Pattern[str], ...]:
    try:
        return tuple(re.compile(source, re.IGNORECASE) for source in sources)
    except re.error as exc:
        msg = f"Invalid {rule.kind} pattern {rule.source!r}: {exc}"
        raise PatternValidationError(msg, cause=exc) from exc


def compile_rule(rule: PatternRule) -> CompiledRule:
    """Compile a rule into a case-insensitive matcher.

    Glob rules are validated and then translated by ``wcmatch`` into anchored
    expressions; regex rules are used verbatim and searched anywhere unless
    they anchor themselves.

    Returns:
    -------
    CompiledRule
        Compiled rule.

    Raises
    ------
    PatternValidationError
        Raised when the rule cannot be compiled.
    """
    if rule.kind != RuleKind.GLOB:
        return CompiledRule(rule=rule, include=_compile_all(rule, [rule.source]))
    validate_glob_pattern(rule.source)
    include, exclude = glob.translate(rule.source, flags=GLOB_FLAGS)
    return CompiledRule(
        rule=rule,
        include=_compile_all(rule, include),
        exclude=_compile_all(rule, exclude),
    )


__all__ = [
    "GLOB_FLAGS",
    "CompiledRule",
    "PatternRule",
    "compile_rule",
    "glob_rule",
    "regex_rule",
]
