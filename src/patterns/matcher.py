"""Ordered, first-match-wins matcher over compiled pattern rules."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from patterns.rules import CompiledRule, PatternRule, compile_rule


class PatternMatcher:
    """Match paths against an ordered rule list.

    Every rule is compiled once at construction. ``reason`` reports the rule
    that appears first in construction order, not the most specific one.
    """

    def __init__(self, rules: Iterable[PatternRule]) -> None:
        self._compiled: tuple[CompiledRule, ...] = tuple(compile_rule(rule) for rule in rules)

    @property
    def rules(self) -> Sequence[PatternRule]:
        return tuple(compiled.rule for compiled in self._compiled)

    def __len__(self) -> int:
        return len(self._compiled)

    def first_match(self, path: str) -> PatternRule | None:
        """Return the first rule that matches ``path``.

        Returns:
        -------
        PatternRule | None
            Matching rule, or ``None`` when nothing matches.
        """
        if not path:
            return None
        for compiled in self._compiled:
            if compiled.test(path):
                return compiled.rule
        return None

    def matches(self, path: str) -> bool:
        return self.first_match(path) is not None

    def reason(self, path: str) -> str | None:
        rule = self.first_match(path)
        return rule.reason if rule is not None else None


__all__ = ["PatternMatcher"]
