"""Pattern rules, compilation, and target selection.

This subpackage provides:
- Tagged glob/regex rules compiled into one case-insensitive matcher
- Glob validation ahead of wcmatch extended-glob compilation
- Built-in rule catalogs (default and extended)
- Target selection with first-match-wins reasons
"""

from __future__ import annotations

from patterns.catalog import DEFAULT_CATALOG, RuleCatalog
from patterns.matcher import PatternMatcher
from patterns.rules import (
    GLOB_FLAGS,
    CompiledRule,
    PatternRule,
    compile_rule,
    glob_rule,
    regex_rule,
)
from patterns.selection import SelectionConfig, SelectionMode, TargetSelector
from patterns.sources import load_custom_dirs
from patterns.validation import validate_custom_dirs, validate_glob_pattern

__all__ = [
    "DEFAULT_CATALOG",
    "GLOB_FLAGS",
    "CompiledRule",
    "PatternMatcher",
    "PatternRule",
    "RuleCatalog",
    "SelectionConfig",
    "SelectionMode",
    "TargetSelector",
    "compile_rule",
    "glob_rule",
    "load_custom_dirs",
    "regex_rule",
    "validate_custom_dirs",
    "validate_glob_pattern",
]
