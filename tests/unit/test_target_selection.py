"""Tests for rule matching and target selection."""

from __future__ import annotations

import pytest

from errors import ConfigurationError
from patterns import DEFAULT_CATALOG, PatternMatcher, SelectionConfig, TargetSelector
from patterns.rules import glob_rule, regex_rule
from patterns.selection import CUSTOM_REASON, EXTENDED_FALLBACK_REASON, SelectionMode

_DEFAULT = TargetSelector(SelectionConfig())
_EXTENDED = TargetSelector(SelectionConfig(extended=True))


def test_matcher_first_rule_wins() -> None:
    """Ensure the earliest matching rule supplies the reason."""
    matcher = PatternMatcher(
        [
            regex_rule(r"claude", "first"),
            glob_rule("claude.md", "second"),
        ]
    )
    assert len(matcher) == 2
    assert matcher.reason("claude.md") == "first"
    assert matcher.reason("README.md") is None


def test_matcher_never_matches_empty_path() -> None:
    """Ensure the empty string is never a match."""
    assert not PatternMatcher(DEFAULT_CATALOG.defaults).matches("")


@pytest.mark.parametrize(
    ("path", "reason"),
    [
        ("CLAUDE.md", "Claude project configuration file"),
        ("docs/CLAUDE.md", "Claude project configuration file"),
        (".claude", "Claude configuration directory"),
        (".claude/settings.json", "Claude configuration directory"),
        ("claudedocs/notes.md", "Claude documentation directory (MCP server)"),
        (".serena/cache/index", "Serena MCP server directory"),
        (".vscode/claude.json", "VSCode Claude extension configuration"),
        ("claude-temp.log", "Claude temporary file"),
        (".claude_session.tmp", "Claude temporary/log file"),
    ],
)
def test_default_mode_reasons(path: str, reason: str) -> None:
    """Ensure built-in rules report their fixed reasons."""
    assert _DEFAULT.classify(path) == reason
    assert _DEFAULT.reason(path) == reason


@pytest.mark.parametrize(
    "path",
    ["README.md", "src/claude.py", "myCLAUDE.md", "CLAUDE.md.bak", "notes/claude.txt", ""],
)
def test_default_mode_ignores_unrelated_paths(path: str) -> None:
    """Ensure ordinary files are not targets in default mode."""
    assert _DEFAULT.classify(path) is None
    assert not _DEFAULT.is_target(path)


def test_reason_requires_target() -> None:
    """Ensure asking for the reason of a non-target fails loudly."""
    with pytest.raises(ValueError, match="not a cleaning target"):
        _DEFAULT.reason("README.md")


def test_custom_dirs_match_whole_segments() -> None:
    """Ensure custom names match any path segment exactly."""
    selector = TargetSelector(SelectionConfig(custom_dirs=("build-cache",)))
    assert selector.classify("build-cache") == CUSTOM_REASON
    assert selector.classify("a/build-cache/x.bin") == CUSTOM_REASON
    assert selector.classify("a/build-cache2/x.bin") is None
    assert selector.classify("CLAUDE.md") == "Claude project configuration file"


def test_custom_only_mode_skips_defaults() -> None:
    """Ensure --no-defaults leaves only custom names active."""
    selector = TargetSelector(
        SelectionConfig(custom_dirs=(".serena",), use_defaults=False),
    )
    assert selector.mode == SelectionMode.CUSTOM_ONLY
    assert selector.classify("CLAUDE.md") is None
    assert selector.classify(".serena/memories") == CUSTOM_REASON


def test_extended_with_no_defaults_is_rejected() -> None:
    """Ensure the conflicting selection flags raise a configuration error."""
    with pytest.raises(ConfigurationError):
        TargetSelector(SelectionConfig(use_defaults=False, extended=True))


@pytest.mark.parametrize(
    "path",
    [
        "claude.config.json",
        "claude-settings.yaml",
        "claude_workspace.toml",
        ".claude.ini",
        "claude-env.config",
        "claude-session-123.dat",
        ".claude_state.json",
        "claude.cache",
        "claude_session_active.state",
        "claude-output.bak",
        ".claude.backup",
        "claude.lock",
        ".claude.pid",
        "claude-debug.trace",
        "claude.diagnostic",
        ".vscode/claude-settings.json",
        ".idea/claude-config.xml",
        ".eclipse/claude.prefs",
        "claude_project",
        "nested/.claude_cache",
        "claude-notes.md",
        "claude-script.sh",
        "claude-v2.config",
        ".claude007.cache",
    ],
)
def test_extended_mode_matches(path: str) -> None:
    """Ensure the extended catalog finds rarely used artifacts."""
    assert _EXTENDED.classify(path) is not None


@pytest.mark.parametrize(
    "path",
    [
        "claude.txt",
        "include-claude.md",
        "claudelike.config",
        "my-claude-file.txt",
        "normal-file.txt",
        "README.md",
        "config.json",
    ],
)
def test_extended_mode_skips_look_alikes(path: str) -> None:
    """Ensure look-alike project files that no rule matches stay unselected."""
    assert _EXTENDED.classify(path) is None


@pytest.mark.parametrize(
    ("path", "reason"),
    [
        (".vscode/claude.txt", "IDE Claude integration file"),
        (".vscode/myclaude.txt", "IDE Claude integration file"),
        (".idea/claude.txt", "IDE Claude integration file"),
        ("claude-work/notes-claude.txt", "Claude temporary/working file"),
    ],
)
def test_extended_mode_selects_text_files_under_claude_paths(path: str, reason: str) -> None:
    """Ensure .txt basenames mentioning claude are still selected by path rules."""
    assert _EXTENDED.classify(path) == reason


def test_extended_mode_prefers_identity_reasons() -> None:
    """Ensure identity rules keep their reason in extended mode."""
    assert _EXTENDED.classify("CLAUDE.md") == "Claude project configuration file"
    assert _EXTENDED.classify(".claude/settings.json") == "Claude configuration directory"


def test_extended_mode_reports_specific_reasons() -> None:
    """Ensure extended matches report the table's reason."""
    assert _EXTENDED.classify("claude.lock") == "Claude process/lock file"
    assert _EXTENDED.classify(".idea/claude.iml") == "IDE Claude integration file"


def test_extended_mode_falls_back_to_default_rules() -> None:
    """Ensure default-only matches get the comprehensive fallback reason."""
    assert _EXTENDED.classify("src/claudefoo.log") == EXTENDED_FALLBACK_REASON


_LONG_PREFIX = "a/" * 600


@pytest.mark.parametrize(
    "prefix",
    [
        "ünïcødé/",
        "日本/",
        "dir with space/",
        "tab\tdir/",
        'we"ird/',
        "back\\slash/",
        _LONG_PREFIX,
    ],
)
def test_unusual_paths_classify_like_short_paths(prefix: str) -> None:
    """Ensure unicode, whitespace, quoted and very long paths behave like plain ones."""
    assert _DEFAULT.classify(f"{prefix}CLAUDE.md") == _DEFAULT.classify("CLAUDE.md")
    assert _DEFAULT.classify(f"{prefix}.claude/x") == "Claude configuration directory"
    assert _DEFAULT.classify(f"{prefix}README.md") is None
    assert _EXTENDED.classify(f"{prefix}claude.lock") == "Claude process/lock file"
    assert _EXTENDED.classify(f"{prefix}.vscode/claude notes.txt") == "IDE Claude integration file"
    assert _EXTENDED.classify(f"{prefix}notes.txt") is None


def test_long_path_exceeds_one_thousand_characters() -> None:
    """Ensure the long-path case really is longer than 1000 characters."""
    path = f"{_LONG_PREFIX}CLAUDE.md"
    assert len(path) > 1000
    assert _DEFAULT.reason(path) == "Claude project configuration file"
