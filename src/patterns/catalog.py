"""Built-in rule tables.

The tables are grouped into a :class:`RuleCatalog` so selection code receives
them as an explicit configuration object rather than reading module globals.
"""

from __future__ import annotations

from patterns.rules import PatternRule, glob_rule, regex_rule
from serde_msgspec import StructBaseStrict

_CONFIG_FILE = "Claude configuration file (extended pattern)"
_PROCESS_FILE = "Claude process/lock file"
_DEBUG_FILE = "Claude debug/diagnostic file"
_EXPORT_FILE = "Claude export/archive file"
_DOC_FILE = "Claude documentation file"
_SCRIPT_FILE = "Claude script/utility file"
_VERSIONED_FILE = "Claude numbered/versioned file"
_OS_FILE = "Claude OS-specific file"
_IDE_FILE = "IDE Claude integration file"
_EXTENDED_DIRECTORY = "Claude directory (extended pattern)"

DEFAULT_IDENTITY_RULES: tuple[PatternRule, ...] = (
    regex_rule(r"(?:^|/)CLAUDE\.md\Z", "Claude project configuration file"),
    regex_rule(r"(?:^|/)\.claude(?:/|\Z)", "Claude configuration directory"),
    regex_rule(r"(?:^|/)claudedocs(?:/|\Z)", "Claude documentation directory (MCP server)"),
    regex_rule(r"(?:^|/)\.serena(?:/|\Z)", "Serena MCP server directory"),
    regex_rule(
        r"(?:^|/)\.vscode/claude\.json(?:/|\Z)",
        "VSCode Claude extension configuration",
    ),
)

DEFAULT_TEMPORARY_RULES: tuple[PatternRule, ...] = (
    regex_rule(r"(?:^|/)claude-[^/]*temp[^/]*\Z", "Claude temporary file"),
    regex_rule(r"(?:^|/)\.?claude[^/]*\.(?:tmp|temp|log)\Z", "Claude temporary/log file"),
)

EXTENDED_RULES: tuple[PatternRule, ...] = (
    regex_rule(r"^\.?claude[-_.].*\.(json|yaml|yml|toml|ini|config)$", _CONFIG_FILE),
    regex_rule(r"^\.?claude\.(json|yaml|yml|toml|ini|config)$", _CONFIG_FILE),
    regex_rule(
        r"^claude[-_]?(config|settings|workspace|env).*$",
        "Claude workspace/settings file",
    ),
    regex_rule(r"^\.?claude[-_.]?(session|state|cache|history).*$", "Claude session/state file"),
    glob_rule("?(.)claude?(-|_|.)*.@(bak|backup|old|orig|save)", "Claude backup file"),
    regex_rule(
        r"^\.?claude[-_.]?(temp|tmp|work|scratch|draft).*$",
        "Claude temporary/working file",
    ),
    regex_rule(
        r"^\.?claude[-_.]?(output|result|analysis|report).*$",
        "Claude output/analysis file",
    ),
    glob_rule("?(.)claude*.@(lock|pid|socket)", _PROCESS_FILE),
    glob_rule("?(.)claude?(-|_)@(lock|process|run)*", _PROCESS_FILE),
    glob_rule("?(.)claude?(-|_)@(debug|trace|profile|diagnostic)*", _DEBUG_FILE),
    glob_rule("?(.)claude*.@(debug|trace|profile|diagnostic)", _DEBUG_FILE),
    glob_rule("?(.)claude?(-|_)@(export|archive|dump|snapshot)*", _EXPORT_FILE),
    glob_rule("?(.)claude?(-|_|.)*.@(export|archive|dump|snapshot)", _EXPORT_FILE),
    glob_rule(
        "?(.)claude?(-|_)@(workspace|project|session|sessions|temp|cache|data)",
        "Claude workspace directory",
    ),
    regex_rule(r"^claude[-_.]?(notes?|docs?|readme|instructions?).*\.(md|txt|rst)$", _DOC_FILE),
    regex_rule(r"^\.claude[-_.].*\.(notes?|readme|md|txt|rst)$", _DOC_FILE),
    regex_rule(r"^\.claude\.(notes?|readme|md|txt|rst)$", _DOC_FILE),
    glob_rule("?(.)claude?(-|_)@(script|tool|utility|helper)*", _SCRIPT_FILE),
    glob_rule("?(.)claude?(-|_|.)*.@(sh|bat|ps1|py|js|ts)", _SCRIPT_FILE),
    regex_rule(r"^\.claude[a-z0-9_-]+$", "Claude hidden/dot file"),
    regex_rule(r"^\.?claude[-_]?.*[0-9]+.*$", _VERSIONED_FILE),
    regex_rule(r"^\.?claude.*v[0-9]+.*$", _VERSIONED_FILE),
    glob_rule(".claude*.DS_Store", _OS_FILE),
    glob_rule("claude*.DS_Store", _OS_FILE),
    glob_rule(".claude*.Thumbs.db", _OS_FILE),
    glob_rule("claude*.Thumbs.db", _OS_FILE),
    glob_rule("**/.vscode/*claude*", _IDE_FILE),
    glob_rule("**/.idea/*claude*", _IDE_FILE),
    glob_rule("**/.eclipse/*claude*", _IDE_FILE),
    glob_rule("**/.claude-*/**", _EXTENDED_DIRECTORY),
    glob_rule("**/.claude_*/**", _EXTENDED_DIRECTORY),
    glob_rule("**/claude-*/**", _EXTENDED_DIRECTORY),
    glob_rule("**/claude_*/**", _EXTENDED_DIRECTORY),
)


class RuleCatalog(StructBaseStrict, frozen=True):
    """Rule tables consumed by target selection."""

    identity: tuple[PatternRule, ...] = DEFAULT_IDENTITY_RULES
    temporary: tuple[PatternRule, ...] = DEFAULT_TEMPORARY_RULES
    extended: tuple[PatternRule, ...] = EXTENDED_RULES

    @property
    def defaults(self) -> tuple[PatternRule, ...]:
        return (*self.identity, *self.temporary)


DEFAULT_CATALOG = RuleCatalog()

__all__ = [
    "DEFAULT_CATALOG",
    "DEFAULT_IDENTITY_RULES",
    "DEFAULT_TEMPORARY_RULES",
    "EXTENDED_RULES",
    "RuleCatalog",
]
