"""Main application setup for the claude-cleaner CLI."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Annotated, Literal

from cyclopts import App, Parameter
from cyclopts.config import Toml

from cli.commands.version import get_version
from cli.config_provider import build_cyclopts_config, resolve_config
from cli.groups import session_group
from cli.invoke import invoke
from cli.result import CliResult
from cli.result_action import cli_result_action
from errors import ConfigurationError

_HELP_EPILOGUE = """
Examples:
  claude-cleaner clean                        Preview what would be removed (dry run)
  claude-cleaner clean ./repo --execute       Remove files and clean commit messages
  claude-cleaner clean --files-only -x        Only remove files from history
  claude-cleaner clean --commits-only         Preview commit message cleaning
  claude-cleaner clean --include-dirs .serena Also remove every .serena directory
  claude-cleaner check-deps                   Check git, java and BFG

Environment Variables:
  CLAUDE_CLEANER_LOG_LEVEL   Default log level (DEBUG, INFO, WARNING, ERROR)
  CLAUDE_CLEANER_BFG_JAR     Path to the BFG Repo-Cleaner jar
  CLAUDE_CLEANER_JAVA        Java executable used to run BFG

Every execute-mode phase first creates a refs/backup/pre-clean-* ref.
"""

app = App(
    name="claude-cleaner",
    help="Remove Claude artifacts from Git history (dry run unless --execute is given).",
    help_format="rich",
    help_epilogue=_HELP_EPILOGUE,
    version=get_version(),
    version_flags=["--version", "-V"],
    default_parameter=Parameter(
        show_default=True,
        show_env_var=True,
    ),
    result_action=cli_result_action,
    config=[
        Toml("claude-cleaner.toml", must_exist=False, search_parents=True),
        Toml(
            "pyproject.toml",
            root_keys=("tool", "claude-cleaner"),
            must_exist=False,
            search_parents=True,
        ),
    ],
    exit_on_error=True,
    print_error=True,
    help_on_error=False,
)

app.meta.group_parameters = session_group


@dataclass(frozen=True)
class SessionOptions:
    """Session-level configuration parameters."""

    config_file: Annotated[
        str | None,
        Parameter(
            name="--config",
            help="Path to configuration file (overrides default search).",
            group=session_group,
        ),
    ] = None
    log_level: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR"],
        Parameter(
            name="--log-level",
            help="Logging verbosity level.",
            env_var="CLAUDE_CLEANER_LOG_LEVEL",
            group=session_group,
        ),
    ] = "INFO"


_DEFAULT_SESSION_OPTIONS = SessionOptions()


@app.meta.default
def meta_launcher(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    session: Annotated[SessionOptions, Parameter(name="*")] = _DEFAULT_SESSION_OPTIONS,
) -> int:
    """Meta launcher for logging setup and config selection.

    Returns
    -------
    int
        Exit status code from command execution.
    """
    logging.basicConfig(level=session.log_level.upper(), format="%(levelname)s %(message)s")
    try:
        resolution = resolve_config(session.config_file)
    except ConfigurationError as exc:
        return cli_result_action(app, None, CliResult.from_exception(exc))
    app.config = build_cyclopts_config(resolution)
    exit_code, _event = invoke(app, list(tokens))
    return exit_code


# Lazy-loaded commands
app.command("cli.commands.clean:clean_command", name="clean")
app.command("cli.commands.check_deps:check_deps_command", name="check-deps")
app.command("cli.commands.version:version_command", name="version")


def main() -> None:
    """Run the claude-cleaner CLI."""
    app.meta()


__all__ = ["SessionOptions", "app", "main"]
