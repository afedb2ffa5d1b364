"""Result action handler for Cyclopts integration."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.console import Console

from cli.exit_codes import ExitCode
from cli.result import CliResult

if TYPE_CHECKING:
    from cyclopts import App


def cli_result_action(
    app: App,
    cmd: object,
    result: Any,
) -> int:
    """Handle command results and convert to exit codes.

    This function is registered as the ``result_action`` for the CLI app.
    Summaries go to stdout for successes and to stderr for failures.

    Parameters
    ----------
    app
        The Cyclopts application instance.
    cmd
        The resolved command that was executed.
    result
        The return value from the command function.

    Returns
    -------
    int
        Exit code for the process.
    """
    _ = app
    _ = cmd
    if result is None:
        return ExitCode.SUCCESS

    if isinstance(result, int):
        return result

    if isinstance(result, CliResult):
        console = Console(stderr=not result.ok)
        if result.summary:
            style = None if result.ok else "bold red"
            console.print(result.summary, style=style, highlight=False)
        for phase, ref in sorted(result.backups.items()):
            console.print(f"Backup ({phase}): {ref}", highlight=False)
        return int(result.exit_code)

    Console(stderr=True).print(
        f"Unexpected command return type: {type(result).__name__} (value: {result!r})"
    )
    return ExitCode.GENERAL_ERROR


__all__ = ["cli_result_action"]
