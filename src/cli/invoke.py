"""Command dispatch with error-to-exit-code translation."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from cyclopts import App
from cyclopts.exceptions import CycloptsError

from cli.exit_codes import ExitCode
from cli.result import CliResult
from cli.result_action import cli_result_action
from errors import CleanerError

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CliInvokeEvent:
    """Outcome of one CLI invocation, logged at debug level."""

    ok: bool
    command: str | None
    exec_ms: float
    exit_code: int
    error_class: str | None = None
    error_code: str | None = None


def invoke(app: App, tokens: list[str] | None) -> tuple[int, CliInvokeEvent]:
    """Parse ``tokens``, run the selected command, and map errors to exit codes.

    Cleaner errors are reported as ``<code>: <message>`` on stderr; parse
    errors are printed by Cyclopts.

    Returns
    -------
    tuple[int, CliInvokeEvent]
        Exit code and the invocation event.
    """
    command_name = tokens[0] if tokens else None
    t0 = time.perf_counter()
    try:
        command, bound, _ignored = app.parse_args(
            tokens,
            exit_on_error=False,
            print_error=True,
        )
        result = command(*bound.args, **bound.kwargs)
        exit_code = cli_result_action(app, command, result)
        event = CliInvokeEvent(
            ok=exit_code == ExitCode.SUCCESS,
            command=command_name,
            exec_ms=_elapsed_ms(t0),
            exit_code=exit_code,
        )
    except CycloptsError as exc:
        exit_code = int(ExitCode.from_exception(exc))
        event = CliInvokeEvent(
            ok=False,
            command=command_name,
            exec_ms=_elapsed_ms(t0),
            exit_code=exit_code,
            error_class=f"cyclopts.{exc.__class__.__name__}",
        )
    except CleanerError as exc:
        _LOGGER.debug("Command failed", exc_info=exc)
        exit_code = cli_result_action(app, None, CliResult.from_exception(exc))
        event = CliInvokeEvent(
            ok=False,
            command=command_name,
            exec_ms=_elapsed_ms(t0),
            exit_code=exit_code,
            error_class=exc.__class__.__name__,
            error_code=str(exc.code),
        )
    except Exception as exc:
        _LOGGER.exception("Command execution failed.")
        exit_code = int(ExitCode.from_exception(exc))
        event = CliInvokeEvent(
            ok=False,
            command=command_name,
            exec_ms=_elapsed_ms(t0),
            exit_code=exit_code,
            error_class=f"{exc.__class__.__module__}.{exc.__class__.__name__}",
        )
    _LOGGER.debug("CLI invocation: %s", event)
    return exit_code, event


def _elapsed_ms(t0: float) -> float:
    return (time.perf_counter() - t0) * 1000.0


__all__ = ["CliInvokeEvent", "invoke"]
