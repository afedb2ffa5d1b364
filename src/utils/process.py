"""Synchronous external-process helpers."""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from errors import ExternalToolError, ToolNotFoundError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolResult:
    """Captured output of one finished process."""

    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str


type ToolRunner = Callable[..., ToolResult]


def format_command(args: Sequence[str]) -> str:
    """Return a shell-quoted rendering of ``args`` for logs."""
    return shlex.join(args)


def run_tool(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    error_type: type[ExternalToolError] = ExternalToolError,
    description: str | None = None,
) -> ToolResult:
    """Run a command to completion and raise on failure.

    Parameters
    ----------
    args
        Command and arguments.
    cwd
        Working directory for the process.
    env
        Full environment for the process; inherits the current one when ``None``.
    error_type
        Exception raised on a non-zero exit.
    description
        Short label used in error messages.

    Returns:
    -------
    ToolResult
        Decoded stdout and stderr.

    Raises
    ------
    ToolNotFoundError
        Raised when the executable does not exist.
    ExternalToolError
        Raised (as ``error_type``) when the process cannot start or exits non-zero.
    """
    argv = tuple(args)
    label = description or format_command(argv)
    LOGGER.debug("Running: %s", format_command(argv))
    try:
        result = subprocess.run(
            argv,
            cwd=cwd,
            env=dict(env) if env is not None else None,
            check=False,
            capture_output=True,
        )
    except FileNotFoundError as exc:
        msg = f"{argv[0]} executable not found"
        raise ToolNotFoundError(msg, cause=exc) from exc
    except OSError as exc:
        msg = f"{label} could not be started: {exc}"
        raise error_type(msg, cause=exc) from exc
    stdout = result.stdout.decode("utf-8", errors="replace")
    stderr = result.stderr.decode("utf-8", errors="replace")
    if result.returncode != 0:
        LOGGER.debug("%s returned %s: %s", label, result.returncode, stderr.strip())
        msg = f"{label} failed with exit code {result.returncode}: {stderr.strip()}"
        raise error_type(msg, stderr=stderr)
    return ToolResult(args=argv, returncode=result.returncode, stdout=stdout, stderr=stderr)


__all__ = ["ToolResult", "ToolRunner", "format_command", "run_tool"]
