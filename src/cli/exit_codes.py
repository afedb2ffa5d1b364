"""Exit code taxonomy for the claude-cleaner CLI."""

from __future__ import annotations

from enum import IntEnum

from errors import (
    CleanerError,
    ConfigurationError,
    ErrorKind,
    PatternSourceError,
    ToolNotFoundError,
)


class ExitCode(IntEnum):
    """Standard exit codes for CLI commands.

    Exit codes follow Unix conventions with domain-specific extensions:
    - 0: Success
    - 1-9: General errors (parse, validation, config, input)
    - 10-19: External tool errors
    - 20-29: Safety precondition errors
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    PARSE_ERROR = 2
    VALIDATION_ERROR = 3
    CONFIG_ERROR = 4
    INPUT_ERROR = 5

    # External tool errors (10-19)
    EXTERNAL_TOOL_ERROR = 10
    TOOL_NOT_FOUND = 11

    # Precondition errors (20-29)
    PRECONDITION_ERROR = 20

    @classmethod
    def from_exception(cls, exc: BaseException) -> ExitCode:
        """Map an exception to an appropriate exit code.

        Parameters
        ----------
        exc
            Exception to classify.

        Returns
        -------
        ExitCode
            Exit code appropriate for the exception type.
        """
        cyclopts_code = _exit_code_for_cyclopts(exc)
        if cyclopts_code is not None:
            return cyclopts_code

        cleaner_code = _exit_code_for_cleaner_error(exc)
        if cleaner_code is not None:
            return cleaner_code

        if isinstance(exc, (ValueError, TypeError)):
            return cls.VALIDATION_ERROR
        return cls.GENERAL_ERROR


def _exit_code_for_cyclopts(exc: BaseException) -> ExitCode | None:
    module = exc.__class__.__module__
    if not module.startswith("cyclopts"):
        return None
    if exc.__class__.__name__ == "ValidationError":
        return ExitCode.VALIDATION_ERROR
    return ExitCode.PARSE_ERROR


def _exit_code_for_cleaner_error(exc: BaseException) -> ExitCode | None:
    if not isinstance(exc, CleanerError):
        return None
    if isinstance(exc, ConfigurationError):
        return ExitCode.CONFIG_ERROR
    if isinstance(exc, ToolNotFoundError):
        return ExitCode.TOOL_NOT_FOUND
    if isinstance(exc, PatternSourceError):
        return ExitCode.INPUT_ERROR
    mapping = {
        ErrorKind.VALIDATION: ExitCode.VALIDATION_ERROR,
        ErrorKind.INPUT_IO: ExitCode.INPUT_ERROR,
        ErrorKind.EXTERNAL_TOOL: ExitCode.EXTERNAL_TOOL_ERROR,
        ErrorKind.PRECONDITION: ExitCode.PRECONDITION_ERROR,
    }
    return mapping.get(exc.kind, ExitCode.GENERAL_ERROR)


__all__ = ["ExitCode"]
