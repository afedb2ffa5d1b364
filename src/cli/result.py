"""CLI result contract for structured command returns."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from cli.exit_codes import ExitCode

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True)
class CliResult:
    """Structured result from CLI command execution.

    Parameters
    ----------
    exit_code
        Integer exit code for the command.
    summary
        Optional human-readable summary of the result.
    backups
        Mapping of phase names to the backup refs created for them.
    counts
        Mapping of count names (candidates, affected commits) to values.
    """

    exit_code: int
    summary: str | None = None
    backups: Mapping[str, str] = field(default_factory=dict)
    counts: Mapping[str, int] = field(default_factory=dict)

    @classmethod
    def success(
        cls,
        *,
        summary: str | None = None,
        backups: Mapping[str, str] | None = None,
        counts: Mapping[str, int] | None = None,
    ) -> CliResult:
        """Create a successful result.

        Returns:
        -------
        CliResult
            Success result with exit code 0.
        """
        return cls(
            exit_code=ExitCode.SUCCESS,
            summary=summary,
            backups=backups or {},
            counts=counts or {},
        )

    @classmethod
    def error(
        cls,
        exit_code: ExitCode | int,
        *,
        summary: str | None = None,
    ) -> CliResult:
        """Create an error result.

        Returns:
        -------
        CliResult
            Error result with the specified exit code.
        """
        return cls(exit_code=int(exit_code), summary=summary)

    @classmethod
    def from_exception(
        cls,
        exc: BaseException,
        *,
        summary: str | None = None,
    ) -> CliResult:
        """Create an error result from an exception.

        Error codes carried by cleaner errors prefix the summary.

        Returns:
        -------
        CliResult
            Error result with exit code derived from exception type.
        """
        code = getattr(exc, "code", None)
        message = summary or str(exc)
        if code is not None:
            message = f"{code}: {message}"
        return cls.error(ExitCode.from_exception(exc), summary=message)

    @property
    def ok(self) -> bool:
        """Check if the result indicates success.

        Returns:
        -------
        bool
            True if exit_code is 0.
        """
        return self.exit_code == ExitCode.SUCCESS


__all__ = ["CliResult"]
