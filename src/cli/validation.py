"""Validation helpers for CLI options and configuration payloads."""

from __future__ import annotations

from cli.config_models import CleanConfig
from errors import ConfigurationError


def validate_phase_flags(*, files_only: bool, commits_only: bool) -> None:
    """Reject selecting both single-phase modes at once.

    Raises
    ------
    ConfigurationError
        If both ``files_only`` and ``commits_only`` are set.
    """
    if files_only and commits_only:
        msg = "--files-only and --commits-only cannot be used together."
        raise ConfigurationError(msg)


def validate_selection_flags(*, use_defaults: bool, extended: bool) -> None:
    """Reject extended matching without the default rules.

    Raises
    ------
    ConfigurationError
        If extended matching is requested with defaults disabled.
    """
    if extended and not use_defaults:
        msg = "--include-all-common-patterns cannot be combined with --no-defaults."
        raise ConfigurationError(msg)


def validate_clean_config(config: CleanConfig | None, *, location: str) -> None:
    """Apply the mutual-exclusion rules to a loaded ``[clean]`` table.

    Raises
    ------
    ConfigurationError
        If the table combines mutually exclusive settings.
    """
    if config is None:
        return
    try:
        validate_phase_flags(
            files_only=bool(config.files_only),
            commits_only=bool(config.commits_only),
        )
        validate_selection_flags(
            use_defaults=config.defaults is not False,
            extended=bool(config.include_all_common_patterns),
        )
    except ConfigurationError as exc:
        msg = f"Config error in {location}: {exc}"
        raise ConfigurationError(msg, cause=exc) from exc


__all__ = ["validate_clean_config", "validate_phase_flags", "validate_selection_flags"]
