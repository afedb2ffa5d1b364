"""Typed configuration models for claude-cleaner."""

from __future__ import annotations

from core_types import PositiveInt
from serde_msgspec import StructBaseStrict


class CleanConfig(StructBaseStrict, frozen=True, rename="kebab"):
    """Defaults for the ``clean`` command.

    Execute mode is deliberately absent: it is only ever enabled on the
    command line.
    """

    files_only: bool | None = None
    commits_only: bool | None = None
    branch: str | None = None
    include_dirs: tuple[str, ...] | None = None
    include_dirs_file: str | None = None
    defaults: bool | None = None
    include_all_common_patterns: bool | None = None
    bfg_jar: str | None = None
    java: str | None = None
    preview_limit: PositiveInt | None = None


class RootConfig(StructBaseStrict, frozen=True, rename="kebab"):
    """Root configuration payload for claude-cleaner."""

    clean: CleanConfig | None = None


__all__ = ["CleanConfig", "RootConfig"]
