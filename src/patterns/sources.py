"""Load custom directory names from the command line and pattern files."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from core_types import PathLike, ensure_path
from errors import PatternSourceError
from patterns.validation import validate_custom_dirs

LOGGER = logging.getLogger(__name__)


def read_pattern_file(path: PathLike) -> list[str]:
    """Return directory names listed in a pattern file.

    One name per line; blank lines and lines starting with ``#`` are skipped.

    Raises
    ------
    PatternSourceError
        Raised when the file cannot be read.
    """
    resolved = ensure_path(path)
    try:
        content = resolved.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Failed to read directory patterns file {str(resolved)!r}: {exc}"
        raise PatternSourceError(msg, cause=exc) from exc
    names = [
        stripped
        for stripped in (line.strip() for line in content.splitlines())
        if stripped and not stripped.startswith("#")
    ]
    LOGGER.debug("Loaded %d directory patterns from %s", len(names), resolved)
    return names


def load_custom_dirs(
    names: Iterable[str] = (),
    *,
    pattern_file: PathLike | None = None,
) -> tuple[str, ...]:
    """Merge and validate custom directory names.

    Parameters
    ----------
    names
        Names given directly on the command line.
    pattern_file
        Optional file with one name per line.

    Returns:
    -------
    tuple[str, ...]
        Validated names, command-line names first, duplicates dropped.
    """
    merged = list(names)
    if pattern_file is not None:
        merged.extend(read_pattern_file(pattern_file))
    return validate_custom_dirs(merged)


__all__ = ["load_custom_dirs", "read_pattern_file"]
