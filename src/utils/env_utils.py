"""Environment variable resolution for cleaner settings."""

from __future__ import annotations

import logging
import os
from pathlib import Path

_LOGGER = logging.getLogger(__name__)

ENV_PREFIX = "CLAUDE_CLEANER_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "y", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "n", "off"})


def env_name(suffix: str) -> str:
    """Return the prefixed variable name for a setting suffix."""
    return f"{ENV_PREFIX}{suffix}"


def env_value(name: str) -> str | None:
    """Return stripped env var value, or None if empty/not set.

    Parameters
    ----------
    name
        Environment variable name.

    Returns:
    -------
    str | None
        Stripped value or None.
    """
    raw = os.environ.get(name)
    if raw is None:
        return None
    stripped = raw.strip()
    return stripped or None


def env_text(name: str, *, default: str | None = None) -> str | None:
    """Return a stripped environment string, falling back to ``default``."""
    value = env_value(name)
    return value if value is not None else default


def env_path(name: str) -> Path | None:
    """Return an environment value as a user-expanded path.

    Returns:
    -------
    Path | None
        Expanded path, or ``None`` when unset.
    """
    value = env_value(name)
    if value is None:
        return None
    return Path(value).expanduser()


def env_bool(name: str, *, default: bool | None = None) -> bool | None:
    """Parse environment variable as boolean.

    Unrecognized values are logged and treated as unset.

    Returns:
    -------
    bool | None
        Parsed boolean or default.
    """
    value = env_value(name)
    if value is None:
        return default
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    _LOGGER.warning("Invalid boolean for %s: %r", name, value)
    return default


__all__ = ["ENV_PREFIX", "env_bool", "env_name", "env_path", "env_text", "env_value"]
