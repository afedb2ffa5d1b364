"""Version reporting for the claude-cleaner CLI."""

from __future__ import annotations

import json
import platform
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

import pygit2

DEPENDENCIES = ("cyclopts", "msgspec", "pathspec", "pygit2", "rich", "wcmatch")


def get_version() -> str:
    """Get the claude-cleaner package version string.

    Returns:
    -------
    str
        Version string, or "0.0.0-dev" if not installed.
    """
    return _package_version("claude-cleaner") or "0.0.0-dev"


def get_version_info() -> dict[str, object]:
    """Get detailed version information.

    Returns:
    -------
    dict[str, object]
        Structured version payload.
    """
    return {
        "claude-cleaner": get_version(),
        "python": sys.version.split()[0],
        "platform": platform.platform(),
        "libgit2": pygit2.LIBGIT2_VERSION,
        "dependencies": {name: _package_version(name) for name in DEPENDENCIES},
    }


def version_command() -> int:
    """Show version and dependency information.

    Returns:
    -------
    int
        Exit status code.
    """
    payload = json.dumps(get_version_info(), indent=2, sort_keys=True)
    sys.stdout.write(payload + "\n")
    return 0


def _package_version(name: str) -> str | None:
    try:
        return pkg_version(name)
    except PackageNotFoundError:
        return None


__all__ = ["get_version", "get_version_info", "version_command"]
