"""Global pygit2 settings helpers."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cache

import pygit2

from utils.env_utils import env_bool, env_name, env_text


@dataclass(frozen=True)
class GitSettingsSpec:
    """Optional pygit2 Settings overrides."""

    owner_validation: bool | None = None
    ssl_cert_file: str | None = None


def apply_git_settings(spec: GitSettingsSpec) -> None:
    """Apply pygit2 settings overrides when supported.

    Disabling owner validation allows cleaning repositories owned by other
    users (common in containers and CI checkouts). Only disable it for trusted
    workspaces.
    """
    settings = pygit2.Settings()
    if spec.owner_validation is not None and hasattr(settings, "owner_validation"):
        settings.owner_validation = spec.owner_validation
    if spec.ssl_cert_file and hasattr(settings, "ssl_cert_file"):
        settings.ssl_cert_file = spec.ssl_cert_file


@cache
def apply_git_settings_once() -> None:
    """Apply settings once based on environment overrides."""
    spec = git_settings_from_env()
    if spec is not None:
        apply_git_settings(spec)


def git_settings_from_env() -> GitSettingsSpec | None:
    """Build GitSettingsSpec from ``CLAUDE_CLEANER_GIT_*`` variables.

    Returns:
    -------
    GitSettingsSpec | None
        Settings derived from environment variables, or ``None`` when unset.
    """
    owner_validation = env_bool(env_name("GIT_OWNER_VALIDATION"))
    ssl_cert_file = env_text(env_name("GIT_SSL_CERT_FILE"))
    if owner_validation is None and ssl_cert_file is None:
        return None
    return GitSettingsSpec(owner_validation=owner_validation, ssl_cert_file=ssl_cert_file)


__all__ = [
    "GitSettingsSpec",
    "apply_git_settings",
    "apply_git_settings_once",
    "git_settings_from_env",
]
