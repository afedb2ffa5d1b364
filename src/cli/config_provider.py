"""Shared configuration resolution for the CLI and Cyclopts."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from cyclopts.config import Dict

from cli.config_loader import config_contents, load_root_config
from cli.config_models import RootConfig


@dataclass(frozen=True)
class ConfigResolution:
    """Resolved configuration plus the location it was read from."""

    config: RootConfig
    location: str | None = None

    @property
    def contents(self) -> dict[str, object]:
        return config_contents(self.config)


def resolve_config(config_file: str | None, *, start: Path | None = None) -> ConfigResolution:
    """Resolve config contents from ``--config`` or the default search.

    Returns
    -------
    ConfigResolution
        Resolved configuration and its source location.
    """
    config, location = load_root_config(config_file, start=start)
    return ConfigResolution(config=config, location=location)


def build_cyclopts_config(resolution: ConfigResolution) -> list[Dict]:
    """Build Cyclopts config providers from resolved config contents.

    Command tables (``[clean]``) supply defaults for that command's options.

    Returns
    -------
    list[Dict]
        Cyclopts config providers for CLI defaults.
    """
    return [
        Dict(
            resolution.contents,
            use_commands_as_keys=True,
            source=resolution.location or "claude-cleaner",
        ),
    ]


__all__ = ["ConfigResolution", "build_cyclopts_config", "resolve_config"]
