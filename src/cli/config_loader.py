"""Config loading helpers for the CLI."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import cast

import msgspec

from cli.config_models import RootConfig
from cli.validation import validate_clean_config
from errors import ConfigurationError
from serde_msgspec import convert, validation_error_payload

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "claude-cleaner.toml"
PYPROJECT_TABLE: tuple[str, ...] = ("tool", "claude-cleaner")


def load_root_config(
    config_file: str | None,
    *,
    start: Path | None = None,
) -> tuple[RootConfig, str | None]:
    """Load configuration from ``--config`` or the nearest config file.

    Without an explicit file, ``claude-cleaner.toml`` is searched for from
    ``start`` (default: cwd) upwards, then ``[tool.claude-cleaner]`` in the
    nearest ``pyproject.toml``.

    Returns:
    -------
    tuple[RootConfig, str | None]
        Decoded configuration and the location it came from, if any.

    Raises
    ------
    ConfigurationError
        Raised when the explicit file is missing, or any file is malformed.
    """
    if config_file:
        path = Path(config_file)
        if not path.is_file():
            msg = f"Config file not found: {config_file!r}."
            raise ConfigurationError(msg)
        location = str(path)
        return _decode_root_config(_read_toml(path), location=location), location

    config_path = _find_in_parents(CONFIG_FILENAME, start=start)
    if config_path is not None:
        location = str(config_path)
        return _decode_root_config(_read_toml(config_path), location=location), location

    pyproject_path = _find_in_parents("pyproject.toml", start=start)
    if pyproject_path is not None:
        nested = _extract_tool_config(_read_toml(pyproject_path))
        if nested is not None:
            location = f"{pyproject_path}:{'.'.join(PYPROJECT_TABLE)}"
            return _decode_root_config(nested, location=location), location

    return RootConfig(), None


def config_contents(config: RootConfig) -> dict[str, object]:
    """Return the config as builtins keyed by CLI option names.

    Returns:
    -------
    dict[str, object]
        Payload suitable for a Cyclopts config provider.
    """
    return cast("dict[str, object]", msgspec.to_builtins(config, str_keys=True))


def _find_in_parents(filename: str, *, start: Path | None = None) -> Path | None:
    """Walk parents from ``start`` to find a filename.

    Returns:
    -------
    Path | None
        Path to the first matching file in the directory or its parents.
    """
    path = (start or Path.cwd()).resolve()
    while True:
        candidate = path / filename
        if candidate.is_file():
            return candidate
        if path.parent == path:
            return None
        path = path.parent


def _read_toml(path: Path) -> dict[str, object]:
    try:
        payload = msgspec.toml.decode(path.read_bytes(), type=object, strict=True)
    except (OSError, msgspec.DecodeError) as exc:
        msg = f"Unable to read config file {path}: {exc}"
        raise ConfigurationError(msg, cause=exc) from exc
    if not isinstance(payload, dict):
        msg = f"Expected TOML mapping in {path}, got {type(payload).__name__}."
        raise ConfigurationError(msg)
    return cast("dict[str, object]", payload)


def _extract_tool_config(pyproject: Mapping[str, object]) -> Mapping[str, object] | None:
    current: object = pyproject
    for key in PYPROJECT_TABLE:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    if not isinstance(current, Mapping):
        return None
    return cast("Mapping[str, object]", current)


def _decode_root_config(raw: Mapping[str, object], *, location: str) -> RootConfig:
    try:
        config = convert(dict(raw), target_type=RootConfig, strict=True)
    except msgspec.ValidationError as exc:
        details = validation_error_payload(exc)
        msg = f"Config validation failed for {location}: {details}"
        raise ConfigurationError(msg, cause=exc) from exc
    validate_clean_config(config.clean, location=location)
    logger.debug("Loaded configuration from %s", location)
    return config


__all__ = ["CONFIG_FILENAME", "PYPROJECT_TABLE", "config_contents", "load_root_config"]
