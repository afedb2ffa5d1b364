"""Decide which history paths are cleaning targets and why."""

from __future__ import annotations

import logging
import posixpath
import re
from enum import StrEnum

from errors import ConfigurationError
from patterns.catalog import DEFAULT_CATALOG, RuleCatalog
from patterns.matcher import PatternMatcher
from patterns.rules import PatternRule, regex_rule
from patterns.validation import validate_custom_dirs
from serde_msgspec import StructBaseStrict

LOGGER = logging.getLogger(__name__)

CUSTOM_REASON = "User-specified directory pattern"
EXTENDED_FALLBACK_REASON = "Claude-related file (comprehensive pattern match)"


class SelectionMode(StrEnum):
    """Which built-in tables participate in selection."""

    CUSTOM_ONLY = "custom_only"
    DEFAULT = "default"
    EXTENDED = "extended"


class SelectionConfig(StructBaseStrict, frozen=True):
    """User-facing selection options."""

    custom_dirs: tuple[str, ...] = ()
    use_defaults: bool = True
    extended: bool = False

    @property
    def mode(self) -> SelectionMode:
        if self.extended:
            return SelectionMode.EXTENDED
        if self.use_defaults:
            return SelectionMode.DEFAULT
        return SelectionMode.CUSTOM_ONLY


def custom_dir_rule(name: str) -> PatternRule:
    """Return a whole-segment rule for a custom directory name.

    Returns:
    -------
    PatternRule
        Regex rule matching ``name`` as any path segment.
    """
    return regex_rule(rf"(?:^|/){re.escape(name)}(?:/|\Z)", CUSTOM_REASON)


class TargetSelector:
    """Classify repository paths for one selection configuration.

    Custom directory names are always consulted first. Default mode adds the
    built-in identity and temporary-file rules. Extended mode additionally
    tests the extended table against the full path and the basename.
    """

    def __init__(
        self,
        config: SelectionConfig,
        *,
        catalog: RuleCatalog = DEFAULT_CATALOG,
    ) -> None:
        if config.extended and not config.use_defaults:
            msg = "--include-all-common-patterns and --no-defaults cannot be used together"
            raise ConfigurationError(msg)
        self.config = config
        self.custom_dirs = validate_custom_dirs(config.custom_dirs)
        self._custom = PatternMatcher(custom_dir_rule(name) for name in self.custom_dirs)
        self._identity = PatternMatcher(catalog.identity)
        self._defaults = PatternMatcher(catalog.defaults)
        self._extended = PatternMatcher(catalog.extended)
        if config.mode == SelectionMode.CUSTOM_ONLY and not self.custom_dirs:
            LOGGER.warning("Built-in patterns are disabled and no directories were given")

    @property
    def mode(self) -> SelectionMode:
        return self.config.mode

    def is_target(self, path: str) -> bool:
        """Return whether ``path`` should be removed."""
        return self.classify(path) is not None

    def reason(self, path: str) -> str:
        """Return the reason reported for a target path.

        Raises
        ------
        ValueError
            Raised when ``path`` is not a target.
        """
        reason = self.classify(path)
        if reason is None:
            msg = f"Path is not a cleaning target: {path!r}"
            raise ValueError(msg)
        return reason

    def classify(self, path: str) -> str | None:
        """Return the reason for ``path`` or ``None`` when it is not a target.

        Returns:
        -------
        str | None
            First applicable reason in priority order.
        """
        if not path:
            return None
        if self._custom.matches(path):
            return CUSTOM_REASON
        mode = self.mode
        if mode == SelectionMode.CUSTOM_ONLY:
            return None
        if mode == SelectionMode.DEFAULT:
            return self._defaults.reason(path)
        return self._classify_extended(path)

    def _classify_extended(self, path: str) -> str | None:
        identity = self._identity.reason(path)
        if identity is not None:
            return identity
        basename = posixpath.basename(path.rstrip("/"))
        extended = self._extended.reason(path) or self._extended.reason(basename)
        if extended is not None:
            return extended
        if self._defaults.matches(path):
            return EXTENDED_FALLBACK_REASON
        return None


__all__ = [
    "CUSTOM_REASON",
    "EXTENDED_FALLBACK_REASON",
    "SelectionConfig",
    "SelectionMode",
    "TargetSelector",
    "custom_dir_rule",
]
