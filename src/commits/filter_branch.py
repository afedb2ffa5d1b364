"""Temporary message-filter script and ``git filter-branch`` arguments."""

from __future__ import annotations

import logging
import os
import shlex
import sys
import tempfile
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from pathlib import Path

from commits.msg_filter import write_rules
from commits.trailers import TrailerRule

LOGGER = logging.getLogger(__name__)

FILTER_MODULE = "commits.msg_filter"
_IMPORT_ROOT = Path(__file__).resolve().parent.parent


def render_wrapper(rules_path: Path, *, python: str | None = None) -> str:
    """Return a POSIX shell script that runs the message filter.

    Returns:
    -------
    str
        Script text invoking ``python -m commits.msg_filter``.
    """
    interpreter = shlex.quote(python or sys.executable)
    import_root = shlex.quote(str(_IMPORT_ROOT))
    return (
        "#!/bin/sh\n"
        f'PYTHONPATH={import_root}"${{PYTHONPATH:+:$PYTHONPATH}}"\n'
        "export PYTHONPATH\n"
        f"exec {interpreter} -m {FILTER_MODULE} --rules {shlex.quote(str(rules_path))}\n"
    )


@contextmanager
def message_filter_script(rules: Sequence[TrailerRule]) -> Iterator[Path]:
    """Yield an executable wrapper script; the directory is removed on exit.

    Yields:
    ------
    Path
        Path of the wrapper script.
    """
    with tempfile.TemporaryDirectory(prefix="claude-cleaner-") as tmp:
        root = Path(tmp)
        rules_path = write_rules(rules, root / "rules.json")
        wrapper = root / "clean-msg.sh"
        wrapper.write_text(render_wrapper(rules_path), encoding="utf-8")
        wrapper.chmod(0o755)
        LOGGER.debug("Created message filter script: %s", wrapper)
        yield wrapper


def filter_branch_args(wrapper: Path, revision_range: str) -> tuple[str, ...]:
    """Return ``git`` arguments rewriting messages over ``revision_range``."""
    return ("filter-branch", "-f", "--msg-filter", shlex.quote(str(wrapper)), revision_range)


def filter_branch_env(base: Mapping[str, str] | None = None) -> dict[str, str]:
    """Return the process environment for ``git filter-branch``."""
    env = dict(os.environ if base is None else base)
    env["FILTER_BRANCH_SQUELCH_WARNING"] = "1"
    return env


__all__ = [
    "FILTER_MODULE",
    "filter_branch_args",
    "filter_branch_env",
    "message_filter_script",
    "render_wrapper",
]
