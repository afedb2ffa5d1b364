"""Message filter run by ``git filter-branch --msg-filter``.

Reads one commit message on stdin and writes the cleaned message to stdout::

    python -m commits.msg_filter --rules rules.json
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Annotated, BinaryIO

from cyclopts import App, Parameter

from commits.trailers import DEFAULT_TRAILER_RULES, TrailerRule, clean_message
from serde_msgspec import dumps_json, loads_json

app = App(
    name="claude-cleaner-msg-filter",
    help="Remove trailer lines from a commit message read on stdin.",
    version_flags=[],
)


def load_rules(path: Path | None) -> tuple[TrailerRule, ...]:
    """Return trailer rules from a JSON file, or the defaults."""
    if path is None:
        return DEFAULT_TRAILER_RULES
    return loads_json(path.read_bytes(), target_type=tuple[TrailerRule, ...])


def write_rules(rules: Sequence[TrailerRule], path: Path) -> Path:
    """Write trailer rules as JSON for :func:`load_rules`."""
    path.write_bytes(dumps_json(tuple(rules)))
    return path


def filter_stream(source: BinaryIO, sink: BinaryIO, rules: Sequence[TrailerRule]) -> None:
    """Clean the message read from ``source`` into ``sink``.

    Nothing is written when the cleaned message is blank.
    """
    message = source.read().decode("utf-8", errors="surrogateescape")
    cleaned = clean_message(message, rules).cleaned
    if cleaned.strip():
        sink.write(cleaned.encode("utf-8", errors="surrogateescape"))
        sink.flush()


@app.default
def run(
    *,
    rules: Annotated[
        Path | None,
        Parameter(name="--rules", help="JSON file with trailer rules."),
    ] = None,
) -> None:
    """Filter one commit message from stdin to stdout."""
    filter_stream(sys.stdin.buffer, sys.stdout.buffer, load_rules(rules))


if __name__ == "__main__":
    app()
