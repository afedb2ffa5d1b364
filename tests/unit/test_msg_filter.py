"""Tests for the filter-branch message filter and its wrapper script."""

from __future__ import annotations

import io
import os
import sys
from pathlib import Path

from commits.filter_branch import (
    FILTER_MODULE,
    filter_branch_args,
    filter_branch_env,
    message_filter_script,
    render_wrapper,
)
from commits.msg_filter import filter_stream, load_rules, write_rules
from commits.trailers import DEFAULT_TRAILER_RULES


def test_filter_stream_cleans_message() -> None:
    """Ensure the filter writes the cleaned message."""
    source = io.BytesIO(
        "Fix\n\nCo-Authored-By: Claude <noreply@anthropic.com>\n".encode("utf-8"),
    )
    sink = io.BytesIO()
    filter_stream(source, sink, DEFAULT_TRAILER_RULES)
    assert sink.getvalue() == b"Fix\n"


def test_filter_stream_writes_nothing_for_blank_result() -> None:
    """Ensure messages made only of trailers produce no output."""
    source = io.BytesIO(b"Generated with Claude\n")
    sink = io.BytesIO()
    filter_stream(source, sink, DEFAULT_TRAILER_RULES)
    assert sink.getvalue() == b""


def test_rules_file_round_trip(tmp_path: Path) -> None:
    """Ensure written rules load back unchanged."""
    path = write_rules(DEFAULT_TRAILER_RULES, tmp_path / "rules.json")
    assert load_rules(path) == DEFAULT_TRAILER_RULES
    assert load_rules(None) == DEFAULT_TRAILER_RULES


def test_render_wrapper_runs_filter_module(tmp_path: Path) -> None:
    """Ensure the wrapper execs the filter module with the rules file."""
    script = render_wrapper(tmp_path / "rules.json", python="/usr/bin/python3")
    assert script.startswith("#!/bin/sh\n")
    assert "export PYTHONPATH" in script
    assert f"exec /usr/bin/python3 -m {FILTER_MODULE} --rules {tmp_path / 'rules.json'}" in script


def test_message_filter_script_is_temporary() -> None:
    """Ensure the wrapper is executable and removed afterwards."""
    with message_filter_script(DEFAULT_TRAILER_RULES) as wrapper:
        assert wrapper.is_file()
        assert os.access(wrapper, os.X_OK)
        assert (wrapper.parent / "rules.json").is_file()
        assert sys.executable in wrapper.read_text(encoding="utf-8")
    assert not wrapper.exists()


def test_filter_branch_args_and_env() -> None:
    """Ensure arguments and environment match what filter-branch expects."""
    args = filter_branch_args(Path("/tmp/clean msg.sh"), "abc..main")
    assert args == ("filter-branch", "-f", "--msg-filter", "'/tmp/clean msg.sh'", "abc..main")
    env = filter_branch_env({"PATH": "/bin"})
    assert env == {"PATH": "/bin", "FILTER_BRANCH_SQUELCH_WARNING": "1"}
