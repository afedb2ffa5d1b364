"""Tests for CLI dispatch, exit codes, and result handling."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cli.app import app
from cli.exit_codes import ExitCode
from cli.invoke import invoke
from cli.result import CliResult
from cli.result_action import cli_result_action
from errors import (
    ConfigurationError,
    DirtyWorkingTreeError,
    MissingBackupError,
    PatternSourceError,
    RewriteFailedError,
    ToolNotFoundError,
)


@pytest.fixture(autouse=True)
def _workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep config discovery away from the developer's checkout."""
    monkeypatch.chdir(tmp_path)


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (ConfigurationError("bad"), ExitCode.CONFIG_ERROR),
        (ToolNotFoundError("no java"), ExitCode.TOOL_NOT_FOUND),
        (PatternSourceError("unreadable"), ExitCode.INPUT_ERROR),
        (DirtyWorkingTreeError("dirty"), ExitCode.VALIDATION_ERROR),
        (RewriteFailedError("boom"), ExitCode.EXTERNAL_TOOL_ERROR),
        (MissingBackupError("no backup"), ExitCode.PRECONDITION_ERROR),
        (ValueError("x"), ExitCode.VALIDATION_ERROR),
        (KeyError("x"), ExitCode.GENERAL_ERROR),
    ],
)
def test_exit_code_mapping(exc: BaseException, expected: ExitCode) -> None:
    """Ensure each error family maps to its exit code."""
    assert ExitCode.from_exception(exc) == expected


def test_result_from_exception_prefixes_code() -> None:
    """Ensure error summaries carry the stable error code."""
    result = CliResult.from_exception(DirtyWorkingTreeError("commit first"))
    assert not result.ok
    assert result.exit_code == ExitCode.VALIDATION_ERROR
    assert result.summary == "WORKING_TREE_DIRTY: commit first"


def test_result_action_prints_backups(capsys: pytest.CaptureFixture[str]) -> None:
    """Ensure successful results print their summary and backup refs."""
    result = CliResult.success(
        summary="done",
        backups={"files": "backup/pre-clean-2024-05-01T10-20-30-123Z"},
    )
    assert cli_result_action(app, None, result) == 0
    out = capsys.readouterr().out
    assert "done" in out
    assert "Backup (files): backup/pre-clean-2024-05-01T10-20-30-123Z" in out


def test_result_action_errors_go_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    """Ensure failures are reported on stderr."""
    assert cli_result_action(app, None, CliResult.error(ExitCode.CONFIG_ERROR, summary="x")) == 4
    assert "x" in capsys.readouterr().err
    assert cli_result_action(app, None, None) == 0
    assert cli_result_action(app, None, 7) == 7
    assert cli_result_action(app, None, object()) == ExitCode.GENERAL_ERROR


def test_conflicting_phase_flags(tmp_path: Path) -> None:
    """Ensure --files-only with --commits-only is a config error."""
    exit_code, event = invoke(app, ["clean", str(tmp_path), "--files-only", "--commits-only"])
    assert exit_code == ExitCode.CONFIG_ERROR
    assert event.error_code == "INVALID_OPTIONS"
    assert event.command == "clean"


def test_extended_without_defaults(tmp_path: Path) -> None:
    """Ensure extended matching needs the default rules."""
    exit_code, _ = invoke(
        app,
        ["clean", str(tmp_path), "--no-defaults", "--include-all-common-patterns"],
    )
    assert exit_code == ExitCode.CONFIG_ERROR


def test_invalid_directory_name(tmp_path: Path) -> None:
    """Ensure unsafe --include-dirs values are validation errors."""
    exit_code, event = invoke(app, ["clean", str(tmp_path), "--include-dirs", "../up"])
    assert exit_code == ExitCode.VALIDATION_ERROR
    assert event.error_code == "INVALID_PATTERN"


def test_missing_pattern_file(tmp_path: Path) -> None:
    """Ensure an unreadable --include-dirs-file is an input error."""
    missing = tmp_path / "dirs.txt"
    exit_code, _ = invoke(app, ["clean", str(tmp_path), "--include-dirs-file", str(missing)])
    assert exit_code == ExitCode.INPUT_ERROR


def test_not_a_repository(tmp_path: Path) -> None:
    """Ensure directories outside version control are rejected."""
    exit_code, event = invoke(app, ["clean", str(tmp_path)])
    assert exit_code == ExitCode.VALIDATION_ERROR
    assert event.error_class == "NotVersionedError"


def test_unknown_option_is_parse_error() -> None:
    """Ensure unknown flags exit with the parse error code."""
    exit_code, event = invoke(app, ["clean", "--bogus"])
    assert exit_code == ExitCode.PARSE_ERROR
    assert event.error_class is not None
    assert event.error_class.startswith("cyclopts.")


def test_preview_limit_must_be_positive() -> None:
    """Ensure --preview-limit rejects zero."""
    exit_code, _ = invoke(app, ["clean", "--preview-limit", "0"])
    assert exit_code == ExitCode.VALIDATION_ERROR


def test_version_command(capsys: pytest.CaptureFixture[str]) -> None:
    """Ensure version output is JSON with dependency versions."""
    exit_code, event = invoke(app, ["version"])
    assert exit_code == 0
    assert event.ok
    payload = json.loads(capsys.readouterr().out)
    assert "claude-cleaner" in payload
    assert set(payload["dependencies"]) == {
        "cyclopts",
        "msgspec",
        "pathspec",
        "pygit2",
        "rich",
        "wcmatch",
    }
