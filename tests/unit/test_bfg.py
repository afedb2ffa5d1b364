"""Tests for BFG discovery and command construction."""

from __future__ import annotations

from pathlib import Path

import pytest

from errors import RemovalFailedError, ToolNotFoundError
from removal.bfg import BFG_VERSION, BfgTool, DeleteMode, default_jar_path, resolve_bfg_tool
from tests.test_helpers.fakes import RecordingRunner


def test_command_layout(bfg_jar: Path) -> None:
    """Ensure the argv runs the jar against the repository root."""
    tool = BfgTool(jar=bfg_jar, java="/opt/java/bin/java")
    assert tool.command(DeleteMode.FOLDERS, ".claude", "/repo") == (
        "/opt/java/bin/java",
        "-jar",
        str(bfg_jar),
        "--delete-folders",
        ".claude",
        "--no-blob-protection",
        "/repo",
    )


def test_run_uses_removal_error(bfg_tool: BfgTool, tmp_path: Path) -> None:
    """Ensure BFG failures surface as removal errors."""
    runner = RecordingRunner(returncode=1, stderr="boom")
    with pytest.raises(RemovalFailedError):
        bfg_tool.run(DeleteMode.FILES, "CLAUDE.md", tmp_path, runner=runner)
    assert runner.calls[0][4] == "CLAUDE.md"


def test_resolve_prefers_explicit_jar(bfg_jar: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure an explicit path beats the environment."""
    monkeypatch.setenv("CLAUDE_CLEANER_BFG_JAR", "/elsewhere/bfg.jar")
    assert resolve_bfg_tool(bfg_jar).jar == bfg_jar


def test_resolve_from_environment(bfg_jar: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure environment variables supply the jar and java launcher."""
    monkeypatch.setenv("CLAUDE_CLEANER_BFG_JAR", str(bfg_jar))
    monkeypatch.setenv("CLAUDE_CLEANER_JAVA", "/opt/java/bin/java")
    tool = resolve_bfg_tool()
    assert tool.jar == bfg_jar
    assert tool.java == "/opt/java/bin/java"


def test_resolve_falls_back_to_cache(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the cached jar is used only when it exists."""
    monkeypatch.setenv("HOME", str(tmp_path))
    assert resolve_bfg_tool().jar is None
    cached = default_jar_path()
    assert cached.name == f"bfg-{BFG_VERSION}.jar"
    cached.parent.mkdir(parents=True)
    cached.write_bytes(b"PK")
    assert resolve_bfg_tool().jar == cached


def test_ensure_available_reports_missing_pieces(tmp_path: Path, bfg_jar: Path) -> None:
    """Ensure each missing tool yields a descriptive error."""
    with pytest.raises(ToolNotFoundError, match="not configured"):
        BfgTool().ensure_available()
    with pytest.raises(ToolNotFoundError, match="not found at"):
        BfgTool(jar=tmp_path / "absent.jar").ensure_available()
    with pytest.raises(ToolNotFoundError, match="Java runtime not found"):
        BfgTool(jar=bfg_jar, java="no-such-java-launcher").ensure_available()


def test_java_version_reads_stderr_banner() -> None:
    """Ensure the version banner printed on stderr is parsed."""
    runner = RecordingRunner(stderr='openjdk version "17.0.2" 2022-01-18\n')
    assert BfgTool().java_version(runner=runner) == "17.0.2"
    assert runner.calls == [("java", "-version")]


def test_java_version_handles_failure() -> None:
    """Ensure a failing launcher reports no version."""
    assert BfgTool().java_version(runner=RecordingRunner(returncode=1)) is None
    assert BfgTool().java_version(runner=RecordingRunner(stdout="odd")) == "unknown"
