"""Shared pytest fixtures."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from removal.bfg import BfgTool
from tests.test_helpers.fakes import FakePlumbing, RecordingRunner
from utils.env_utils import ENV_PREFIX


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop ``CLAUDE_CLEANER_*`` variables inherited from the caller."""
    for name in list(os.environ):
        if name.startswith(ENV_PREFIX):
            monkeypatch.delenv(name)


@pytest.fixture
def fake_plumbing(tmp_path: Path) -> FakePlumbing:
    return FakePlumbing(root=tmp_path / "repo")


@pytest.fixture
def recording_runner(fake_plumbing: FakePlumbing) -> RecordingRunner:
    return RecordingRunner(plumbing=fake_plumbing)


@pytest.fixture
def bfg_jar(tmp_path: Path) -> Path:
    jar = tmp_path / "bfg.jar"
    jar.write_bytes(b"PK")
    return jar


@pytest.fixture
def bfg_tool(bfg_jar: Path) -> BfgTool:
    """BFG tool whose jar exists and whose launcher is the test interpreter."""
    return BfgTool(jar=bfg_jar, java=sys.executable)
