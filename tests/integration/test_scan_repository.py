"""Scan real repositories built with pygit2."""

from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest

from cli.app import app
from cli.invoke import invoke
from core_types import PathKind
from errors import EmptyHistoryError, NotVersionedError
from gitops.context import require_git_context
from patterns import SelectionConfig, TargetSelector
from scan import HistoryScanner
from tests.test_helpers.git_repo import commit_files, init_repo

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git executable required")


@pytest.fixture
def claude_repo(tmp_path: Path) -> Path:
    """Repository with Claude artifacts spread over two commits."""
    root = tmp_path / "project"
    repo = init_repo(root)
    commit_files(repo, {"CLAUDE.md": "# notes\n", "notes.txt": "keep\n"}, "Initial commit")
    commit_files(
        repo,
        {".claude/settings.json": "{}\n", "src/app.py": "print('hi')\n"},
        "Add settings\n\nCo-Authored-By: Claude <noreply@anthropic.com>\n",
    )
    return root


def test_scan_finds_artifacts_with_first_commit(claude_repo: Path) -> None:
    """Ensure candidates carry kind, reason, and the commit that added them."""
    scanner = HistoryScanner.for_repository(claude_repo, TargetSelector(SelectionConfig()))
    candidates = scanner.scan()
    assert [(item.path, item.kind) for item in candidates] == [
        (".claude", PathKind.DIRECTORY),
        (".claude/settings.json", PathKind.FILE),
        ("CLAUDE.md", PathKind.FILE),
    ]
    config_file = candidates[2]
    assert config_file.reason == "Claude project configuration file"
    assert config_file.earliest_change is not None
    assert config_file.earliest_change.summary == "Initial commit"
    assert candidates[0].earliest_change is not None
    assert candidates[0].earliest_change.summary == "Add settings"


def test_custom_directory_selection(claude_repo: Path) -> None:
    """Ensure custom-only mode ignores the built-in rules."""
    selector = TargetSelector(SelectionConfig(custom_dirs=("src",), use_defaults=False))
    candidates = HistoryScanner.for_repository(claude_repo, selector).scan()
    assert [item.path for item in candidates] == ["src", "src/app.py"]


def test_dry_run_json_output(
    claude_repo: Path,
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Ensure a dry run reports both phases and leaves refs untouched."""
    monkeypatch.chdir(claude_repo)
    exit_code, event = invoke(app, ["clean", str(claude_repo), "--json"])
    assert exit_code == 0
    assert event.ok
    payload = json.loads(capsys.readouterr().out)
    assert payload["dry_run"] is True
    assert [item["path"] for item in payload["files"]["candidates"]] == [
        ".claude",
        ".claude/settings.json",
        "CLAUDE.md",
    ]
    assert payload["commits"]["analysis"]["affected_commits"] == 1
    repo = require_git_context(claude_repo).repo
    assert not any(name.startswith("refs/backup/") for name in repo.references)


def test_non_repository_is_rejected(tmp_path: Path) -> None:
    """Ensure plain directories are reported as unversioned."""
    plain = tmp_path / "plain"
    plain.mkdir()
    with pytest.raises(NotVersionedError):
        require_git_context(plain)


def test_empty_repository_is_rejected(tmp_path: Path) -> None:
    """Ensure repositories without commits are rejected."""
    init_repo(tmp_path / "empty")
    with pytest.raises(EmptyHistoryError):
        require_git_context(tmp_path / "empty")


_LONG_DIR = "/".join(f"level-{index:02d}-" + "x" * 20 for index in range(40))


def test_scan_handles_unusual_paths(tmp_path: Path) -> None:
    """Ensure quoted, unicode, whitespace and very long paths are all found."""
    root = tmp_path / "odd"
    repo = init_repo(root)
    expected = {
        "dir with space/CLAUDE.md",
        "ünïcødé/CLAUDE.md",
        'we"ird/CLAUDE.md',
        "tab\tdir/CLAUDE.md",
        "back\\slash/CLAUDE.md",
        "日本/.claude/settings.json",
        f"{_LONG_DIR}/CLAUDE.md",
    }
    files = dict.fromkeys(expected, "x\n")
    files["dir with space/README.md"] = "keep\n"
    commit_files(repo, files, "Add odd paths")
    assert len(f"{_LONG_DIR}/CLAUDE.md") > 1000

    candidates = HistoryScanner.for_repository(root, TargetSelector(SelectionConfig())).scan()
    found = {item.path: item for item in candidates}
    assert expected <= found.keys()
    assert "日本/.claude" in found
    assert found["日本/.claude"].kind == PathKind.DIRECTORY
    assert "dir with space/README.md" not in found
    assert found[f"{_LONG_DIR}/CLAUDE.md"].reason == "Claude project configuration file"
