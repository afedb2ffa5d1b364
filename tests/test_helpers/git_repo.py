"""Build small pygit2 repositories for tests."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, cast

import pygit2

if TYPE_CHECKING:
    from pygit2 import Oid, Repository

AUTHOR = pygit2.Signature("Test User", "test@example.com")


def init_repo(path: Path) -> Repository:
    """Initialize a non-bare repository with ``main`` as the initial branch."""
    repo = pygit2.init_repository(path, bare=False, initial_head="main")
    repo.config["user.name"] = AUTHOR.name
    repo.config["user.email"] = AUTHOR.email
    return repo


def commit_files(repo: Repository, files: dict[str, str], message: str) -> str:
    """Write ``files`` under the work tree, stage them, and commit.

    Returns
    -------
    str
        Hex id of the new commit.
    """
    workdir = Path(repo.workdir)
    for relative, content in files.items():
        path = workdir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        repo.index.add(relative)
    repo.index.write()
    tree_id = repo.index.write_tree()
    parents: list[Oid] = []
    if not repo.head_is_unborn:
        parents = [cast("Oid", repo.head.target)]
    commit_id = repo.create_commit("HEAD", AUTHOR, AUTHOR, message, tree_id, parents)
    return str(commit_id)


__all__ = ["AUTHOR", "commit_files", "init_repo"]
