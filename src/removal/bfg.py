"""BFG Repo-Cleaner command construction and discovery."""

from __future__ import annotations

import logging
import re
import shutil
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from core_types import PathLike, ensure_path
from errors import ExternalToolError, RemovalFailedError, ToolNotFoundError
from utils.env_utils import env_name, env_path, env_text
from utils.process import ToolResult, ToolRunner, run_tool

LOGGER = logging.getLogger(__name__)

BFG_PLACEHOLDER = "<bfg-path>"
BFG_VERSION = "1.14.0"
DEFAULT_CACHE_DIR = Path("~/.cache/claude-cleaner")
_JAVA_VERSION = re.compile(r'version "([^"]+)"')


class DeleteMode(StrEnum):
    """BFG deletion flags."""

    FILES = "--delete-files"
    FOLDERS = "--delete-folders"


@dataclass(frozen=True)
class BfgTool:
    """Location of the BFG jar and the java launcher that runs it."""

    jar: Path | None = None
    java: str = "java"

    def command(self, mode: DeleteMode, name: str, repo_root: PathLike) -> tuple[str, ...]:
        """Return the argv deleting ``name`` from every commit.

        A missing jar renders as ``<bfg-path>`` so dry runs can still print it.
        """
        jar = str(self.jar) if self.jar is not None else BFG_PLACEHOLDER
        return (
            self.java,
            "-jar",
            jar,
            str(mode),
            name,
            "--no-blob-protection",
            str(ensure_path(repo_root)),
        )

    def ensure_available(self) -> None:
        """Raise when the jar or the java launcher cannot be found.

        Raises
        ------
        ToolNotFoundError
            Raised when either tool is missing.
        """
        if self.jar is None:
            msg = (
                "BFG Repo-Cleaner jar not configured; pass --bfg-jar or set "
                f"{env_name('BFG_JAR')}"
            )
            raise ToolNotFoundError(msg)
        if not self.jar.is_file():
            msg = f"BFG Repo-Cleaner not found at: {self.jar}"
            raise ToolNotFoundError(msg)
        if shutil.which(self.java) is None:
            msg = f"Java runtime not found: {self.java}"
            raise ToolNotFoundError(msg)

    def run(
        self,
        mode: DeleteMode,
        name: str,
        repo_root: Path,
        *,
        runner: ToolRunner = run_tool,
    ) -> ToolResult:
        return runner(
            self.command(mode, name, repo_root),
            cwd=repo_root,
            error_type=RemovalFailedError,
            description=f"BFG {mode} {name}",
        )

    def java_version(self, *, runner: ToolRunner = run_tool) -> str | None:
        """Return the java version string, or ``None`` when java cannot run."""
        try:
            result = runner((self.java, "-version"), description="java -version")
        except ExternalToolError as exc:
            LOGGER.debug("java -version failed: %s", exc)
            return None
        # java prints its version banner on stderr
        match = _JAVA_VERSION.search(result.stderr) or _JAVA_VERSION.search(result.stdout)
        return match.group(1) if match else "unknown"


def default_jar_path() -> Path:
    """Return the conventional cached jar location."""
    return (DEFAULT_CACHE_DIR / f"bfg-{BFG_VERSION}.jar").expanduser()


def resolve_bfg_tool(jar: PathLike | None = None, *, java: str | None = None) -> BfgTool:
    """Resolve the BFG jar from an explicit path, the environment, or the cache.

    Returns:
    -------
    BfgTool
        Tool with ``jar`` set to ``None`` when nothing was found.
    """
    resolved = ensure_path(jar).expanduser() if jar is not None else env_path(env_name("BFG_JAR"))
    if resolved is None:
        cached = default_jar_path()
        resolved = cached if cached.is_file() else None
    java_executable = java or env_text(env_name("JAVA")) or "java"
    LOGGER.debug("BFG jar: %s, java: %s", resolved, java_executable)
    return BfgTool(jar=resolved, java=java_executable)


__all__ = [
    "BFG_PLACEHOLDER",
    "BFG_VERSION",
    "BfgTool",
    "DeleteMode",
    "default_jar_path",
    "resolve_bfg_tool",
]
