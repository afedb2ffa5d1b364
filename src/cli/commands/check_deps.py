"""Report the external tools needed to execute a clean."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import pygit2
from cyclopts import Parameter
from rich.console import Console
from rich.table import Table

from cli.exit_codes import ExitCode
from cli.groups import tools_group
from cli.result import CliResult
from errors import ExternalToolError
from removal.bfg import BfgTool, resolve_bfg_tool
from utils.process import ToolRunner, run_tool

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DependencyStatus:
    """Availability of one external dependency."""

    name: str
    available: bool
    detail: str


def git_status(*, runner: ToolRunner = run_tool) -> DependencyStatus:
    try:
        result = runner(("git", "--version"), description="git --version")
    except ExternalToolError as exc:
        return DependencyStatus("git", available=False, detail=str(exc))
    return DependencyStatus("git", available=True, detail=result.stdout.strip())


def java_status(bfg: BfgTool, *, runner: ToolRunner = run_tool) -> DependencyStatus:
    version = bfg.java_version(runner=runner)
    if version is None:
        return DependencyStatus("java", available=False, detail=f"{bfg.java} not runnable")
    return DependencyStatus("java", available=True, detail=f"{bfg.java} ({version})")


def bfg_status(bfg: BfgTool) -> DependencyStatus:
    if bfg.jar is None:
        return DependencyStatus(
            "bfg",
            available=False,
            detail="not configured (use --bfg-jar or CLAUDE_CLEANER_BFG_JAR)",
        )
    if not bfg.jar.is_file():
        return DependencyStatus("bfg", available=False, detail=f"missing: {bfg.jar}")
    return DependencyStatus("bfg", available=True, detail=str(bfg.jar))


def collect_statuses(
    bfg: BfgTool,
    *,
    runner: ToolRunner = run_tool,
) -> list[DependencyStatus]:
    """Check git, java, the BFG jar, and the linked libgit2.

    Returns
    -------
    list[DependencyStatus]
        One status per dependency, in display order.
    """
    return [
        git_status(runner=runner),
        java_status(bfg, runner=runner),
        bfg_status(bfg),
        DependencyStatus("libgit2", available=True, detail=pygit2.LIBGIT2_VERSION),
    ]


def check_deps_command(
    *,
    bfg_jar: Annotated[
        Path | None,
        Parameter(
            name="--bfg-jar",
            help="Path to the BFG Repo-Cleaner jar.",
            env_var="CLAUDE_CLEANER_BFG_JAR",
            group=tools_group,
        ),
    ] = None,
    java: Annotated[
        str | None,
        Parameter(
            name="--java",
            help="Java executable used to run BFG.",
            env_var="CLAUDE_CLEANER_JAVA",
            group=tools_group,
        ),
    ] = None,
) -> CliResult:
    """Check that every tool needed by ``clean --execute`` is available.

    Returns
    -------
    CliResult
        Success when all dependencies are available.
    """
    statuses = collect_statuses(resolve_bfg_tool(bfg_jar, java=java))
    table = Table(title="Dependencies")
    table.add_column("Tool", style="cyan")
    table.add_column("Status")
    table.add_column("Detail", overflow="fold")
    for status in statuses:
        marker = "[green]ok[/green]" if status.available else "[red]missing[/red]"
        table.add_row(status.name, marker, status.detail)
    Console().print(table)
    missing = [status.name for status in statuses if not status.available]
    if missing:
        logger.debug("Missing dependencies: %s", missing)
        return CliResult.error(
            ExitCode.TOOL_NOT_FOUND,
            summary=f"Missing dependencies: {', '.join(missing)}",
        )
    return CliResult.success(summary="All dependencies are available.")


__all__ = ["DependencyStatus", "check_deps_command", "collect_statuses"]
