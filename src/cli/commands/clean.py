"""Clean command implementation for the claude-cleaner CLI."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

from cyclopts import Parameter, validators
from rich.console import Console

from cli.groups import execution_group, output_group, selection_group, tools_group
from cli.render import render_result
from cli.result import CliResult
from cli.validation import validate_phase_flags, validate_selection_flags
from commits.analyzer import DEFAULT_PREVIEW_LIMIT
from gitops.context import require_git_context
from gitops.plumbing import RepositoryPlumbing
from patterns.selection import SelectionConfig, TargetSelector
from patterns.sources import load_custom_dirs
from pipeline.runner import PipelineOptions, PipelineResult, PipelineRunner
from removal.bfg import resolve_bfg_tool
from serde_msgspec import dumps_json

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CleanOptions:
    """CLI options for the clean command."""

    execute: Annotated[
        bool,
        Parameter(
            name=("--execute", "-x"),
            negative="",
            help="Apply changes. Without this flag nothing in the repository is modified.",
            group=execution_group,
        ),
    ] = False
    files_only: Annotated[
        bool,
        Parameter(
            name="--files-only",
            negative="",
            help="Only remove files from history (skip commit message cleaning).",
            group=execution_group,
        ),
    ] = False
    commits_only: Annotated[
        bool,
        Parameter(
            name="--commits-only",
            negative="",
            help="Only clean commit messages (skip file removal).",
            group=execution_group,
        ),
    ] = False
    branch: Annotated[
        str,
        Parameter(
            name="--branch",
            help="Branch whose commit messages are cleaned.",
            group=execution_group,
        ),
    ] = "HEAD"
    include_dirs: Annotated[
        tuple[str, ...],
        Parameter(
            name="--include-dirs",
            consume_multiple=True,
            negative="",
            help="Directory names to remove wherever they appear in the tree.",
            group=selection_group,
        ),
    ] = ()
    include_dirs_file: Annotated[
        Path | None,
        Parameter(
            name="--include-dirs-file",
            help="File with one directory name per line ('#' starts a comment).",
            group=selection_group,
        ),
    ] = None
    use_defaults: Annotated[
        bool,
        Parameter(
            name="--defaults",
            negative="--no-defaults",
            help="Match the built-in Claude artifact rules.",
            group=selection_group,
        ),
    ] = True
    include_all_common_patterns: Annotated[
        bool,
        Parameter(
            name="--include-all-common-patterns",
            negative="",
            help="Also match the extended catalog of rarely used Claude artifacts.",
            group=selection_group,
        ),
    ] = False
    bfg_jar: Annotated[
        Path | None,
        Parameter(
            name="--bfg-jar",
            help="Path to the BFG Repo-Cleaner jar.",
            env_var="CLAUDE_CLEANER_BFG_JAR",
            group=tools_group,
        ),
    ] = None
    java: Annotated[
        str | None,
        Parameter(
            name="--java",
            help="Java executable used to run BFG.",
            env_var="CLAUDE_CLEANER_JAVA",
            group=tools_group,
        ),
    ] = None
    preview_limit: Annotated[
        int,
        Parameter(
            name="--preview-limit",
            help="Number of cleaned commit messages to preview.",
            validator=validators.Number(gte=1),
            group=output_group,
        ),
    ] = DEFAULT_PREVIEW_LIMIT
    json_output: Annotated[
        bool,
        Parameter(
            name="--json",
            negative="",
            help="Print the full result as JSON instead of tables.",
            group=output_group,
        ),
    ] = False


_DEFAULT_REPO = Path()
_DEFAULT_CLEAN_OPTIONS = CleanOptions()


def clean_command(
    repo: Annotated[
        Path,
        Parameter(help="Repository to clean (defaults to the current directory)."),
    ] = _DEFAULT_REPO,
    options: Annotated[CleanOptions, Parameter(name="*")] = _DEFAULT_CLEAN_OPTIONS,
) -> CliResult:
    """Remove Claude artifacts from a repository's history.

    Runs as a dry run unless ``--execute`` is given.

    Returns
    -------
    CliResult
        Summary and backup refs of the run.
    """
    validate_phase_flags(files_only=options.files_only, commits_only=options.commits_only)
    validate_selection_flags(
        use_defaults=options.use_defaults,
        extended=options.include_all_common_patterns,
    )
    custom_dirs = load_custom_dirs(options.include_dirs, pattern_file=options.include_dirs_file)
    selector = TargetSelector(
        SelectionConfig(
            custom_dirs=custom_dirs,
            use_defaults=options.use_defaults,
            extended=options.include_all_common_patterns,
        )
    )
    plumbing = RepositoryPlumbing(require_git_context(repo))
    runner = PipelineRunner(
        plumbing,
        selector=selector,
        bfg=resolve_bfg_tool(options.bfg_jar, java=options.java),
        options=PipelineOptions(
            dry_run=not options.execute,
            branch=options.branch,
            preview_limit=options.preview_limit,
        ),
    )
    logger.info(
        "Cleaning %s (%s, selection: %s)",
        plumbing.repo_root,
        "dry run" if runner.dry_run else "execute",
        selector.mode,
    )
    result = run_phases(
        runner,
        files_only=options.files_only,
        commits_only=options.commits_only,
    )
    if options.json_output:
        sys.stdout.write(dumps_json(result, pretty=True).decode("utf-8") + "\n")
        return CliResult.success(counts=result_counts(result))
    render_result(Console(), result)
    return CliResult.success(
        summary=result_summary(result),
        backups=result_backups(result),
        counts=result_counts(result),
    )


def run_phases(
    runner: PipelineRunner,
    *,
    files_only: bool = False,
    commits_only: bool = False,
) -> PipelineResult:
    """Run the phases selected by the phase flags.

    Returns
    -------
    PipelineResult
        Outcomes of the phases that ran.
    """
    if files_only:
        return PipelineResult(dry_run=runner.dry_run, files=runner.run_files())
    if commits_only:
        return PipelineResult(dry_run=runner.dry_run, commits=runner.run_commits())
    return runner.run_all()


def result_summary(result: PipelineResult) -> str:
    if result.dry_run:
        return "Dry run complete. Re-run with --execute to apply these changes."
    if result_backups(result):
        return "Cleaning complete. Undo a phase with `git reset --hard <backup>`."
    return "Cleaning complete. Nothing needed to change."


def result_backups(result: PipelineResult) -> dict[str, str]:
    backups: dict[str, str] = {}
    if result.files is not None and result.files.backup is not None:
        backups["files"] = result.files.backup.short_name
    if result.commits is not None and result.commits.backup is not None:
        backups["commits"] = result.commits.backup.short_name
    return backups


def result_counts(result: PipelineResult) -> dict[str, int]:
    counts: dict[str, int] = {}
    if result.files is not None:
        counts["candidates"] = len(result.files.candidates)
    if result.commits is not None:
        counts["affected_commits"] = result.commits.analysis.affected_commits
        counts["trailers_removed"] = result.commits.analysis.trailers_removed
    return counts


__all__ = ["CleanOptions", "clean_command", "run_phases"]
