"""Rich rendering of scan and analysis results."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from commits.analyzer import AnalysisResult
from core_types import short_id
from pipeline.runner import CommitsOutcome, FilesOutcome, PipelineResult
from scan.models import Candidate
from utils.process import format_command


def render_candidates(console: Console, candidates: Sequence[Candidate]) -> None:
    """Print one row per candidate with its reason and first change."""
    if not candidates:
        console.print("[green]No matching files found in history.[/green]")
        return
    table = Table(title=f"Paths to remove from history ({len(candidates)})")
    table.add_column("Path", style="cyan", overflow="fold")
    table.add_column("Kind")
    table.add_column("Reason")
    table.add_column("First added")
    for candidate in candidates:
        change = candidate.earliest_change
        first = "n/a" if change is None else f"{short_id(change.id)} {change.summary}"
        table.add_row(candidate.path, candidate.kind.value, candidate.reason, first)
    console.print(table)


def render_analysis(console: Console, analysis: AnalysisResult) -> None:
    """Print commit counts followed by the capped message previews."""
    if not analysis.has_changes:
        console.print(
            f"[green]No trailers found in {analysis.total_commits} commits "
            f"on {analysis.branch}.[/green]"
        )
        return
    console.print(
        f"{analysis.affected_commits} of {analysis.total_commits} commits on "
        f"{analysis.branch} carry trailers ({analysis.trailers_removed} to remove)."
    )
    table = Table(title="Commit message preview")
    table.add_column("Commit", style="cyan")
    table.add_column("Trailers")
    table.add_column("Original")
    table.add_column("Cleaned")
    for preview in analysis.preview:
        table.add_row(
            preview.short_id,
            str(len(preview.trailers_found)),
            preview.original_message.rstrip(),
            preview.cleaned_message.rstrip(),
        )
    console.print(table)
    hidden = analysis.affected_commits - len(analysis.preview)
    if hidden > 0:
        console.print(f"... and {hidden} more commits")


def render_files_outcome(console: Console, outcome: FilesOutcome, *, dry_run: bool) -> None:
    render_candidates(console, outcome.candidates)
    if dry_run and outcome.commands:
        console.print("[bold]Commands that would run:[/bold]")
        for command in outcome.commands:
            console.print(f"  {format_command(command)}", highlight=False, markup=False)
    if outcome.remaining is not None:
        console.print(f"Verification: {outcome.remaining} matching paths remain in history")


def render_commits_outcome(console: Console, outcome: CommitsOutcome) -> None:
    render_analysis(console, outcome.analysis)
    if outcome.rewrite is not None:
        console.print(f"Rewrote {outcome.rewrite.revision_range}", highlight=False)
    if outcome.remaining is not None:
        console.print(f"Verification: {outcome.remaining} commits still carry trailers")


def render_result(console: Console, result: PipelineResult) -> None:
    """Print every phase present in ``result``."""
    if result.dry_run:
        console.print("[yellow]DRY RUN: no changes will be made.[/yellow]")
    if result.files is not None:
        render_files_outcome(console, result.files, dry_run=result.dry_run)
    if result.commits is not None:
        render_commits_outcome(console, result.commits)


__all__ = ["render_analysis", "render_candidates", "render_result"]
