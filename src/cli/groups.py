"""Shared help-panel groups for the claude-cleaner CLI."""

from __future__ import annotations

from cyclopts import Group

session_group = Group(
    "Session",
    help="Logging and configuration file options.",
    sort_key=0,
)

execution_group = Group(
    "Execution",
    help="Choose between dry run and execution, and which phases run.",
    sort_key=1,
)

selection_group = Group(
    "Selection",
    help="Control which historical paths are removed.",
    sort_key=2,
)

tools_group = Group(
    "Tools",
    help="Locate the external tools used in execute mode.",
    sort_key=3,
)

output_group = Group(
    "Output",
    help="Control how results are reported.",
    sort_key=4,
)

__all__ = [
    "execution_group",
    "output_group",
    "selection_group",
    "session_group",
    "tools_group",
]
