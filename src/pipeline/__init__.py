"""Cleaning pipeline: state machine and phase runner."""

from __future__ import annotations

from pipeline.runner import (
    CommitsOutcome,
    FilesOutcome,
    PipelineOptions,
    PipelineResult,
    PipelineRunner,
)
from pipeline.states import PipelineState, PipelineStateMachine

__all__ = [
    "CommitsOutcome",
    "FilesOutcome",
    "PipelineOptions",
    "PipelineResult",
    "PipelineRunner",
    "PipelineState",
    "PipelineStateMachine",
]
