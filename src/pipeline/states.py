"""Pipeline states and the transitions allowed between them."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import StrEnum

from errors import InvalidTransitionError

LOGGER = logging.getLogger(__name__)


class PipelineState(StrEnum):
    """Lifecycle of one cleaning phase."""

    IDLE = "idle"
    VALIDATING = "validating"
    BACKING_UP = "backing_up"
    SCANNING = "scanning"
    ANALYZING = "analyzing"
    PREVIEWING = "previewing"
    MUTATING = "mutating"
    VERIFYING = "verifying"
    DONE = "done"
    FAILED = "failed"


TERMINAL_STATES = frozenset({PipelineState.PREVIEWING, PipelineState.DONE, PipelineState.FAILED})

TRANSITIONS: Mapping[PipelineState, frozenset[PipelineState]] = {
    PipelineState.IDLE: frozenset({PipelineState.VALIDATING}),
    PipelineState.VALIDATING: frozenset(
        {PipelineState.BACKING_UP, PipelineState.SCANNING, PipelineState.ANALYZING}
    ),
    PipelineState.BACKING_UP: frozenset({PipelineState.SCANNING, PipelineState.ANALYZING}),
    PipelineState.SCANNING: frozenset(
        {PipelineState.PREVIEWING, PipelineState.MUTATING, PipelineState.DONE}
    ),
    PipelineState.ANALYZING: frozenset(
        {PipelineState.PREVIEWING, PipelineState.MUTATING, PipelineState.DONE}
    ),
    PipelineState.MUTATING: frozenset({PipelineState.VERIFYING}),
    PipelineState.VERIFYING: frozenset({PipelineState.DONE}),
}


class PipelineStateMachine:
    """Track one phase and reject out-of-order transitions.

    Every non-terminal state may move to ``FAILED``.
    """

    def __init__(self, name: str = "pipeline") -> None:
        self.name = name
        self._state = PipelineState.IDLE
        self._history: list[PipelineState] = [PipelineState.IDLE]

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def history(self) -> tuple[PipelineState, ...]:
        return tuple(self._history)

    @property
    def is_terminal(self) -> bool:
        return self._state in TERMINAL_STATES

    def can_advance(self, target: PipelineState) -> bool:
        if self.is_terminal:
            return False
        if target == PipelineState.FAILED:
            return True
        return target in TRANSITIONS.get(self._state, frozenset())

    def advance(self, target: PipelineState) -> None:
        """Move to ``target``.

        Raises
        ------
        InvalidTransitionError
            Raised when ``target`` is not reachable from the current state.
        """
        if not self.can_advance(target):
            msg = f"{self.name}: illegal transition {self._state} -> {target}"
            raise InvalidTransitionError(msg)
        LOGGER.debug("%s: %s -> %s", self.name, self._state, target)
        self._state = target
        self._history.append(target)

    def fail(self) -> None:
        """Move to ``FAILED`` unless already terminal."""
        if not self.is_terminal:
            self.advance(PipelineState.FAILED)


__all__ = ["TERMINAL_STATES", "TRANSITIONS", "PipelineState", "PipelineStateMachine"]
