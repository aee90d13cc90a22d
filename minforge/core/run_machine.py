"""Batch run state machine.

Enforces:
- Valid state transitions only (VALID_TRANSITIONS table)
- DONE and FAILED are terminal
- FAILED carries the originating error
- Every transition is logged and kept in the run history
"""

from __future__ import annotations

import logging

from minforge.models.runs import (
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    BatchMode,
    RunState,
    RunTransition,
)

logger = logging.getLogger(__name__)


class InvalidTransitionError(RuntimeError):
    """Raised when a requested state transition is not valid."""


class RunMachine:
    """Tracks the state of one batch run.

    Parameters
    ----------
    mode:
        Aggregate or lint; used for log context only.
    """

    def __init__(self, mode: BatchMode) -> None:
        self.mode = mode
        self._state = RunState.IDLE
        self._history: list[RunTransition] = []
        self.error: Exception | None = None

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def history(self) -> list[RunTransition]:
        return list(self._history)

    @property
    def is_terminal(self) -> bool:
        return self._state in TERMINAL_STATES

    def transition(self, target: RunState, reason: str = "") -> RunTransition:
        """Move to *target*, recording the transition.

        Raises ``InvalidTransitionError`` when the move is not allowed
        from the current state.
        """
        current = self._state
        if self.is_terminal:
            raise InvalidTransitionError(
                f"{self.mode.value} run already finished in {current.value}"
            )
        allowed = self.available_transitions()
        if target not in allowed:
            raise InvalidTransitionError(
                f"Cannot transition {self.mode.value} run from {current.value} to {target.value}. "
                f"Allowed: {sorted(s.value for s in allowed)}"
            )

        record = RunTransition(from_state=current, to_state=target, reason=reason)
        self._history.append(record)
        self._state = target
        logger.debug(
            "%s run: %s -> %s%s",
            self.mode.value,
            current.value,
            target.value,
            f" ({reason})" if reason else "",
        )
        return record

    def fail(self, error: Exception) -> RunTransition:
        """Move to FAILED carrying *error*."""
        self.error = error
        return self.transition(RunState.FAILED, str(error))

    def skip(self, reason: str) -> None:
        """Move through SKIPPED to DONE."""
        self.transition(RunState.SKIPPED, reason)
        self.transition(RunState.DONE)

    def available_transitions(self) -> set[RunState]:
        return set(VALID_TRANSITIONS.get(self._state, set()))
