"""Batch run state machine models and the batch result."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from minforge.models.diagnostics import Diagnostic, Severity


class RunState(str, Enum):
    """States of a single batch run."""

    IDLE = "idle"
    RESOLVING = "resolving"
    CHECKING = "checking"
    SKIPPED = "skipped"
    PROCESSING = "processing"
    FLUSHING = "flushing"
    DONE = "done"
    FAILED = "failed"


class BatchMode(str, Enum):
    AGGREGATE = "aggregate"
    LINT = "lint"


# Enforced by RunMachine.  DONE and FAILED are terminal.
VALID_TRANSITIONS: dict[RunState, set[RunState]] = {
    RunState.IDLE: {RunState.RESOLVING},
    RunState.RESOLVING: {RunState.CHECKING, RunState.SKIPPED, RunState.FAILED},
    RunState.CHECKING: {RunState.PROCESSING, RunState.SKIPPED, RunState.FAILED},
    RunState.SKIPPED: {RunState.DONE},
    RunState.PROCESSING: {RunState.FLUSHING, RunState.FAILED},
    RunState.FLUSHING: {RunState.DONE, RunState.FAILED},
    RunState.DONE: set(),
    RunState.FAILED: set(),
}

TERMINAL_STATES: frozenset[RunState] = frozenset({RunState.DONE, RunState.FAILED})


class RunTransition(BaseModel):
    """Records a single state transition of a run."""

    model_config = ConfigDict(frozen=True)

    from_state: RunState
    to_state: RunState
    reason: str = ""
    timestamp_utc: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )


class BatchResult(BaseModel):
    """Outcome of one batch run, surfaced to the host.

    ``passed`` is the run outcome after the fail policy was applied.
    ``error`` carries the originating exception when the run FAILED.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    mode: BatchMode
    state: RunState
    passed: bool
    skipped: bool = False
    output: Path | None = None
    sources: list[Path] = []
    processed: list[Path] = []
    diagnostics: list[Diagnostic] = []
    history: list[RunTransition] = []
    message: str = ""
    error: Exception | None = None

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == Severity.WARNING)

    def raise_for_failure(self) -> None:
        """Re-raise the originating error if the run failed."""
        if self.error is not None:
            raise self.error
