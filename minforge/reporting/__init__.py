"""Reporter protocol for minforge diagnostic reporting.

All reporters implement the ``DiagnosticReporter`` protocol.  The
ReporterDispatcher fans every diagnostic out to every registered reporter,
the way a host build tool surfaces problems as console lines and IDE
markers at the same time.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from minforge.models.diagnostics import Diagnostic


@runtime_checkable
class DiagnosticReporter(Protocol):
    """Protocol that every minforge reporter must implement.

    Attributes
    ----------
    reporter_name : str
        A unique human-readable identifier (e.g. ``"console"``).
    """

    @property
    def reporter_name(self) -> str:
        """Return the unique name of this reporter."""
        ...

    def report(self, diagnostic: Diagnostic) -> None:
        """Surface a single diagnostic."""
        ...

    def clear(self, source: Path) -> None:
        """Forget everything previously reported for *source*."""
        ...

    def flush(self) -> None:
        """Persist buffered state at the end of a run."""
        ...
