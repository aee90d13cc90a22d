"""ReporterDispatcher: routes diagnostics to ALL registered reporters.

Reporter failures are logged but do not prevent delivery to the remaining
reporters.  Only when every reporter fails is the failure raised.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from minforge.models.diagnostics import Diagnostic

if TYPE_CHECKING:
    from minforge.reporting import DiagnosticReporter

logger = logging.getLogger(__name__)


class ReporterDispatchError(RuntimeError):
    """Raised when every registered reporter fails for one call."""


class ReporterDispatcher:
    """Routes diagnostics to ALL registered reporters.

    Usage
    -----
    >>> dispatcher = ReporterDispatcher()
    >>> dispatcher.register(LogReporter())
    >>> dispatcher.report(diagnostic)
    """

    def __init__(self, reporters: list[DiagnosticReporter] | None = None) -> None:
        self._reporters: list[DiagnosticReporter] = []
        for reporter in reporters or []:
            self.register(reporter)

    # ------------------------------------------------------------------
    # Reporter management
    # ------------------------------------------------------------------

    def register(self, reporter: DiagnosticReporter) -> None:
        """Register a reporter.  Duplicate registration is ignored."""
        if reporter not in self._reporters:
            self._reporters.append(reporter)
            logger.debug("Registered reporter: %s", reporter.reporter_name)

    @property
    def reporters(self) -> list[DiagnosticReporter]:
        """Return a copy of the registered reporter list."""
        return list(self._reporters)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def report(self, diagnostic: Diagnostic) -> list[str]:
        """Send *diagnostic* to every reporter; return the names that succeeded."""
        return self._fan_out("report", lambda r: r.report(diagnostic))

    def clear(self, source: Path) -> list[str]:
        return self._fan_out("clear", lambda r: r.clear(source))

    def flush(self) -> list[str]:
        return self._fan_out("flush", lambda r: r.flush())

    def _fan_out(
        self, action: str, call: Callable[[DiagnosticReporter], None]
    ) -> list[str]:
        if not self._reporters:
            return []

        succeeded: list[str] = []
        errors: list[tuple[str, Exception]] = []

        for reporter in self._reporters:
            try:
                call(reporter)
                succeeded.append(reporter.reporter_name)
            except Exception as exc:  # noqa: BLE001
                logger.error(
                    "Reporter %s failed during %s: %s",
                    reporter.reporter_name,
                    action,
                    exc,
                )
                errors.append((reporter.reporter_name, exc))

        if errors and not succeeded:
            raise ReporterDispatchError(
                f"All {len(errors)} reporters failed during {action}: "
                + "; ".join(f"{name}: {exc}" for name, exc in errors)
            )

        return succeeded
