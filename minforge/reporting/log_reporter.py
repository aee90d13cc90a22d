"""Log reporter: writes each diagnostic to the ``minforge.diagnostics`` logger."""

from __future__ import annotations

import logging
from pathlib import Path

from minforge.models.diagnostics import Diagnostic, Severity

logger = logging.getLogger("minforge.diagnostics")


class LogReporter:
    """Emit ERROR diagnostics at ERROR level and WARNING ones at WARNING."""

    @property
    def reporter_name(self) -> str:
        return "log"

    def report(self, diagnostic: Diagnostic) -> None:
        level = logging.ERROR if diagnostic.severity == Severity.ERROR else logging.WARNING
        logger.log(level, "%s", diagnostic.format())

    def clear(self, source: Path) -> None:
        pass

    def flush(self) -> None:
        pass
