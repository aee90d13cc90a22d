"""Diagnostic models: per-file, per-location problems reported by engines."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    """Blocking (ERROR) or advisory (WARNING)."""

    ERROR = "error"
    WARNING = "warning"


class Diagnostic(BaseModel):
    """A single problem located in a source file.

    ``line`` is 1-based.  ``column`` is 1-based, with 0 meaning the column
    is unknown.  A ``line`` of 0 marks a file-level diagnostic.
    """

    model_config = ConfigDict(frozen=True)

    source: Path
    line: int = Field(default=0, ge=0)
    column: int = Field(default=0, ge=0)
    message: str
    severity: Severity = Severity.ERROR

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def with_severity(self, severity: Severity) -> Diagnostic:
        """Return a copy reclassified to *severity*."""
        if severity == self.severity:
            return self
        return self.model_copy(update={"severity": severity})

    def format(self) -> str:
        """Render as ``path:line:column: severity: message``."""
        location = str(self.source)
        if self.line:
            location += f":{self.line}"
            if self.column:
                location += f":{self.column}"
        return f"{location}: {self.severity.value}: {self.message}"
