"""Error taxonomy for batch runs.

Every error a run can end in derives from ``MinforgeError`` so the
BatchRunner can capture it on the result without swallowing unrelated
programming errors.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from minforge.models.diagnostics import Diagnostic


class MinforgeError(RuntimeError):
    """Base class for all run-terminating errors."""


class ConfigurationError(MinforgeError):
    """Missing required source directory or conflicting options."""


class NoSourcesError(MinforgeError):
    """Sources are required but none were resolved."""


class TransformError(MinforgeError):
    """A single source failed to parse or minify.

    Carries the ERROR diagnostic locating the problem.
    """

    def __init__(self, diagnostic: Diagnostic) -> None:
        super().__init__(diagnostic.format())
        self.diagnostic = diagnostic

    @property
    def source(self) -> Path:
        return self.diagnostic.source


class ArtifactIOError(MinforgeError):
    """Read or write failure on a source or output artifact."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class LintFailure(MinforgeError):
    """Lint verdict was negative and the fail policy requires failing."""

    def __init__(self, message: str, diagnostics: list[Diagnostic] | None = None) -> None:
        super().__init__(message)
        self.diagnostics = list(diagnostics or [])
