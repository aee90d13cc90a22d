"""Build context: the host capabilities a batch run consumes.

The BatchRunner never touches the filesystem or the problem-reporting
surface directly; it goes through a ``BuildContext``.  The default
``FilesystemBuildContext`` works on the local disk; an IDE or build-tool
integration supplies its own implementation.
"""

from __future__ import annotations

from collections.abc import Iterable
from contextlib import AbstractContextManager
from pathlib import Path
from typing import BinaryIO, Protocol, runtime_checkable

from minforge.models.diagnostics import Diagnostic


@runtime_checkable
class BuildContext(Protocol):
    """Protocol for the host collaborator of a batch run."""

    def scan(
        self, root: Path, includes: Iterable[str], excludes: Iterable[str]
    ) -> list[str]:
        """Return relative paths under *root*, default excludes applied, in order."""
        ...

    def exists(self, path: Path) -> bool:
        ...

    def is_uptodate(self, artifact: Path, source: Path) -> bool:
        """Return True if *artifact* exists and is not older than *source*."""
        ...

    def read_text(self, source: Path) -> str:
        """Read the full text of *source*.  Raises ``OSError``."""
        ...

    def open_for_write(self, artifact: Path) -> AbstractContextManager[BinaryIO]:
        """Open *artifact* for an all-or-nothing write, creating parents."""
        ...

    def report_diagnostic(self, diagnostic: Diagnostic) -> None:
        ...

    def remove_messages(self, source: Path) -> None:
        """Forget previously reported diagnostics for *source*."""
        ...

    def has_delta(self, source: Path, fingerprint: str = "") -> bool:
        """Return True if *source* changed since it was last processed."""
        ...

    def remember_diagnostics(
        self, source: Path, fingerprint: str, diagnostics: list[Diagnostic]
    ) -> None:
        """Store the outcome of processing *source* for later runs."""
        ...

    def recall_diagnostics(self, source: Path) -> list[Diagnostic]:
        """Return the diagnostics stored for *source* by an earlier run."""
        ...

    def finish(self) -> None:
        """Persist incremental state and flush reporters at the end of a run."""
        ...


__all__ = ["BuildContext"]
