"""DiagnosticSink: per-file diagnostics with replace-on-record semantics.

Recording diagnostics for a file discards whatever was recorded for that
file before.  A sink that owns the host messages also clears them on the
build context before forwarding; one that does not only adds to them, so
an aggregate run leaves the lint findings of its sources in place.
The sink is owned by a single run and passed explicitly to the code that
produces diagnostics.
"""

from __future__ import annotations

import threading
from pathlib import Path

from minforge.context import BuildContext
from minforge.models.diagnostics import Diagnostic, Severity


class DiagnosticSink:
    """Collect diagnostics keyed by source file.

    Parameters
    ----------
    context:
        Optional BuildContext to forward recorded diagnostics to.
    replace_host_messages:
        Call ``remove_messages`` on the context before forwarding.
    """

    def __init__(
        self,
        context: BuildContext | None = None,
        *,
        replace_host_messages: bool = True,
    ) -> None:
        self._context = context
        self.replace_host_messages = replace_host_messages
        self._by_file: dict[Path, list[Diagnostic]] = {}
        self._lock = threading.Lock()

    def record(
        self,
        source: Path,
        diagnostics: list[Diagnostic],
        *,
        severity: Severity | None = None,
    ) -> list[Diagnostic]:
        """Replace the diagnostics of *source* with *diagnostics*.

        When *severity* is given every diagnostic is reclassified to it
        before being stored.  An empty list clears the file.  Returns the
        stored list.
        """
        stored = [
            d.with_severity(severity) if severity is not None else d
            for d in diagnostics
        ]
        with self._lock:
            if stored:
                self._by_file[source] = stored
            else:
                self._by_file.pop(source, None)
            if self._context is not None:
                if self.replace_host_messages:
                    self._context.remove_messages(source)
                for diagnostic in stored:
                    self._context.report_diagnostic(diagnostic)
        return list(stored)

    def clear(self, source: Path) -> None:
        self.record(source, [])

    def diagnostics_for(self, source: Path) -> list[Diagnostic]:
        with self._lock:
            return list(self._by_file.get(source, []))

    def files(self) -> list[Path]:
        with self._lock:
            return list(self._by_file)

    def all(self) -> list[Diagnostic]:
        """All diagnostics, grouped by file in first-recorded order."""
        with self._lock:
            return [d for diagnostics in self._by_file.values() for d in diagnostics]

    def verdict(self, fail_on_warnings: bool = False) -> bool:
        """True iff no ERROR exists and, with *fail_on_warnings*, nothing at all."""
        diagnostics = self.all()
        if fail_on_warnings:
            return not diagnostics
        return not any(d.severity == Severity.ERROR for d in diagnostics)
