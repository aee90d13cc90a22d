"""JSON report reporter: keeps the current diagnostics of every file on disk.

Layout::

    {"files": {"<path>": [<diagnostic>, ...]}, "summary": {...}}

Diagnostics for a file are replaced when the file is cleared and reported
again, so the report reflects the latest lint of each file.  Reporting a
diagnostic the file already holds is a no-op, so repeated aggregate runs
that only add do not pile up copies.  Earlier entries for files not
touched by this run are kept.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from minforge.context.atomic import atomic_write
from minforge.core.hasher import canonical_json_bytes
from minforge.models.diagnostics import Diagnostic, Severity

logger = logging.getLogger(__name__)


class JsonReportReporter:
    """Writes a canonical-JSON diagnostics report on ``flush()``.

    Parameters
    ----------
    report_path:
        Target file.  Parent directories are created on flush.
    """

    def __init__(self, report_path: Path) -> None:
        self._path = Path(report_path)
        self._files: dict[str, list[dict]] = self._load()

    @property
    def reporter_name(self) -> str:
        return "json_report"

    @property
    def path(self) -> Path:
        return self._path

    def report(self, diagnostic: Diagnostic) -> None:
        entries = self._files.setdefault(str(diagnostic.source), [])
        entry = diagnostic.model_dump(mode="json")
        if entry not in entries:
            entries.append(entry)

    def clear(self, source: Path) -> None:
        self._files.pop(str(source), None)

    def flush(self) -> None:
        entries = [d for diagnostics in self._files.values() for d in diagnostics]
        payload = {
            "files": {path: diags for path, diags in self._files.items() if diags},
            "summary": {
                "errors": sum(1 for d in entries if d["severity"] == Severity.ERROR.value),
                "warnings": sum(1 for d in entries if d["severity"] == Severity.WARNING.value),
            },
        }
        with atomic_write(self._path) as handle:
            handle.write(canonical_json_bytes(payload))
        logger.debug("JsonReportReporter: wrote %d entries to %s", len(entries), self._path)

    def _load(self) -> dict[str, list[dict]]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_bytes())
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable report %s: %s", self._path, exc)
            return {}
        files = data.get("files", {}) if isinstance(data, dict) else {}
        return {path: list(diags) for path, diags in files.items() if isinstance(diags, list)}
