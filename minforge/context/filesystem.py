"""Local-filesystem implementation of the BuildContext protocol."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from rich.console import Console

from minforge.config import Settings
from minforge.context.atomic import atomic_write
from minforge.context.delta_cache import DeltaCache
from minforge.context.patterns import scan as scan_directory
from minforge.models.diagnostics import Diagnostic
from minforge.reporting.console import ConsoleReporter
from minforge.reporting.dispatcher import ReporterDispatcher
from minforge.reporting.json_report import JsonReportReporter
from minforge.reporting.log_reporter import LogReporter

logger = logging.getLogger(__name__)

# Text is decoded with surrogateescape so undecodable bytes survive a
# passthrough round-trip unchanged.
SOURCE_ENCODING = "utf-8"
SOURCE_ERRORS = "surrogateescape"


class FilesystemBuildContext:
    """BuildContext backed by the local disk.

    Parameters
    ----------
    dispatcher:
        Receives every reported diagnostic.  Defaults to an empty dispatcher.
    delta_cache:
        Enables ``has_delta`` change detection across runs.  Without it
        every file is considered changed.
    """

    def __init__(
        self,
        *,
        dispatcher: ReporterDispatcher | None = None,
        delta_cache: DeltaCache | None = None,
    ) -> None:
        self.dispatcher = dispatcher or ReporterDispatcher()
        self.delta_cache = delta_cache

    @classmethod
    def from_settings(
        cls, settings: Settings, console: Console | None = None
    ) -> FilesystemBuildContext:
        """Build a context with the reporters and delta cache *settings* ask for."""
        dispatcher = ReporterDispatcher()
        if settings.console_diagnostics:
            dispatcher.register(ConsoleReporter(console))
        else:
            dispatcher.register(LogReporter())
        if settings.report_path is not None:
            dispatcher.register(JsonReportReporter(settings.resolve(settings.report_path)))

        delta_cache = None
        if settings.delta_cache_path is not None:
            delta_cache = DeltaCache(settings.resolve(settings.delta_cache_path))
        return cls(dispatcher=dispatcher, delta_cache=delta_cache)

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def scan(
        self, root: Path, includes: Iterable[str], excludes: Iterable[str]
    ) -> list[str]:
        return scan_directory(Path(root), includes, excludes)

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    def is_uptodate(self, artifact: Path, source: Path) -> bool:
        try:
            artifact_mtime = Path(artifact).stat().st_mtime_ns
        except FileNotFoundError:
            return False
        try:
            source_mtime = Path(source).stat().st_mtime_ns
        except FileNotFoundError:
            return False
        return artifact_mtime >= source_mtime

    def read_text(self, source: Path) -> str:
        return Path(source).read_bytes().decode(SOURCE_ENCODING, SOURCE_ERRORS)

    def open_for_write(self, artifact: Path):
        logger.debug("Opening %s for atomic write", artifact)
        return atomic_write(Path(artifact))

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def report_diagnostic(self, diagnostic: Diagnostic) -> None:
        self.dispatcher.report(diagnostic)

    def remove_messages(self, source: Path) -> None:
        self.dispatcher.clear(source)

    # ------------------------------------------------------------------
    # Incremental state
    # ------------------------------------------------------------------

    def has_delta(self, source: Path, fingerprint: str = "") -> bool:
        if self.delta_cache is None:
            return True
        return self.delta_cache.has_changed(source, fingerprint)

    def remember_diagnostics(
        self, source: Path, fingerprint: str, diagnostics: list[Diagnostic]
    ) -> None:
        if self.delta_cache is not None:
            self.delta_cache.record(source, fingerprint, diagnostics)

    def recall_diagnostics(self, source: Path) -> list[Diagnostic]:
        if self.delta_cache is None:
            return []
        return self.delta_cache.diagnostics_for(source)

    def finish(self) -> None:
        if self.delta_cache is not None:
            self.delta_cache.save()
        self.dispatcher.flush()
