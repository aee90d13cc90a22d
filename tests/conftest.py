"""Shared test fixtures for minforge."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import pytest

from minforge.config import Settings
from minforge.context.delta_cache import DeltaCache
from minforge.context.filesystem import FilesystemBuildContext
from minforge.core.batch_runner import BatchRunner
from minforge.core.diagnostic_sink import DiagnosticSink
from minforge.models.diagnostics import Diagnostic, Severity
from minforge.models.sources import SourceFile
from minforge.reporting.dispatcher import ReporterDispatcher
from minforge.transforms.css import CssMinifyTransform
from minforge.transforms.js import JsMinifyTransform
from minforge.transforms.lint import LintTransform

from fakes import FakeCssEngine, FakeJsEngine, FakeLintEngine, RecordingReporter

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Provide a temporary project directory."""
    return tmp_path


@pytest.fixture
def recorder() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def delta_cache(tmp_dir: Path) -> DeltaCache:
    return DeltaCache(tmp_dir / ".minforge" / "delta-cache.json")


@pytest.fixture
def context(recorder: RecordingReporter, delta_cache: DeltaCache) -> FilesystemBuildContext:
    """Provide a filesystem context reporting into ``recorder``."""
    return FilesystemBuildContext(
        dispatcher=ReporterDispatcher([recorder]),
        delta_cache=delta_cache,
    )


@pytest.fixture
def settings(tmp_dir: Path) -> Settings:
    return Settings(base_dir=tmp_dir, jobs=1, report_path=None, console_diagnostics=False)


@pytest.fixture
def batch_runner(context: FilesystemBuildContext, settings: Settings) -> BatchRunner:
    return BatchRunner(context, settings=settings)


@pytest.fixture
def sink(context: FilesystemBuildContext) -> DiagnosticSink:
    return DiagnosticSink(context)


@pytest.fixture
def css_transform() -> CssMinifyTransform:
    return CssMinifyTransform(engine=FakeCssEngine())


@pytest.fixture
def js_transform() -> JsMinifyTransform:
    return JsMinifyTransform(engine=FakeJsEngine())


@pytest.fixture
def lint_engine() -> FakeLintEngine:
    return FakeLintEngine()


@pytest.fixture
def lint_transform(lint_engine: FakeLintEngine) -> LintTransform:
    return LintTransform(engine=lint_engine)


@pytest.fixture
def write_source(tmp_dir: Path) -> Callable[..., Path]:
    """Factory fixture: write a file under the project directory.

    ``mtime_ns`` pins the modification time, so tests never depend on
    filesystem timestamp resolution.
    """

    def _factory(relative: str, content: str | bytes = "", mtime_ns: int | None = None) -> Path:
        path = tmp_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_bytes(content.encode("utf-8"))
        if mtime_ns is not None:
            os.utime(path, ns=(mtime_ns, mtime_ns))
        return path

    return _factory


@pytest.fixture
def set_mtime() -> Callable[[Path, int], None]:
    def _set(path: Path, mtime_ns: int) -> None:
        os.utime(path, ns=(mtime_ns, mtime_ns))

    return _set


@pytest.fixture
def make_source(tmp_dir: Path) -> Callable[..., SourceFile]:
    """Factory fixture: a SourceFile for a (possibly non-existent) path."""

    def _factory(name: str = "a.js", relative_path: str | None = None) -> SourceFile:
        return SourceFile(path=tmp_dir / name, relative_path=relative_path)

    return _factory


@pytest.fixture
def make_diagnostic(tmp_dir: Path) -> Callable[..., Diagnostic]:
    def _factory(
        name: str = "a.js",
        line: int = 1,
        column: int = 1,
        message: str = "Unexpected token",
        severity: Severity = Severity.ERROR,
    ) -> Diagnostic:
        return Diagnostic(
            source=tmp_dir / name,
            line=line,
            column=column,
            message=message,
            severity=severity,
        )

    return _factory
