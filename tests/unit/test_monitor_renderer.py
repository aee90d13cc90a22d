"""Tests for the Rich result renderer."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.panel import Panel

from minforge.core.errors import LintFailure
from minforge.models.diagnostics import Severity
from minforge.models.runs import BatchMode, BatchResult, RunState
from minforge.monitor.renderer import ResultRenderer


def _render(result: BatchResult) -> str:
    console = Console(record=True, width=160)
    ResultRenderer(console).print_result(result)
    return console.export_text()


class TestResultRenderer:
    def test_render_returns_panel(self):
        result = BatchResult(mode=BatchMode.AGGREGATE, state=RunState.DONE, passed=True)
        assert isinstance(ResultRenderer().render_result(result), Panel)

    def test_done_summary(self):
        result = BatchResult(
            mode=BatchMode.AGGREGATE,
            state=RunState.DONE,
            passed=True,
            output=Path("target/all.js"),
            sources=[Path("a.js"), Path("b.js")],
            processed=[Path("a.js"), Path("b.js")],
            message="Completed",
        )
        text = _render(result)
        assert "minforge aggregate" in text
        assert "DONE" in text
        assert "Sources: 2" in text
        assert "target/all.js" in text

    def test_skipped_state_shown(self):
        result = BatchResult(
            mode=BatchMode.AGGREGATE,
            state=RunState.DONE,
            passed=True,
            skipped=True,
            message="Skipped: output up to date",
        )
        text = _render(result)
        assert "SKIPPED" in text
        assert "output up to date" in text

    def test_failure_with_diagnostics(self, make_diagnostic):
        result = BatchResult(
            mode=BatchMode.LINT,
            state=RunState.FAILED,
            passed=False,
            diagnostics=[
                make_diagnostic(line=4, column=2, message="Missing [semicolon]"),
                make_diagnostic("b.js", line=0, column=0, message="odd", severity=Severity.WARNING),
            ],
            message="There were lint errors in 1 file(s)",
            error=LintFailure("There were lint errors in 1 file(s)"),
        )
        text = _render(result)
        assert "FAILED" in text
        assert "Errors: 1" in text
        assert "Warnings: 1" in text
        assert "Missing [semicolon]" in text
        assert "There were lint errors" in text

    def test_print_results(self):
        console = Console(record=True, width=120)
        results = [
            BatchResult(mode=BatchMode.LINT, state=RunState.DONE, passed=True),
            BatchResult(mode=BatchMode.AGGREGATE, state=RunState.DONE, passed=True),
        ]
        ResultRenderer(console).print_results(results)
        text = console.export_text()
        assert "minforge lint" in text
        assert "minforge aggregate" in text
