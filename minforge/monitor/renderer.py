"""Rich terminal renderer for batch results.

Turns ``BatchResult`` into Rich renderables: a summary panel per run and a
table of the diagnostics it recorded.

Color scheme
------------
- green     : DONE
- red       : FAILED
- dim       : SKIPPED / intermediate states
"""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from minforge.models.diagnostics import Severity
from minforge.models.runs import BatchResult, RunState

# ---------------------------------------------------------------------------
# State -> Rich style mapping
# ---------------------------------------------------------------------------

_STATE_ICONS: dict[RunState, str] = {
    RunState.DONE: "[green]DONE[/green]",
    RunState.FAILED: "[bold red]FAILED[/bold red]",
    RunState.SKIPPED: "[dim]SKIPPED[/dim]",
}

_SEVERITY_STYLES: dict[Severity, str] = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
}


class ResultRenderer:
    """Renders ``BatchResult`` as Rich terminal output.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_result(self, result: BatchResult) -> Panel:
        """Render one result as a Panel with a diagnostics table."""
        state = RunState.SKIPPED if result.skipped else result.state
        summary_parts: list[str] = [
            f"[bold]State:[/bold] {_STATE_ICONS.get(state, state.value)}",
            f"[bold]Sources:[/bold] {len(result.sources)}",
            f"[bold]Processed:[/bold] {len(result.processed)}",
            f"[bold]Errors:[/bold] {result.error_count}",
            f"[bold]Warnings:[/bold] {result.warning_count}",
        ]
        if result.output is not None:
            summary_parts.append(f"[bold]Output:[/bold] {escape(str(result.output))}")

        parts: list = [Text.from_markup("  |  ".join(summary_parts))]
        if result.diagnostics:
            parts.extend([Text(""), self._build_diagnostic_table(result)])
        if result.message:
            style = "red" if not result.passed else "dim"
            parts.extend([Text(""), Text(result.message, style=style)])

        return Panel(
            Group(*parts),
            title=f"[bold]minforge {result.mode.value}[/bold]",
            border_style="green" if result.passed else "red",
            padding=(1, 2),
        )

    def _build_diagnostic_table(self, result: BatchResult) -> Table:
        table = Table(show_header=True, header_style="bold cyan", expand=True)
        table.add_column("File", min_width=20)
        table.add_column("Line", justify="right", width=6)
        table.add_column("Col", justify="right", width=5)
        table.add_column("Severity", width=9)
        table.add_column("Message", min_width=20)

        for diagnostic in result.diagnostics:
            style = _SEVERITY_STYLES[diagnostic.severity]
            table.add_row(
                escape(str(diagnostic.source)),
                str(diagnostic.line) if diagnostic.line else "-",
                str(diagnostic.column) if diagnostic.column else "-",
                f"[{style}]{diagnostic.severity.value}[/{style}]",
                escape(diagnostic.message),
            )
        return table

    def print_result(self, result: BatchResult) -> None:
        self.console.print(self.render_result(result))

    def print_results(self, results: Iterable[BatchResult]) -> None:
        for result in results:
            self.print_result(result)
