"""Console reporter: prints diagnostics with Rich markup as they arrive."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape

from minforge.models.diagnostics import Diagnostic, Severity

_SEVERITY_LABELS: dict[Severity, str] = {
    Severity.ERROR: "[bold red]error[/bold red]",
    Severity.WARNING: "[yellow]warning[/yellow]",
}


class ConsoleReporter:
    """Prints ``path:line:column: severity: message`` lines.

    Parameters
    ----------
    console:
        Rich Console instance.  Defaults to one bound to stderr.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(stderr=True)

    @property
    def reporter_name(self) -> str:
        return "console"

    def report(self, diagnostic: Diagnostic) -> None:
        location = escape(str(diagnostic.source))
        if diagnostic.line:
            location += f":{diagnostic.line}"
            if diagnostic.column:
                location += f":{diagnostic.column}"
        self.console.print(
            f"[bold]{location}[/bold]: {_SEVERITY_LABELS[diagnostic.severity]}: "
            f"{escape(diagnostic.message)}"
        )

    def clear(self, source: Path) -> None:
        pass

    def flush(self) -> None:
        pass
