"""``minforge status``: show which aggregate outputs are stale."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from minforge.cli.commands._common import console, load_settings
from minforge.context.filesystem import FilesystemBuildContext
from minforge.core.errors import ConfigurationError
from minforge.core.project_loader import load_project
from minforge.core.source_resolver import SourceResolver
from minforge.core.staleness import StalenessChecker


def status_cmd(
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Project file (default minforge.toml)."
    ),
) -> None:
    """List every aggregate execution with its source count and staleness."""
    settings = load_settings()
    path = config_file or settings.resolve(settings.config_file)
    try:
        project = load_project(path)
    except ConfigurationError as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {exc}")
        raise typer.Exit(code=2)

    context = FilesystemBuildContext()
    resolver = SourceResolver(context)
    checker = StalenessChecker(context)

    table = Table(title="Aggregate outputs", header_style="bold cyan")
    table.add_column("Output", style="cyan", overflow="fold")
    table.add_column("Kind")
    table.add_column("Sources", justify="right")
    table.add_column("Status", justify="center", no_wrap=True)

    for config in project.aggregate:
        try:
            sources = resolver.resolve(config)
        except ConfigurationError as exc:
            table.add_row(escape(str(config.output_path)), config.kind.value, "-", f"[red]{escape(str(exc))}[/red]")
            continue
        stale = checker.is_stale(config.output_path, sources)
        status = "[yellow]stale[/yellow]" if stale else "[green]up to date[/green]"
        table.add_row(escape(str(config.output_path)), config.kind.value, str(len(sources)), status)

    console.print(table)
