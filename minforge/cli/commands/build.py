"""``minforge build``: run every execution declared in the project file."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from minforge.cli.commands._common import (
    build_runner,
    console,
    load_settings,
    report_results,
)
from minforge.core.errors import ConfigurationError
from minforge.core.project_loader import load_project


def build_cmd(
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Project file (default minforge.toml)."
    ),
    jobs: Optional[int] = typer.Option(None, "--jobs", "-j", help="Worker threads."),
    report: Optional[Path] = typer.Option(None, "--report", help="Write a JSON diagnostics report."),
) -> None:
    """Run all lint executions, then all aggregate executions.

    Stops at the first failed execution.
    """
    settings = load_settings(jobs, report)
    path = config_file or settings.resolve(settings.config_file)
    try:
        project = load_project(path)
    except ConfigurationError as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {exc}")
        raise typer.Exit(code=2)

    if not project.lint and not project.aggregate:
        console.print(f"[dim]No executions declared in {path}.[/dim]")
        return

    report_results(build_runner(settings).run_project(project))
