"""Helpers shared by the minforge CLI commands."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from minforge.config import Settings
from minforge.core.batch_runner import BatchRunner
from minforge.models.runs import BatchResult
from minforge.monitor.renderer import ResultRenderer

console = Console()


def load_settings(jobs: Optional[int] = None, report: Optional[Path] = None) -> Settings:
    """Return env-driven settings with command-line overrides applied."""
    settings = Settings()
    updates: dict = {}
    if jobs is not None:
        updates["jobs"] = max(jobs, 1)
    if report is not None:
        updates["report_path"] = report
    return settings.model_copy(update=updates) if updates else settings


def build_runner(settings: Settings) -> BatchRunner:
    return BatchRunner(settings=settings)


def validation_exit(exc: ValidationError) -> typer.Exit:
    """Print a configuration error and return the Exit to raise."""
    console.print(f"[bold red]Invalid configuration:[/bold red]\n{exc}")
    return typer.Exit(code=2)


def report_results(results: Sequence[BatchResult]) -> None:
    """Render *results* and exit 1 if any run failed."""
    ResultRenderer(console=console).print_results(results)
    if any(not result.passed for result in results):
        raise typer.Exit(code=1)
