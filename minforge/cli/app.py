"""Main Typer application: imports and registers all CLI commands.

Entry point: ``minforge`` (configured via pyproject.toml console_scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from minforge.cli.commands.aggregate import aggregate_cmd
from minforge.cli.commands.build import build_cmd
from minforge.cli.commands.lint import lint_cmd
from minforge.cli.commands.status import status_cmd
from minforge.config import Settings

app = typer.Typer(
    name="minforge",
    help="minforge: incremental JavaScript/CSS aggregation, minification and lint.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="aggregate", help="Aggregate (and minify) sources into one file.")(aggregate_cmd)
app.command(name="lint", help="Lint JavaScript sources.")(lint_cmd)
app.command(name="build", help="Run every execution in minforge.toml.")(build_cmd)
app.command(name="status", help="Show which aggregate outputs are stale.")(status_cmd)


def configure_logging(level: str) -> None:
    """Route stdlib logging through Rich on stderr."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Configure logging before any subcommand runs."""
    configure_logging("DEBUG" if verbose else Settings().log_level)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
