"""``minforge lint``: lint JavaScript sources."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError

from minforge.cli.commands._common import (
    build_runner,
    console,
    load_settings,
    report_results,
    validation_exit,
)
from minforge.models.config import LintConfig


def _parse_options(values: List[str]) -> dict[str, str]:
    options: dict[str, str] = {}
    for value in values:
        name, sep, flag = value.partition("=")
        if not sep or not name:
            console.print(f"[bold red]Invalid lint option {value!r}; expected NAME=true|false[/bold red]")
            raise typer.Exit(code=2)
        options[name.strip()] = flag.strip()
    return options


def lint_cmd(
    source_dir: Optional[Path] = typer.Option(
        None, "--source-dir", "-s", help="Directory to scan (default src/main/js)."
    ),
    source_files: Optional[List[Path]] = typer.Option(
        None, "--source-file", "-f", help="Explicit source file; disables scanning. Repeatable."
    ),
    includes: Optional[List[str]] = typer.Option(None, "--include", help="Include pattern. Repeatable."),
    excludes: Optional[List[str]] = typer.Option(None, "--exclude", help="Exclude pattern. Repeatable."),
    required: bool = typer.Option(
        True, "--required/--optional", help="Fail when no sources are found."
    ),
    option: Optional[List[str]] = typer.Option(
        None, "--option", "-O", help="Lint option as NAME=true|false. Repeatable."
    ),
    fail: bool = typer.Option(
        True, "--fail/--no-fail", help="Fail the run when problems are found."
    ),
    jobs: Optional[int] = typer.Option(None, "--jobs", "-j", help="Worker threads."),
    report: Optional[Path] = typer.Option(None, "--report", help="Write a JSON diagnostics report."),
) -> None:
    """Lint sources and report problems.

    Files unchanged since the previous lint are not re-linted; their
    earlier problems are reported again.
    """
    try:
        config = LintConfig(
            source_directory=source_dir,
            source_files=source_files or [],
            includes=includes or [],
            excludes=excludes or [],
            required=required,
            lint_options=_parse_options(option or []),
            fail_on_problems=fail,
        )
    except ValidationError as exc:
        raise validation_exit(exc)

    runner = build_runner(load_settings(jobs, report))
    report_results([runner.run_lint(config)])
