"""``minforge aggregate``: concatenate and minify sources into one file."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError

from minforge.cli.commands._common import (
    build_runner,
    load_settings,
    report_results,
    validation_exit,
)
from minforge.models.config import AggregateConfig, AssetKind


def aggregate_cmd(
    output: Path = typer.Option(..., "--output", "-o", help="Aggregate file to write."),
    kind: AssetKind = typer.Option(AssetKind.JS, "--kind", "-k", help="Source language."),
    source_dir: Optional[Path] = typer.Option(
        None, "--source-dir", "-s", help="Directory to scan (default src/main/<kind>)."
    ),
    source_files: Optional[List[Path]] = typer.Option(
        None, "--source-file", "-f", help="Explicit source file; disables scanning. Repeatable."
    ),
    includes: Optional[List[str]] = typer.Option(None, "--include", help="Include pattern. Repeatable."),
    excludes: Optional[List[str]] = typer.Option(None, "--exclude", help="Exclude pattern. Repeatable."),
    required: bool = typer.Option(
        True, "--required/--optional", help="Fail when no sources are found."
    ),
    linebreakpos: int = typer.Option(
        0, "--linebreakpos", min=0, help="Insert a line break after this column (0 = never)."
    ),
    nominify: bool = typer.Option(False, "--nominify", help="Concatenate without minifying."),
    insert_newline: bool = typer.Option(
        True, "--newline/--no-newline", help="Append a newline after every source."
    ),
    nomunge: bool = typer.Option(False, "--nomunge", help="[js] Minify only, do not rename locals."),
    preserve_semicolons: bool = typer.Option(
        False, "--preserve-semicolons", help="[js] Keep redundant semicolons."
    ),
    disable_optimizations: bool = typer.Option(
        False, "--disable-optimizations", help="[js] Disable micro optimizations. Ignored by the default calmjs engine."
    ),
    warn: bool = typer.Option(
        True,
        "--warn/--no-warn",
        help="[js] Report non-fatal engine problems. The default calmjs engine reports none.",
    ),
    jobs: Optional[int] = typer.Option(None, "--jobs", "-j", help="Worker threads."),
    report: Optional[Path] = typer.Option(None, "--report", help="Write a JSON diagnostics report."),
) -> None:
    """Aggregate sources into one output artifact.

    Skips all work when the output is newer than every source.
    """
    try:
        config = AggregateConfig(
            kind=kind,
            output=output,
            source_directory=source_dir,
            source_files=source_files or [],
            includes=includes or [],
            excludes=excludes or [],
            required=required,
            linebreak_pos=linebreakpos,
            nominify=nominify,
            insert_newline=insert_newline,
            nomunge=nomunge,
            preserve_all_semicolons=preserve_semicolons,
            disable_optimizations=disable_optimizations,
            warn_on_issues=warn,
        )
    except ValidationError as exc:
        raise validation_exit(exc)

    runner = build_runner(load_settings(jobs, report))
    report_results([runner.run_aggregate(config)])
