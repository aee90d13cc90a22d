"""minforge CLI: Typer-based command-line interface.

Provides the ``minforge`` command with subcommands for aggregating and
linting sources, running every execution of a project file, and showing
which outputs are stale.

All output uses Rich for formatted terminal display.
"""
