"""Unit tests for the CLI: command registration and exit codes.

Exercises every command via typer.testing.CliRunner against a temporary
project directory.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import rcssmin
from typer.testing import CliRunner

from minforge.cli.app import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def project_dir(tmp_path: Path, monkeypatch) -> Path:
    """Run every command from an isolated project directory."""
    monkeypatch.chdir(tmp_path)
    for name in ("MINFORGE_REPORT_PATH", "MINFORGE_JOBS", "MINFORGE_BASE_DIR", "MINFORGE_CONFIG_FILE"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


# ---------------------------------------------------------------------------
# Test: CLI help and registration
# ---------------------------------------------------------------------------


class TestCliApp:
    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        # Typer's no_args_is_help may exit with 0 or 2 depending on version
        assert result.exit_code in (0, 2)
        assert "usage" in result.output.lower()

    def test_help_lists_commands(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("aggregate", "lint", "build", "status"):
            assert command in result.output

    @pytest.mark.parametrize("command", ["aggregate", "lint", "build", "status"])
    def test_command_help(self, command):
        result = runner.invoke(app, [command, "--help"])
        assert result.exit_code == 0


# ---------------------------------------------------------------------------
# Test: aggregate
# ---------------------------------------------------------------------------


class TestAggregateCommand:
    def test_nominify_explicit_files(self, write_source, project_dir):
        write_source("b.js", "var b;")
        write_source("a.js", "var a;")

        result = runner.invoke(
            app,
            ["aggregate", "-o", "target/all.js", "-f", "b.js", "-f", "a.js", "--nominify"],
        )

        assert result.exit_code == 0, result.output
        assert (project_dir / "target/all.js").read_text() == "var b;\nvar a;\n"
        assert "DONE" in result.output

    def test_css_directory(self, write_source, project_dir):
        css = "a { color: red; }"
        write_source("src/main/css/a.css", css)

        result = runner.invoke(app, ["aggregate", "--kind", "css", "--output", "all.css", "--no-newline"])

        assert result.exit_code == 0, result.output
        assert (project_dir / "all.css").read_text() == rcssmin.cssmin(css)

    def test_missing_directory_fails(self):
        result = runner.invoke(app, ["aggregate", "-o", "all.js"])
        assert result.exit_code == 1
        assert "FAILED" in result.output

    def test_optional_missing_directory_skips(self):
        result = runner.invoke(app, ["aggregate", "-o", "all.js", "--optional"])
        assert result.exit_code == 0
        assert "SKIPPED" in result.output

    def test_syntax_error_fails_and_keeps_output_absent(self, write_source, project_dir):
        write_source("src/main/js/a.js", "var a = ;")
        result = runner.invoke(app, ["aggregate", "-o", "all.js"])
        assert result.exit_code == 1
        assert not (project_dir / "all.js").exists()

    def test_negative_linebreak_rejected(self):
        result = runner.invoke(app, ["aggregate", "-o", "all.js", "--linebreakpos", "-1"])
        assert result.exit_code == 2

    def test_json_report(self, write_source, project_dir):
        write_source("src/main/js/a.js", "var a = ;")
        runner.invoke(app, ["aggregate", "-o", "all.js", "--report", "report.json"])
        assert (project_dir / "report.json").exists()


# ---------------------------------------------------------------------------
# Test: lint
# ---------------------------------------------------------------------------


class TestLintCommand:
    def test_clean(self, write_source):
        write_source("src/main/js/a.js", "var a = 1;")
        result = runner.invoke(app, ["lint"])
        assert result.exit_code == 0, result.output

    def test_problems_fail(self, write_source):
        write_source("src/main/js/a.js", "var a = ;")
        result = runner.invoke(app, ["lint"])
        assert result.exit_code == 1
        assert "There were lint errors" in result.output

    def test_no_fail(self, write_source):
        write_source("src/main/js/a.js", "var a = ;")
        result = runner.invoke(app, ["lint", "--no-fail"])
        assert result.exit_code == 0
        assert "warning" in result.output.lower()

    def test_bad_option(self, write_source):
        write_source("src/main/js/a.js", "var a = 1;")
        result = runner.invoke(app, ["lint", "--option", "browser"])
        assert result.exit_code == 2

    def test_options_accepted(self, write_source):
        write_source("src/main/js/a.js", "var a = 1;")
        result = runner.invoke(app, ["lint", "-O", "browser=true", "-O", "undef=false"])
        assert result.exit_code == 0, result.output


# ---------------------------------------------------------------------------
# Test: build and status
# ---------------------------------------------------------------------------

PROJECT = """
[[lint]]
failOnProblems = true

[[aggregate]]
output = "target/app.js"
nominify = true
"""


class TestBuildCommand:
    def test_build(self, write_source, project_dir):
        write_source("minforge.toml", PROJECT)
        write_source("src/main/js/a.js", "var a = 1;")

        result = runner.invoke(app, ["build"])

        assert result.exit_code == 0, result.output
        assert (project_dir / "target/app.js").read_text() == "var a = 1;\n"
        assert "minforge lint" in result.output
        assert "minforge aggregate" in result.output

    def test_build_stops_after_lint_failure(self, write_source, project_dir):
        write_source("minforge.toml", PROJECT)
        write_source("src/main/js/a.js", "var a = ;")

        result = runner.invoke(app, ["build"])

        assert result.exit_code == 1
        assert not (project_dir / "target/app.js").exists()

    def test_explicit_config(self, write_source, project_dir):
        write_source("conf/project.toml", '[[aggregate]]\noutput = "all.js"\nsourceFiles = ["a.js"]\nnominify = true\n')
        write_source("conf/a.js", "a;")

        result = runner.invoke(app, ["build", "--config", "conf/project.toml"])

        assert result.exit_code == 0, result.output
        assert (project_dir / "conf/all.js").read_text() == "a;\n"

    def test_missing_config(self):
        result = runner.invoke(app, ["build"])
        assert result.exit_code == 2
        assert "Configuration error" in result.output

    def test_empty_project(self, write_source):
        write_source("minforge.toml", "")
        result = runner.invoke(app, ["build"])
        assert result.exit_code == 0
        assert "No executions" in result.output


class TestStatusCommand:
    def test_reports_output_freshness(self, write_source):
        write_source("minforge.toml", PROJECT)
        write_source("src/main/js/a.js", "var a = 1;", mtime_ns=1_000_000_000)

        before = runner.invoke(app, ["status"])
        assert before.exit_code == 0
        assert "stale" in before.output

        runner.invoke(app, ["build"])
        after = runner.invoke(app, ["status"])
        assert after.exit_code == 0
        assert "up to date" in after.output
        assert "stale" not in after.output

    def test_missing_config(self):
        result = runner.invoke(app, ["status"])
        assert result.exit_code == 2


class TestVerbose:
    def test_verbose_flag(self, write_source):
        write_source("src/main/js/a.js", "var a = 1;")
        result = runner.invoke(app, ["--verbose", "lint"])
        assert result.exit_code == 0
