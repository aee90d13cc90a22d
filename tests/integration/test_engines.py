"""Integration tests: default engines backed by rcssmin and calmjs.parse."""

from __future__ import annotations

from pathlib import Path

import pytest
import rcssmin

from minforge.core.errors import TransformError
from minforge.models.config import TransformOptions
from minforge.models.diagnostics import Severity
from minforge.models.sources import SourceFile
from minforge.transforms import TransformKind, engine_session, get_transform
from minforge.transforms.js import insert_linebreaks

SOURCE = SourceFile(path=Path("app.js"))

FUNCTION = "function compute(input) { var accumulator = input * 2; return accumulator; }"


class TestRcssminEngine:
    def test_minifies(self):
        css = "body {\n  color : red ;\n}\n/* comment */\ndiv { margin: 0 }\n"
        with engine_session(get_transform(TransformKind.CSS_MINIFY)) as transform:
            output = transform.apply(SourceFile(path=Path("a.css")), css)
        assert output.text == rcssmin.cssmin(css)
        assert "comment" not in output.text

    def test_linebreaks(self):
        css = "a{color:red}b{color:blue}c{color:green}"
        options = TransformOptions(linebreak_pos=10)
        with engine_session(get_transform(TransformKind.CSS_MINIFY, options)) as transform:
            output = transform.apply(SourceFile(path=Path("a.css")), css)
        assert output.text.splitlines() == ["a{color:red}", "b{color:blue}", "c{color:green}"]


class TestCalmjsEngine:
    def test_minifies(self):
        with engine_session(get_transform(TransformKind.JS_MINIFY)) as transform:
            output = transform.apply(SOURCE, "var x = 1;\n\n// note\nvar y = x + 2;\n")
        assert "x=1" in output.text
        assert "note" not in output.text
        assert output.diagnostics == []

    def test_munge_renames_locals(self):
        with engine_session(get_transform(TransformKind.JS_MINIFY)) as transform:
            output = transform.apply(SOURCE, FUNCTION)
        assert "accumulator" not in output.text
        assert "compute" in output.text

    def test_nomunge_keeps_locals(self):
        options = TransformOptions(munge=False)
        with engine_session(get_transform(TransformKind.JS_MINIFY, options)) as transform:
            output = transform.apply(SOURCE, FUNCTION)
        assert "accumulator" in output.text

    def test_linebreaks_after_statements(self):
        source = 'var first = "a;b}c;d"; var pattern = /[;}]/g; var third = 3;'
        plain_options = TransformOptions(munge=False)
        broken_options = TransformOptions(munge=False, linebreak_pos=5)
        with engine_session(get_transform(TransformKind.JS_MINIFY, plain_options)) as transform:
            plain = transform.apply(SOURCE, source).text
        with engine_session(get_transform(TransformKind.JS_MINIFY, broken_options)) as transform:
            broken = transform.apply(SOURCE, source).text

        lines = broken.splitlines()
        assert len(lines) == 3
        assert all(line.endswith(";") for line in lines[:-1])
        assert '"a;b}c;d"' in lines[0]
        assert "/[;}]/g" in lines[1]
        assert broken.replace("\n", "") == plain

    def test_linebreak_disabled_keeps_one_line(self):
        with engine_session(get_transform(TransformKind.JS_MINIFY)) as transform:
            output = transform.apply(SOURCE, "var a = 1;\nvar b = 2;\n")
        assert "\n" not in output.text

    def test_syntax_error(self):
        with engine_session(get_transform(TransformKind.JS_MINIFY)) as transform:
            with pytest.raises(TransformError) as excinfo:
                transform.apply(SOURCE, "var ok = 1;\nvar = ;\n")
        diagnostic = excinfo.value.diagnostic
        assert diagnostic.source == Path("app.js")
        assert diagnostic.line == 2
        assert diagnostic.severity == Severity.ERROR


class TestCalmjsLinter:
    def test_clean(self):
        with engine_session(get_transform(TransformKind.LINT)) as transform:
            assert transform.lint(SOURCE, "var a = [1, 2];") == []

    def test_reports_syntax_error(self):
        with engine_session(get_transform(TransformKind.LINT)) as transform:
            diagnostics = transform.lint(SOURCE, "var a = ;")
        assert len(diagnostics) == 1
        assert diagnostics[0].line == 1
        assert diagnostics[0].column > 0


class TestJsLinebreaks:
    def test_breaks_once_column_exceeded(self):
        assert insert_linebreaks("a();b();c()", 1) == "a();\nb();\nc()"

    def test_short_lines_untouched(self):
        assert insert_linebreaks("a();b();", 80) == "a();b();"

    def test_no_break_before_increment(self):
        assert insert_linebreaks("if(a){b()}++c;", 1) == "if(a){b()}++c;"

    def test_existing_newline_resets_column(self):
        assert insert_linebreaks("a();\nb();c();", 4) == "a();\nb();c();"
