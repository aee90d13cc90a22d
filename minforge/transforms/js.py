"""JavaScript minification: delegates to a JS compression engine.

The default engine parses with ``calmjs.parse`` and prints with its
minifying unparser.  ``munge`` maps to local identifier obfuscation and
``preserve_semicolons`` disables dropping of redundant semicolons.
``linebreak_pos`` is applied on the printed output by breaking after a
``;`` or ``}`` token once the line is longer than that many columns.
Tokens come from the ES5 lexer, so string, regex and comment contents
are never split.  ``disable_optimizations`` has no equivalent and is
ignored.
"""

from __future__ import annotations

import logging
from typing import ClassVar, Protocol, runtime_checkable

from calmjs.parse.unparsers.es5 import minify_print

from minforge.core.errors import TransformError
from minforge.models.config import TransformOptions
from minforge.models.sources import SourceFile
from minforge.transforms import _calmjs
from minforge.transforms.base import (
    BaseTransform,
    EngineIssue,
    EngineSyntaxError,
    TransformKind,
    TransformOutput,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class JsEngine(Protocol):
    """Compresses JavaScript text.

    Returns the compressed text and any non-fatal issues.  Raises
    ``EngineSyntaxError`` when the source cannot be parsed.
    """

    def compress(
        self, text: str, options: TransformOptions
    ) -> tuple[str, list[EngineIssue]]:
        ...


# A newline before these tokens would turn them into prefix operators.
_NO_BREAK_BEFORE = frozenset({"PLUSPLUS", "MINUSMINUS"})


def insert_linebreaks(js: str, linebreak_pos: int) -> str:
    """Break *js* after ``;`` or ``}`` once a line exceeds *linebreak_pos* columns."""
    if linebreak_pos <= 0:
        return js

    breaks: list[int] = []
    line_start = 0
    pending: int | None = None
    for token in _calmjs.tokens(js):
        if pending is not None:
            if token.type not in _NO_BREAK_BEFORE and "\n" not in js[pending:token.lexpos]:
                breaks.append(pending)
                line_start = pending
            pending = None
        end = token.lexpos + len(token.value)
        line_start = max(line_start, js.rfind("\n", 0, end) + 1)
        if token.type in ("SEMI", "RBRACE") and end - line_start > linebreak_pos:
            pending = end

    if not breaks:
        return js
    pieces = [js[start:stop] for start, stop in zip([0, *breaks], [*breaks, len(js)])]
    return "\n".join(pieces)


class CalmjsEngine:
    """JS engine backed by ``calmjs.parse``."""

    def compress(
        self, text: str, options: TransformOptions
    ) -> tuple[str, list[EngineIssue]]:
        if options.disable_optimizations:
            logger.debug("CalmjsEngine: disable_optimizations not supported")

        program = _calmjs.parse(text)
        compressed = minify_print(
            program,
            obfuscate=options.munge,
            obfuscate_globals=False,
            drop_semi=not options.preserve_semicolons,
        )
        return insert_linebreaks(compressed, options.linebreak_pos), []

    def __repr__(self) -> str:
        return "<CalmjsEngine>"


class JsMinifyTransform(BaseTransform):
    """Minify one JavaScript source with the configured engine.

    Non-fatal engine issues are kept as diagnostics only when the ``warn``
    option is set.
    """

    kind: ClassVar[TransformKind] = TransformKind.JS_MINIFY

    def create_engine(self) -> JsEngine:
        return CalmjsEngine()

    def apply(self, source: SourceFile, text: str) -> TransformOutput:
        try:
            compressed, issues = self.engine.compress(text, self.options)
        except EngineSyntaxError as exc:
            raise TransformError(exc.to_diagnostic(source)) from exc

        diagnostics = []
        if self.options.warn:
            diagnostics = [issue.to_diagnostic(source) for issue in issues]
        return TransformOutput(text=compressed, diagnostics=diagnostics)
