"""CSS minification: delegates to a CSS compression engine.

The default engine wraps ``rcssmin``.  Forced line breaks are applied on
the compressed output: once the current line is longer than
``linebreak_pos`` columns, a newline is inserted after the next closing
brace that is not inside a string.
"""

from __future__ import annotations

import logging
from typing import ClassVar, Protocol, runtime_checkable

import rcssmin

from minforge.core.errors import TransformError
from minforge.models.sources import SourceFile
from minforge.transforms.base import (
    BaseTransform,
    EngineSyntaxError,
    TransformKind,
    TransformOutput,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class CssEngine(Protocol):
    """Compresses CSS text.  May raise ``EngineSyntaxError``."""

    def compress(self, text: str) -> str:
        ...


class RcssminEngine:
    """CSS engine backed by ``rcssmin.cssmin``."""

    def __init__(self, keep_bang_comments: bool = False) -> None:
        self.keep_bang_comments = keep_bang_comments

    def compress(self, text: str) -> str:
        return rcssmin.cssmin(text, keep_bang_comments=self.keep_bang_comments)

    def __repr__(self) -> str:
        return "<RcssminEngine>"


def insert_linebreaks(css: str, linebreak_pos: int) -> str:
    """Break *css* after ``}`` once a line exceeds *linebreak_pos* columns."""
    if linebreak_pos <= 0:
        return css

    out: list[str] = []
    line_start = 0
    quote: str | None = None
    escaped = False
    for index, char in enumerate(css):
        out.append(char)
        if quote is not None:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
            continue
        if char in ("'", '"'):
            quote = char
        elif char == "}" and index + 1 - line_start > linebreak_pos:
            out.append("\n")
            line_start = index + 1
    return "".join(out)


class CssMinifyTransform(BaseTransform):
    """Minify one CSS source with the configured engine."""

    kind: ClassVar[TransformKind] = TransformKind.CSS_MINIFY

    def create_engine(self) -> CssEngine:
        return RcssminEngine()

    def apply(self, source: SourceFile, text: str) -> TransformOutput:
        try:
            compressed = self.engine.compress(text)
        except EngineSyntaxError as exc:
            raise TransformError(exc.to_diagnostic(source)) from exc
        return TransformOutput(
            text=insert_linebreaks(compressed, self.options.linebreak_pos)
        )
