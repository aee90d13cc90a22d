"""Transform contract shared by every variant.

A transform turns the text of one source into output text plus
diagnostics (``apply``), or into diagnostics only (``lint``).  Variants
that delegate to an external engine acquire it in ``open()`` and release
it in ``close()``; callers scope that with :func:`engine_session` so the
engine is released on every exit path.
"""

from __future__ import annotations

import abc
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict

from minforge.core.errors import TransformError
from minforge.models.config import TransformOptions
from minforge.models.diagnostics import Diagnostic, Severity
from minforge.models.sources import SourceFile

logger = logging.getLogger(__name__)


class TransformKind(str, Enum):
    """Tagged variants selected by configuration."""

    PASSTHROUGH = "passthrough"
    CSS_MINIFY = "css_minify"
    JS_MINIFY = "js_minify"
    LINT = "lint"


class TransformOutput(BaseModel):
    """Result of applying a transform to one source.

    ``text`` is ``None`` for variants that produce diagnostics only.
    """

    model_config = ConfigDict(frozen=True)

    text: str | None
    diagnostics: list[Diagnostic] = []


class EngineIssue(BaseModel):
    """A problem as reported by an engine, before it is tied to a source.

    Line and column follow the engine's own numbering; 0 means unknown.
    """

    model_config = ConfigDict(frozen=True)

    line: int = 0
    column: int = 0
    message: str
    severity: Severity = Severity.WARNING

    def to_diagnostic(self, source: SourceFile) -> Diagnostic:
        return Diagnostic(
            source=source.path,
            line=max(self.line, 0),
            column=max(self.column, 0),
            message=self.message,
            severity=self.severity,
        )


class EngineSyntaxError(Exception):
    """Raised by an engine when the source text cannot be parsed."""

    def __init__(self, message: str, line: int = 0, column: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def to_diagnostic(self, source: SourceFile) -> Diagnostic:
        return Diagnostic(
            source=source.path,
            line=max(self.line, 0),
            column=max(self.column, 0),
            message=self.message,
            severity=Severity.ERROR,
        )


class BaseTransform(abc.ABC):
    """Abstract base for all transform variants.

    Subclasses **must** implement ``apply``.  Subclasses backed by an
    engine override ``create_engine``; an engine passed to the constructor
    is used as-is and never released by the transform.
    """

    kind: ClassVar[TransformKind]

    def __init__(self, options: TransformOptions | None = None, engine: Any = None) -> None:
        self.options = options or TransformOptions()
        self._engine = engine
        self._owns_engine = False

    # ------------------------------------------------------------------
    # Engine lifecycle
    # ------------------------------------------------------------------

    def create_engine(self) -> Any:
        """Return a fresh engine handle.  Engine-free variants return None."""
        return None

    def open(self) -> None:
        if self._engine is None:
            self._engine = self.create_engine()
            self._owns_engine = self._engine is not None
            if self._owns_engine:
                logger.debug("%s acquired engine %r", type(self).__name__, self._engine)

    def close(self) -> None:
        if self._owns_engine:
            close = getattr(self._engine, "close", None)
            try:
                if callable(close):
                    close()
            finally:
                logger.debug("%s released engine %r", type(self).__name__, self._engine)
                self._engine = None
                self._owns_engine = False

    @property
    def engine(self) -> Any:
        if self._engine is None:
            raise RuntimeError(
                f"{type(self).__name__} used outside engine_session(); no engine acquired"
            )
        return self._engine

    # ------------------------------------------------------------------
    # Contract
    # ------------------------------------------------------------------

    @abc.abstractmethod
    def apply(self, source: SourceFile, text: str) -> TransformOutput:
        """Transform *text* of *source*.

        Raises ``TransformError`` carrying an ERROR diagnostic when the
        text cannot be processed.
        """
        ...

    def lint(self, source: SourceFile, text: str) -> list[Diagnostic]:
        """Return diagnostics for *text* without producing output.

        The default runs ``apply`` and keeps its diagnostics; a fatal
        problem becomes a diagnostic instead of an exception.
        """
        try:
            return list(self.apply(source, text).diagnostics)
        except TransformError as exc:
            return [exc.diagnostic]

    def __repr__(self) -> str:
        return f"<{type(self).__name__} kind={self.kind.value!r}>"


TransformT = TypeVar("TransformT", bound=BaseTransform)


@contextmanager
def engine_session(transform: TransformT) -> Iterator[TransformT]:
    """Acquire the transform's engine for the duration of the block."""
    transform.open()
    try:
        yield transform
    finally:
        transform.close()
