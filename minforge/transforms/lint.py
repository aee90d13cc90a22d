"""Lint: analyses source text and produces diagnostics only.

Lint engines may report a missing (``None``) entry in their problem list
when they stop early because of too many problems.  Such entries are
replaced by one synthetic diagnostic saying the list was truncated.
"""

from __future__ import annotations

import logging
from typing import ClassVar, Protocol, runtime_checkable

from minforge.models.diagnostics import Diagnostic, Severity
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

TRUNCATED_MESSAGE = "Too many problems; the remaining problems were not reported"


@runtime_checkable
class LintEngine(Protocol):
    """Checks source text.  ``None`` entries mark a truncated problem list."""

    def lint(self, text: str, options: dict[str, bool]) -> list[EngineIssue | None]:
        ...


class CalmjsSyntaxLinter:
    """Lint engine reporting ES5 syntax errors found by ``calmjs.parse``."""

    def lint(self, text: str, options: dict[str, bool]) -> list[EngineIssue | None]:
        if options:
            logger.debug("CalmjsSyntaxLinter ignores lint options: %s", sorted(options))
        try:
            _calmjs.parse(text)
        except EngineSyntaxError as exc:
            return [
                EngineIssue(
                    line=exc.line,
                    column=exc.column,
                    message=exc.message,
                    severity=Severity.ERROR,
                )
            ]
        return []

    def __repr__(self) -> str:
        return "<CalmjsSyntaxLinter>"


class LintTransform(BaseTransform):
    """Lint one JavaScript source with the configured engine."""

    kind: ClassVar[TransformKind] = TransformKind.LINT

    def create_engine(self) -> LintEngine:
        return CalmjsSyntaxLinter()

    def apply(self, source: SourceFile, text: str) -> TransformOutput:
        return TransformOutput(text=None, diagnostics=self.lint(source, text))

    def lint(self, source: SourceFile, text: str) -> list[Diagnostic]:
        try:
            issues = self.engine.lint(text, dict(self.options.lint_options))
        except EngineSyntaxError as exc:
            return [exc.to_diagnostic(source)]

        diagnostics: list[Diagnostic] = []
        truncated = False
        for issue in issues:
            if issue is None:
                truncated = True
                continue
            diagnostics.append(issue.to_diagnostic(source))

        if truncated:
            last_line = diagnostics[-1].line if diagnostics else 0
            diagnostics.append(
                Diagnostic(
                    source=source.path,
                    line=last_line,
                    message=TRUNCATED_MESSAGE,
                    severity=Severity.WARNING,
                )
            )
        return diagnostics
