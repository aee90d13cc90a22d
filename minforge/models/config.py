"""Execution configuration models: one model per aggregate or lint execution.

Field names are snake_case.  The camelCase names of XML build descriptors
(``sourceFiles``, ``linebreakpos``, ``insertNewLine`` ...) are accepted as
aliases.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator


class AssetKind(str, Enum):
    """Target language of an execution."""

    JS = "js"
    CSS = "css"


DEFAULT_INCLUDES: dict[AssetKind, tuple[str, ...]] = {
    AssetKind.JS: ("**/*.js",),
    AssetKind.CSS: ("**/*.css",),
}

DEFAULT_SOURCE_DIRECTORIES: dict[AssetKind, Path] = {
    AssetKind.JS: Path("src/main/js"),
    AssetKind.CSS: Path("src/main/css"),
}


class TransformOptions(BaseModel):
    """Engine-facing options shared by every transform variant."""

    model_config = ConfigDict(frozen=True)

    linebreak_pos: int = Field(default=0, ge=0)
    munge: bool = True
    preserve_semicolons: bool = False
    disable_optimizations: bool = False
    warn: bool = True
    lint_options: dict[str, bool] = Field(default_factory=dict)


class SourceConfig(BaseModel):
    """Source selection shared by aggregate and lint executions."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    kind: AssetKind = AssetKind.JS
    base_dir: Path = Path(".")
    source_files: list[Path] = Field(default_factory=list, alias="sourceFiles")
    source_directory: Path | None = Field(default=None, alias="sourceDirectory")
    includes: list[str] = Field(default_factory=list)
    excludes: list[str] = Field(default_factory=list)
    required: bool = True

    def resolve(self, path: Path) -> Path:
        """Resolve *path* against ``base_dir`` unless it is absolute."""
        return path if path.is_absolute() else self.base_dir / path

    @property
    def effective_source_directory(self) -> Path:
        directory = self.source_directory or DEFAULT_SOURCE_DIRECTORIES[self.kind]
        return self.resolve(directory)

    @property
    def effective_includes(self) -> list[str]:
        return list(self.includes) or list(DEFAULT_INCLUDES[self.kind])


class AggregateConfig(SourceConfig):
    """Concatenate (and optionally minify) sources into one output artifact."""

    output: Path
    linebreak_pos: int = Field(default=0, ge=0, alias="linebreakpos")
    nominify: bool = False
    insert_newline: bool = Field(default=True, alias="insertNewLine")

    # JavaScript only
    nomunge: bool = False
    preserve_all_semicolons: bool = Field(default=False, alias="preserveAllSemiColons")
    disable_optimizations: bool = Field(default=False, alias="disableOptimizations")
    warn_on_issues: bool = Field(default=True, alias="warnOnIssues")

    @property
    def output_path(self) -> Path:
        return self.resolve(self.output)

    def transform_options(self) -> TransformOptions:
        return TransformOptions(
            linebreak_pos=self.linebreak_pos,
            munge=not self.nomunge,
            preserve_semicolons=self.preserve_all_semicolons,
            disable_optimizations=self.disable_optimizations,
            warn=self.warn_on_issues,
        )


class LintConfig(SourceConfig):
    """Lint sources without producing an artifact."""

    lint_options: dict[str, bool] = Field(default_factory=dict, alias="lintOptions")
    fail_on_problems: bool = Field(default=True, alias="failOnProblems")

    @model_validator(mode="after")
    def _javascript_only(self) -> LintConfig:
        if self.kind != AssetKind.JS:
            raise ValueError(f"Lint is only available for JavaScript sources, not {self.kind.value}")
        return self

    def transform_options(self) -> TransformOptions:
        return TransformOptions(lint_options=dict(self.lint_options))


class ProjectConfig(BaseModel):
    """All executions declared in a project file, in declaration order."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    lint: list[LintConfig] = Field(default_factory=list)
    aggregate: list[AggregateConfig] = Field(default_factory=list)
