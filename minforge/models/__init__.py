"""minforge data models: all Pydantic v2, all frozen (immutable)."""

from minforge.models.config import (
    DEFAULT_INCLUDES,
    DEFAULT_SOURCE_DIRECTORIES,
    AggregateConfig,
    AssetKind,
    LintConfig,
    ProjectConfig,
    SourceConfig,
    TransformOptions,
)
from minforge.models.diagnostics import Diagnostic, Severity
from minforge.models.runs import (
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    BatchMode,
    BatchResult,
    RunState,
    RunTransition,
)
from minforge.models.sources import SourceFile, SourceSet

__all__ = [
    # config
    "AssetKind",
    "DEFAULT_INCLUDES",
    "DEFAULT_SOURCE_DIRECTORIES",
    "SourceConfig",
    "AggregateConfig",
    "LintConfig",
    "ProjectConfig",
    "TransformOptions",
    # diagnostics
    "Severity",
    "Diagnostic",
    # runs
    "RunState",
    "BatchMode",
    "RunTransition",
    "BatchResult",
    "VALID_TRANSITIONS",
    "TERMINAL_STATES",
    # sources
    "SourceFile",
    "SourceSet",
]
