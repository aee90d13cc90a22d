"""Source models: resolved inputs for a single batch run."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SourceFile(BaseModel):
    """One resolved input file.

    ``modified_ns`` is the filesystem mtime captured at resolution time.
    ``relative_path`` is the scan-relative path (``None`` for explicit
    source files).
    """

    model_config = ConfigDict(frozen=True)

    path: Path
    modified_ns: int = 0
    relative_path: str | None = None

    @classmethod
    def from_path(cls, path: Path, relative_path: str | None = None) -> SourceFile:
        """Build a SourceFile by stat-ing *path*.  Raises ``OSError``."""
        stat = path.stat()
        return cls(path=path, modified_ns=stat.st_mtime_ns, relative_path=relative_path)

    @property
    def display_name(self) -> str:
        return self.relative_path or str(self.path)


class SourceSet(BaseModel):
    """Ordered sequence of SourceFile, unique by path.

    Order is the resolution order: the explicit list order, or the
    deterministic scan order.
    """

    model_config = ConfigDict(frozen=True)

    files: tuple[SourceFile, ...] = Field(default_factory=tuple)

    @model_validator(mode="after")
    def _check_unique(self) -> SourceSet:
        seen: set[Path] = set()
        for source in self.files:
            if source.path in seen:
                raise ValueError(f"Duplicate source path: {source.path}")
            seen.add(source.path)
        return self

    def __len__(self) -> int:
        return len(self.files)

    def __bool__(self) -> bool:
        return bool(self.files)

    @property
    def paths(self) -> list[Path]:
        return [source.path for source in self.files]
