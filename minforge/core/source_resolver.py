"""SourceResolver: expands an execution config into an ordered SourceSet.

Resolution modes, checked in order:

1. An explicit, non-empty ``source_files`` list is used as given, in the
   given order, with no pattern filtering.
2. Otherwise the source directory is scanned with the configured includes
   (or the kind's default includes), the configured excludes and the
   standard default excludes.
"""

from __future__ import annotations

import logging
from pathlib import Path

from minforge.context import BuildContext
from minforge.core.errors import ConfigurationError
from minforge.models.config import SourceConfig
from minforge.models.sources import SourceFile, SourceSet

logger = logging.getLogger(__name__)


class SourceResolver:
    """Resolve sources through a BuildContext.

    Parameters
    ----------
    context:
        Provides directory scanning.
    """

    def __init__(self, context: BuildContext) -> None:
        self._context = context

    def resolve(self, config: SourceConfig) -> SourceSet:
        """Return the ordered, deduplicated SourceSet for *config*.

        Raises ``ConfigurationError`` when the source directory is missing
        and sources are required, or when an explicit source file does
        not exist.  Emptiness is left to the caller.
        """
        if config.source_files:
            if config.includes or config.excludes:
                logger.debug("Explicit source files given; includes/excludes ignored")
            candidates = [
                (config.resolve(path), None) for path in config.source_files
            ]
        else:
            candidates = self._scan(config)

        files: list[SourceFile] = []
        seen: set[Path] = set()
        for path, relative in candidates:
            key = path.resolve()
            if key in seen:
                logger.debug("Skipping duplicate source %s", path)
                continue
            seen.add(key)
            try:
                files.append(SourceFile.from_path(path, relative))
            except FileNotFoundError:
                raise ConfigurationError(f"Source file {path} does not exist") from None
            except OSError as exc:
                raise ConfigurationError(f"Cannot access source file {path}: {exc}") from exc

        logger.info("Resolved %d %s source(s)", len(files), config.kind.value)
        return SourceSet(files=tuple(files))

    def _scan(self, config: SourceConfig) -> list[tuple[Path, str | None]]:
        directory = config.effective_source_directory
        if not self._context.exists(directory):
            if config.required:
                raise ConfigurationError(f"Source directory {directory} does not exist")
            logger.warning("Source directory %s does not exist.", directory)
            return []

        relative_paths = self._context.scan(
            directory, config.effective_includes, config.excludes
        )
        return [(directory / rel, rel) for rel in relative_paths]
