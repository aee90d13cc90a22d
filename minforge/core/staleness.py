"""StalenessChecker: timestamp comparison between outputs and sources.

An output is stale when it does not exist, or when any source was
modified after it.  Equal timestamps count as up to date.  Content
changes that keep the timestamp are not detected.
"""

from __future__ import annotations

import logging
from pathlib import Path

from minforge.context import BuildContext
from minforge.core.errors import ArtifactIOError
from minforge.models.sources import SourceSet

logger = logging.getLogger(__name__)


class StalenessChecker:
    """Decide whether outputs must be regenerated."""

    def __init__(self, context: BuildContext) -> None:
        self._context = context

    def is_stale(self, output: Path, sources: SourceSet) -> bool:
        """Return True if *output* is missing or older than any source.

        Stops at the first source found newer than the output.  Raises
        ``ArtifactIOError`` when a timestamp cannot be read.
        """
        if not self._context.exists(output):
            logger.info("Output %s does not exist", output)
            return True

        for source in sources.files:
            try:
                current = self._context.is_uptodate(output, source.path)
            except OSError as exc:
                raise ArtifactIOError(
                    f"Could not compare {output} with {source.path}: {exc}", source.path
                ) from exc
            if not current:
                logger.info("Output %s is older than %s", output, source.display_name)
                return True

        logger.info("Output %s is up to date", output)
        return False
