"""Aggregator: builds one output artifact from an ordered SourceSet.

Every source is read, transformed and appended to an in-memory buffer in
SourceSet order, followed by a newline when ``insert_newline`` is set.
The artifact is only written once the whole buffer is assembled; the
first transform error discards the buffer and nothing is written.
"""

from __future__ import annotations

import logging
import time
from contextlib import closing
from pathlib import Path

from minforge.context import BuildContext
from minforge.context.filesystem import SOURCE_ENCODING, SOURCE_ERRORS
from minforge.core.diagnostic_sink import DiagnosticSink
from minforge.core.errors import ArtifactIOError, TransformError
from minforge.core.workers import ordered_map
from minforge.models.sources import SourceFile, SourceSet
from minforge.transforms.base import BaseTransform, TransformOutput

logger = logging.getLogger(__name__)

SEPARATOR = "\n"


class Aggregator:
    """Concatenate transformed sources into one artifact.

    Parameters
    ----------
    context:
        Used to read sources and write the artifact.
    insert_newline:
        Append ``"\\n"`` after every source, including the last.
    jobs:
        Worker threads for per-file transforms; 1 runs sequentially.
    """

    def __init__(
        self,
        context: BuildContext,
        *,
        insert_newline: bool = True,
        jobs: int = 1,
    ) -> None:
        self._context = context
        self.insert_newline = insert_newline
        self.jobs = jobs

    # ------------------------------------------------------------------
    # Assembly
    # ------------------------------------------------------------------

    def aggregate(
        self,
        sources: SourceSet,
        transform: BaseTransform,
        sink: DiagnosticSink | None = None,
    ) -> bytes:
        """Return the assembled artifact content.

        Diagnostics of each processed file are recorded into *sink*.
        Raises ``TransformError`` on the first source (in SourceSet order)
        that fails, and ``ArtifactIOError`` if a source cannot be read.
        """

        def process(source: SourceFile) -> tuple[SourceFile, TransformOutput | None, TransformError | None]:
            text = self._read(source)
            start = time.perf_counter()
            try:
                output = transform.apply(source, text)
            except TransformError as exc:
                return source, None, exc
            logger.debug(
                "%s %s in %.1fms",
                transform.kind.value,
                source.display_name,
                (time.perf_counter() - start) * 1000,
            )
            return source, output, None

        buffer: list[str] = []
        with closing(ordered_map(process, sources.files, self.jobs)) as results:
            for source, output, error in results:
                if error is not None:
                    if sink is not None:
                        sink.record(source.path, [error.diagnostic])
                    logger.error("Aggregation aborted at %s: %s", source.display_name, error)
                    raise error

                if sink is not None:
                    sink.record(source.path, output.diagnostics)
                buffer.append(output.text or "")
                if self.insert_newline:
                    buffer.append(SEPARATOR)

        return "".join(buffer).encode(SOURCE_ENCODING, SOURCE_ERRORS)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def flush(self, output: Path, data: bytes) -> None:
        """Write *data* to *output* in one atomic replace."""
        try:
            with self._context.open_for_write(output) as handle:
                handle.write(data)
        except OSError as exc:
            raise ArtifactIOError(f"Could not create aggregate file {output}: {exc}", output) from exc
        logger.info("Wrote %s (%d bytes)", output, len(data))

    def _read(self, source: SourceFile) -> str:
        try:
            return self._context.read_text(source.path)
        except OSError as exc:
            raise ArtifactIOError(f"Could not read {source.path}: {exc}", source.path) from exc
