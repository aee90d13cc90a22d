"""BatchRunner: the top-level driver for aggregate and lint runs.

The runner wires SourceResolver, StalenessChecker, Aggregator and
DiagnosticSink together and walks each run through the RunMachine:

    IDLE -> RESOLVING -> (SKIPPED | CHECKING) -> PROCESSING -> FLUSHING -> DONE

with FAILED reachable from every state between RESOLVING and FLUSHING.
Runs never raise ``MinforgeError``; the error is captured on the returned
BatchResult so the host decides whether it aborts its own build.
"""

from __future__ import annotations

import logging
from contextlib import closing
from pathlib import Path

from minforge.config import Settings
from minforge.context import BuildContext
from minforge.context.filesystem import FilesystemBuildContext
from minforge.core.aggregator import Aggregator
from minforge.core.diagnostic_sink import DiagnosticSink
from minforge.core.errors import (
    ArtifactIOError,
    LintFailure,
    MinforgeError,
    NoSourcesError,
    TransformError,
)
from minforge.core.hasher import options_fingerprint
from minforge.core.run_machine import RunMachine
from minforge.core.source_resolver import SourceResolver
from minforge.core.staleness import StalenessChecker
from minforge.core.workers import ordered_map
from minforge.models.config import AggregateConfig, LintConfig, ProjectConfig, SourceConfig
from minforge.models.diagnostics import Diagnostic, Severity
from minforge.models.runs import BatchMode, BatchResult, RunState
from minforge.models.sources import SourceFile, SourceSet
from minforge.transforms import TransformKind, engine_session, get_transform, select_kind
from minforge.transforms.base import BaseTransform

logger = logging.getLogger(__name__)


class BatchRunner:
    """Drive aggregate and lint runs against a BuildContext.

    Parameters
    ----------
    context:
        Host collaborator.  Built from *settings* when not provided.
    settings:
        Runtime settings.  Uses defaults if not provided.
    """

    def __init__(
        self,
        context: BuildContext | None = None,
        *,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.context = context or FilesystemBuildContext.from_settings(self.settings)
        self.resolver = SourceResolver(self.context)
        self.checker = StalenessChecker(self.context)

    # ------------------------------------------------------------------
    # Aggregate mode
    # ------------------------------------------------------------------

    def run_aggregate(
        self, config: AggregateConfig, transform: BaseTransform | None = None
    ) -> BatchResult:
        """Resolve, check staleness, aggregate and flush one output artifact."""
        machine = RunMachine(BatchMode.AGGREGATE)
        # lint owns the host messages of a source; aggregating only adds
        sink = DiagnosticSink(self.context, replace_host_messages=False)
        output = config.output_path
        sources = SourceSet()
        processed: list[Path] = []

        try:
            sources = self._resolve(machine, config)
            if not sources:
                machine.skip("no sources")
                return self._result(machine, sink, sources, output=output, skipped=True)

            machine.transition(RunState.CHECKING)
            if not self.checker.is_stale(output, sources):
                machine.skip("output up to date")
                return self._result(machine, sink, sources, output=output, skipped=True)

            machine.transition(RunState.PROCESSING)
            transform = transform or get_transform(
                select_kind(config.kind, nominify=config.nominify),
                config.transform_options(),
            )
            aggregator = Aggregator(
                self.context,
                insert_newline=config.insert_newline,
                jobs=self.settings.jobs,
            )
            with engine_session(transform):
                data = aggregator.aggregate(sources, transform, sink)
            processed = sources.paths

            machine.transition(RunState.FLUSHING)
            aggregator.flush(output, data)
            machine.transition(RunState.DONE)
        except MinforgeError as exc:
            machine.fail(exc)
            logger.error("Aggregate %s failed: %s", output, exc)
        finally:
            self.context.finish()

        return self._result(machine, sink, sources, output=output, processed=processed)

    # ------------------------------------------------------------------
    # Lint mode
    # ------------------------------------------------------------------

    def run_lint(
        self, config: LintConfig, transform: BaseTransform | None = None
    ) -> BatchResult:
        """Lint every resolved source, continuing past per-file problems.

        Files unchanged since their last lint are not re-linted; their
        stored diagnostics are recorded again so the verdict covers them.
        """
        machine = RunMachine(BatchMode.LINT)
        sink = DiagnosticSink(self.context)
        sources = SourceSet()
        processed: list[Path] = []
        severity = Severity.ERROR if config.fail_on_problems else Severity.WARNING
        fingerprint = options_fingerprint(config.lint_options)

        try:
            sources = self._resolve(machine, config)
            if not sources:
                machine.skip("no sources")
                return self._result(machine, sink, sources, skipped=True)

            machine.transition(RunState.CHECKING, "per-file delta check")
            machine.transition(RunState.PROCESSING)
            transform = transform or get_transform(
                TransformKind.LINT, config.transform_options()
            )

            def lint_one(source: SourceFile) -> tuple[SourceFile, list[Diagnostic], bool]:
                if not self._has_delta(source, fingerprint):
                    return source, self.context.recall_diagnostics(source.path), False
                text = self._read(source)
                try:
                    diagnostics = transform.lint(source, text)
                except TransformError as exc:
                    diagnostics = [exc.diagnostic]
                return source, diagnostics, True

            with engine_session(transform):
                with closing(ordered_map(lint_one, sources.files, self.settings.jobs)) as results:
                    for source, diagnostics, linted in results:
                        sink.record(source.path, diagnostics, severity=severity)
                        if linted:
                            self.context.remember_diagnostics(source.path, fingerprint, diagnostics)
                            processed.append(source.path)
                        else:
                            logger.debug("%s unchanged since last lint", source.display_name)

            if not sink.verdict() and config.fail_on_problems:
                raise LintFailure(
                    f"There were lint errors in {len(sink.files())} file(s)", sink.all()
                )

            machine.transition(RunState.FLUSHING)
            machine.transition(RunState.DONE)
        except MinforgeError as exc:
            machine.fail(exc)
            logger.error("Lint failed: %s", exc)
        finally:
            self.context.finish()

        return self._result(machine, sink, sources, processed=processed)

    # ------------------------------------------------------------------
    # Project mode
    # ------------------------------------------------------------------

    def run_project(self, project: ProjectConfig) -> list[BatchResult]:
        """Run every lint execution, then every aggregate execution.

        Stops after the first failed run.
        """
        results: list[BatchResult] = []
        runs = [(self.run_lint, c) for c in project.lint] + [
            (self.run_aggregate, c) for c in project.aggregate
        ]
        for run, config in runs:
            result = run(config)
            results.append(result)
            if not result.passed:
                break
        return results

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve(self, machine: RunMachine, config: SourceConfig) -> SourceSet:
        machine.transition(RunState.RESOLVING)
        sources = self.resolver.resolve(config)
        if not sources and config.required:
            raise NoSourcesError("No sources to process")
        return sources

    def _has_delta(self, source: SourceFile, fingerprint: str) -> bool:
        try:
            return self.context.has_delta(source.path, fingerprint)
        except OSError as exc:
            raise ArtifactIOError(f"Could not read {source.path}: {exc}", source.path) from exc

    def _read(self, source: SourceFile) -> str:
        try:
            return self.context.read_text(source.path)
        except OSError as exc:
            raise ArtifactIOError(
                f"Could not execute lint on {source.path}: {exc}", source.path
            ) from exc

    @staticmethod
    def _result(
        machine: RunMachine,
        sink: DiagnosticSink,
        sources: SourceSet,
        *,
        output: Path | None = None,
        processed: list[Path] | None = None,
        skipped: bool = False,
    ) -> BatchResult:
        failed = machine.state == RunState.FAILED
        return BatchResult(
            mode=machine.mode,
            state=machine.state,
            passed=not failed,
            skipped=skipped,
            output=output,
            sources=sources.paths,
            processed=processed or [],
            diagnostics=sink.all(),
            history=machine.history,
            message=str(machine.error) if failed else _success_message(machine, skipped),
            error=machine.error,
        )


def _success_message(machine: RunMachine, skipped: bool) -> str:
    if skipped:
        history = machine.history
        reason = next((t.reason for t in history if t.to_state == RunState.SKIPPED), "")
        return f"Skipped: {reason}" if reason else "Skipped"
    return "Completed"
