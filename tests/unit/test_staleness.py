"""Tests for StalenessChecker: timestamp comparison laws."""

from __future__ import annotations

import pytest

from minforge.core.errors import ArtifactIOError
from minforge.core.staleness import StalenessChecker
from minforge.models.sources import SourceFile, SourceSet

from fakes import UnreadableTimestampContext

SECOND = 1_000_000_000


@pytest.fixture
def checker(context) -> StalenessChecker:
    return StalenessChecker(context)


def _sources(*paths) -> SourceSet:
    return SourceSet(files=tuple(SourceFile(path=p) for p in paths))


class TestStaleness:
    def test_missing_output_is_stale_for_empty_sources(self, checker, tmp_dir):
        assert checker.is_stale(tmp_dir / "all.js", SourceSet()) is True

    def test_missing_output_is_stale(self, checker, write_source, tmp_dir):
        a = write_source("a.js", "a", mtime_ns=1 * SECOND)
        assert checker.is_stale(tmp_dir / "all.js", _sources(a)) is True

    def test_output_newer_than_all_sources(self, checker, write_source):
        a = write_source("a.js", "a", mtime_ns=1 * SECOND)
        b = write_source("b.js", "b", mtime_ns=2 * SECOND)
        out = write_source("all.js", "ab", mtime_ns=3 * SECOND)
        assert checker.is_stale(out, _sources(a, b)) is False

    def test_existing_output_with_no_sources_is_current(self, checker, write_source):
        out = write_source("all.js", "", mtime_ns=3 * SECOND)
        assert checker.is_stale(out, SourceSet()) is False

    def test_one_newer_source(self, checker, write_source):
        a = write_source("a.js", "a", mtime_ns=1 * SECOND)
        b = write_source("b.js", "b", mtime_ns=4 * SECOND)
        out = write_source("all.js", "ab", mtime_ns=3 * SECOND)
        assert checker.is_stale(out, _sources(a, b)) is True

    def test_equal_timestamp_is_current(self, checker, write_source):
        a = write_source("a.js", "a", mtime_ns=3 * SECOND)
        out = write_source("all.js", "a", mtime_ns=3 * SECOND)
        assert checker.is_stale(out, _sources(a)) is False

    def test_vanished_source_is_stale(self, checker, write_source, tmp_dir):
        out = write_source("all.js", "a", mtime_ns=3 * SECOND)
        assert checker.is_stale(out, _sources(tmp_dir / "gone.js")) is True

    def test_unreadable_timestamp_raises(self, write_source):
        a = write_source("a.js", "a", mtime_ns=1 * SECOND)
        out = write_source("all.js", "a", mtime_ns=3 * SECOND)
        checker = StalenessChecker(UnreadableTimestampContext())

        with pytest.raises(ArtifactIOError, match="Permission denied") as excinfo:
            checker.is_stale(out, _sources(a))
        assert excinfo.value.path == a
