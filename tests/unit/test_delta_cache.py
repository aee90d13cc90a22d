"""Tests for the persistent delta cache."""

from __future__ import annotations

import json
from pathlib import Path

from minforge.context.delta_cache import DeltaCache
from minforge.models.diagnostics import Severity


class TestDeltaCache:
    def test_new_file_has_changed(self, delta_cache, write_source):
        path = write_source("a.js", "a")
        assert delta_cache.has_changed(path) is True

    def test_unchanged_after_record(self, delta_cache, write_source):
        path = write_source("a.js", "a")
        delta_cache.has_changed(path, "opts")
        delta_cache.record(path, "opts", [])
        assert delta_cache.has_changed(path, "opts") is False

    def test_content_change_detected(self, delta_cache, write_source):
        path = write_source("a.js", "a")
        delta_cache.record(path, "", [])
        path.write_text("b")
        assert delta_cache.has_changed(path) is True

    def test_fingerprint_change_detected(self, delta_cache, write_source):
        path = write_source("a.js", "a")
        delta_cache.record(path, "one", [])
        assert delta_cache.has_changed(path, "two") is True

    def test_diagnostics_round_trip_through_disk(self, tmp_dir, write_source, make_diagnostic):
        cache_file = tmp_dir / "cache" / "delta.json"
        path = write_source("a.js", "a")
        diagnostic = make_diagnostic(severity=Severity.WARNING)

        cache = DeltaCache(cache_file)
        cache.record(path, "fp", [diagnostic])
        cache.save()

        reloaded = DeltaCache(cache_file)
        assert reloaded.diagnostics_for(path) == [diagnostic]
        assert reloaded.has_changed(path, "fp") is False
        assert reloaded.has_changed(path, "other") is True

    def test_save_without_changes_writes_nothing(self, tmp_dir):
        cache = DeltaCache(tmp_dir / "delta.json")
        cache.save()
        assert not (tmp_dir / "delta.json").exists()

    def test_corrupted_cache_starts_fresh(self, tmp_dir, write_source):
        cache_file = tmp_dir / "delta.json"
        cache_file.write_text("{broken")
        cache = DeltaCache(cache_file)
        assert cache.has_changed(write_source("a.js", "a")) is True

    def test_malformed_entries_dropped(self, tmp_dir, write_source):
        good = write_source("good.js", "g")
        seed = DeltaCache(tmp_dir / "delta.json")
        seed.record(good, "", [])
        seed.save()

        data = json.loads((tmp_dir / "delta.json").read_text())
        data["/bogus.js"] = {"fingerprint": 3}
        (tmp_dir / "delta.json").write_text(json.dumps(data))

        cache = DeltaCache(tmp_dir / "delta.json")
        assert cache.has_changed(good) is False
        assert cache.diagnostics_for(Path("/bogus.js")) == []
