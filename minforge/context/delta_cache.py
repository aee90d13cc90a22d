"""Persistent content-hash cache used to skip re-linting unchanged files.

Each entry records the SHA-256 digest of the file as last processed, the
fingerprint of the options it was processed with, and the diagnostics that
run produced so they can be re-reported without re-running the engine.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from minforge.context.atomic import atomic_write
from minforge.core.hasher import sha256_file
from minforge.models.diagnostics import Diagnostic

logger = logging.getLogger(__name__)


class DeltaEntry(BaseModel):
    """Cached state of a processed file."""

    model_config = ConfigDict(frozen=True)

    digest: str
    fingerprint: str = ""
    diagnostics: list[Diagnostic] = []
    recorded_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )


class DeltaCache:
    """Track file digests and their last diagnostics on disk.

    Entries are keyed by the resolved path of the file.  Nothing is
    written until :meth:`save` is called.
    """

    def __init__(self, cache_file: Path) -> None:
        self.cache_file = Path(cache_file)
        self._entries: dict[str, DeltaEntry] = {}
        self._pending: dict[str, str] = {}
        self._dirty = False
        self._load()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def has_changed(self, path: Path, fingerprint: str = "") -> bool:
        """Return True when the content or options differ from the cache.

        The computed digest is staged so :meth:`record` does not hash the
        same file again.
        """
        key = self._key(path)
        digest = sha256_file(Path(path))
        self._pending[key] = digest

        entry = self._entries.get(key)
        if entry is None:
            return True
        return entry.digest != digest or entry.fingerprint != fingerprint

    def record(
        self, path: Path, fingerprint: str, diagnostics: list[Diagnostic]
    ) -> None:
        """Create or replace the entry for *path* after processing."""
        key = self._key(path)
        digest = self._pending.pop(key, None) or sha256_file(Path(path))
        self._entries[key] = DeltaEntry(
            digest=digest,
            fingerprint=fingerprint,
            diagnostics=list(diagnostics),
        )
        self._dirty = True

    def diagnostics_for(self, path: Path) -> list[Diagnostic]:
        entry = self._entries.get(self._key(path))
        return list(entry.diagnostics) if entry else []

    def save(self) -> None:
        """Persist the cache using an atomic write."""
        if not self._dirty:
            return

        data = {key: entry.model_dump(mode="json") for key, entry in self._entries.items()}
        with atomic_write(self.cache_file) as handle:
            handle.write(json.dumps(data, indent=2, sort_keys=True).encode("utf-8"))
        self._dirty = False

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _key(path: Path) -> str:
        return str(Path(path).resolve())

    def _load(self) -> None:
        if not self.cache_file.exists():
            return

        try:
            raw = json.loads(self.cache_file.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Delta cache %s is corrupted; starting fresh", self.cache_file)
            return
        except OSError as exc:
            logger.warning("Unable to read delta cache %s: %s", self.cache_file, exc)
            return

        if not isinstance(raw, dict):
            return
        for key, payload in raw.items():
            try:
                self._entries[key] = DeltaEntry.model_validate(payload)
            except ValidationError:
                logger.debug("Dropping malformed delta cache entry for %s", key)
