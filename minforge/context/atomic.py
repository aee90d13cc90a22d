"""Atomic file replacement shared by artifacts, the delta cache and reports."""

from __future__ import annotations

import os
import stat
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


def target_mode(target: Path) -> int:
    """Permission bits a fresh write of *target* should end up with.

    An existing file keeps its mode; a new one gets ``0o666`` minus the
    process umask, as a plain ``open()`` would give it.
    """
    try:
        return stat.S_IMODE(Path(target).stat().st_mode)
    except FileNotFoundError:
        return 0o666 & ~_current_umask()


@contextmanager
def atomic_write(target: Path) -> Iterator[BinaryIO]:
    """Write *target* through a sibling temp file and rename it into place.

    If the block raises, the temp file is removed and *target* is left as
    it was.
    """
    target = Path(target)
    target.parent.mkdir(parents=True, exist_ok=True)
    mode = target_mode(target)
    fd, tmp_path = tempfile.mkstemp(
        dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "wb") as handle:
            yield handle
            handle.flush()
            os.fsync(handle.fileno())
        # mkstemp always creates 0600
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, target)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
