"""Ant-style include/exclude pattern matching and directory scanning.

Pattern syntax (paths use ``/`` regardless of platform):

- ``*`` matches zero or more characters within one path segment
- ``?`` matches exactly one character within one path segment
- ``**`` matches zero or more whole path segments
- a pattern ending in ``/`` is treated as ``<pattern>**``
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from functools import lru_cache
from pathlib import Path

# Always excluded from scans unless use_default_excludes is False.
DEFAULT_EXCLUDES: tuple[str, ...] = (
    # editor backups and temp files
    "**/*~",
    "**/#*#",
    "**/.#*",
    "**/%*%",
    "**/*.swp",
    # OS metadata
    "**/._*",
    "**/.DS_Store",
    "**/Thumbs.db",
    # version control
    "**/CVS",
    "**/CVS/**",
    "**/.cvsignore",
    "**/RCS",
    "**/RCS/**",
    "**/SCCS",
    "**/SCCS/**",
    "**/vssver.scc",
    "**/.svn",
    "**/.svn/**",
    "**/.arch-ids",
    "**/.arch-ids/**",
    "**/.bzr",
    "**/.bzr/**",
    "**/.hg",
    "**/.hg/**",
    "**/.hgignore",
    "**/.git",
    "**/.git/**",
    "**/.gitignore",
    "**/.gitattributes",
    "**/_darcs",
    "**/_darcs/**",
)


def _translate_segment(segment: str) -> str:
    parts: list[str] = []
    for char in segment:
        if char == "*":
            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        else:
            parts.append(re.escape(char))
    return "".join(parts)


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile an Ant-style pattern into an anchored regular expression."""
    normalized = pattern.replace("\\", "/").lstrip("/")
    if normalized.endswith("/"):
        normalized += "**"
    segments = normalized.split("/")

    regex = ""
    for index, segment in enumerate(segments):
        last = index == len(segments) - 1
        if segment == "**":
            regex += ".*" if last else "(?:.*/)?"
        else:
            regex += _translate_segment(segment) + ("" if last else "/")
    return re.compile(regex)


def matches(relative_path: str, patterns: Iterable[str]) -> bool:
    """Return True if *relative_path* matches any of *patterns*."""
    return any(compile_pattern(p).fullmatch(relative_path) for p in patterns)


def scan(
    root: Path,
    includes: Iterable[str],
    excludes: Iterable[str] = (),
    *,
    use_default_excludes: bool = True,
) -> list[str]:
    """Recursively scan *root*, returning matching relative paths.

    Results use ``/`` separators and are sorted lexically.  Directories
    matching an exclude pattern are pruned without being descended into.
    """
    include_list = list(includes)
    exclude_list = list(excludes)
    if use_default_excludes:
        exclude_list.extend(DEFAULT_EXCLUDES)

    found: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root):
        rel_dir = Path(dirpath).relative_to(root).as_posix()
        prefix = "" if rel_dir == "." else f"{rel_dir}/"

        dirnames[:] = sorted(
            name for name in dirnames if not matches(prefix + name, exclude_list)
        )
        for name in filenames:
            relative = prefix + name
            if matches(relative, include_list) and not matches(relative, exclude_list):
                found.append(relative)

    return sorted(found)
