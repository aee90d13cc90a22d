"""Load executions from a ``minforge.toml`` project file.

Example::

    [[lint]]
    sourceDirectory = "src/main/js"
    failOnProblems = true
    lintOptions = { browser = true }

    [[aggregate]]
    kind = "css"
    output = "target/app-all.css"
    linebreakpos = 120

Relative paths in an execution resolve against the directory holding the
project file unless the execution sets ``base_dir`` itself.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

from pydantic import ValidationError

from minforge.core.errors import ConfigurationError
from minforge.models.config import ProjectConfig

logger = logging.getLogger(__name__)


def load_project(path: Path) -> ProjectConfig:
    """Parse and validate the project file at *path*.

    Raises ``ConfigurationError`` when the file is missing, is not valid
    TOML, or declares invalid executions.
    """
    path = Path(path)
    try:
        with path.open("rb") as handle:
            raw = tomllib.load(handle)
    except FileNotFoundError:
        raise ConfigurationError(f"Project file {path} does not exist") from None
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"Project file {path} is not valid TOML: {exc}") from exc

    return parse_project(raw, base_dir=path.parent)


def parse_project(raw: dict, base_dir: Path = Path(".")) -> ProjectConfig:
    """Validate an already-parsed project mapping."""
    executions: dict[str, list[dict]] = {}
    for section in ("lint", "aggregate"):
        entries = raw.get(section, [])
        if isinstance(entries, dict):
            entries = [entries]
        if not isinstance(entries, list):
            raise ConfigurationError(f"[{section}] must be a table or an array of tables")
        executions[section] = [{"base_dir": base_dir, **entry} for entry in entries]

    unknown = sorted(set(raw) - set(executions))
    if unknown:
        raise ConfigurationError(f"Unknown project sections: {', '.join(unknown)}")

    try:
        project = ProjectConfig.model_validate(executions)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid project configuration:\n{exc}") from exc

    logger.info(
        "Loaded %d lint and %d aggregate execution(s)",
        len(project.lint),
        len(project.aggregate),
    )
    return project
