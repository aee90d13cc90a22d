"""Runtime settings: env-driven, shared by every execution.

Reads from a .env file and MINFORGE_* environment variables.  Execution
options (sources, output, minifier toggles) live in ``minforge.toml`` and
are modelled by ``minforge.models.config``.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export MINFORGE_LOG_LEVEL=DEBUG
        export MINFORGE_JOBS=4
        export MINFORGE_REPORT_PATH=target/minforge-report.json
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="MINFORGE_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    # Project layout
    base_dir: Path = Path(".")
    config_file: Path = Path("minforge.toml")

    # Incremental state
    delta_cache_path: Path | None = Path(".minforge/delta-cache.json")

    # Reporting
    report_path: Path | None = None
    console_diagnostics: bool = True

    # Per-file transform/lint worker threads; 1 = sequential
    jobs: int = Field(default=1, ge=1)

    def resolve(self, path: Path) -> Path:
        return path if path.is_absolute() else self.base_dir / path
