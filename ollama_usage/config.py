"""Runtime configuration — env-driven, pydantic-settings based.

Reads from a .env file and OLLAMA_USAGE_* environment variables.  The
manifest root also honours Ollama's own ``OLLAMA_MODELS`` variable, so a
relocated model store is found without extra setup.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class UsageConfig(BaseSettings):
    """Configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export OLLAMA_MODELS=/data/ollama/models
        export OLLAMA_USAGE_LOG_DIR=/var/log/ollama
        export OLLAMA_USAGE_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="OLLAMA_USAGE_",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Model store; None means the platform default
    models_dir: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("OLLAMA_MODELS", "OLLAMA_USAGE_MODELS_DIR"),
    )

    # Log sources; explicit files win over log_dir, which wins over the platform default
    log_dir: Path | None = None
    log_files: list[Path] = []
    log_glob: str = "server*.log"
    journal_unit: str = "ollama"

    # Output
    log_level: str = "WARNING"
    show_unlogged: bool = True

