"""Per-platform default locations of the Ollama model store and logs."""

from __future__ import annotations

import os
import platform
from pathlib import Path

LINUX_MODELS_DIR = Path("/usr/share/ollama/.ollama/models")


def default_models_dir(system: str | None = None) -> Path:
    """Default model store for *system* (``platform.system()`` if None).

    ``OLLAMA_MODELS`` is handled by ``UsageConfig``, not here.
    """
    system = system or platform.system()
    if system == "Linux":
        return LINUX_MODELS_DIR
    return Path.home() / ".ollama" / "models"


def default_log_dir(system: str | None = None) -> Path | None:
    """Directory holding ``server*.log`` files, or None where logs go to journald."""
    system = system or platform.system()
    if system == "Darwin":
        return Path.home() / ".ollama" / "logs"
    if system == "Windows":
        local_app_data = os.environ.get("LOCALAPPDATA")
        base = Path(local_app_data) if local_app_data else Path.home() / "AppData" / "Local"
        return base / "Ollama"
    return None
