"""Input collection — the only part of ollama-usage that touches the host.

Locates the manifest store and the server logs for the current platform,
reads them, and hands plain text and parsed JSON to the correlation core.
"""

from ollama_usage.sources.log_sources import (
    FileLogSource,
    JournalLogSource,
    LogSource,
    default_log_source,
)
from ollama_usage.sources.manifest_source import iter_manifest_documents
from ollama_usage.sources.platform_paths import default_log_dir, default_models_dir

__all__ = [
    "FileLogSource",
    "JournalLogSource",
    "LogSource",
    "default_log_source",
    "iter_manifest_documents",
    "default_log_dir",
    "default_models_dir",
]
