"""ollama-usage data models — all Pydantic v2, all frozen (immutable)."""

from ollama_usage.models.diagnostics import Diagnostic, DiagnosticKind
from ollama_usage.models.usage import (
    LogEvent,
    ManifestEntry,
    ReportRow,
    UsageRecord,
    UsageReport,
)

__all__ = [
    # diagnostics
    "Diagnostic",
    "DiagnosticKind",
    # usage
    "LogEvent",
    "ManifestEntry",
    "UsageRecord",
    "ReportRow",
    "UsageReport",
]
