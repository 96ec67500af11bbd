"""Usage correlation models — all frozen, built fresh per run."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt

from ollama_usage.models.diagnostics import Diagnostic


class LogEvent(BaseModel):
    """One model load observed in the server log.

    ``loaded_at`` is ``None`` when the marker line appeared before any
    timestamp line in its source.
    """

    model_config = ConfigDict(frozen=True)

    digest: str
    loaded_at: datetime | None = None


class ManifestEntry(BaseModel):
    """The model-weights layer of one manifest, resolved to a display name."""

    model_config = ConfigDict(frozen=True)

    name: str  # "user/model:tag" or "model:tag" for the library namespace
    digest: str
    size_bytes: NonNegativeInt


class UsageRecord(BaseModel):
    """Aggregated load statistics for one blob digest."""

    model_config = ConfigDict(frozen=True)

    digest: str
    count: NonNegativeInt = 0
    last_used: datetime | None = None


class ReportRow(BaseModel):
    """One display line of the usage report.

    Usage is tracked per blob and displayed per name, so rows derived from
    the same digest share ``count`` and ``last_used``.
    """

    model_config = ConfigDict(frozen=True)

    display_name: str
    digest: str
    count: NonNegativeInt
    last_used: datetime | None = None
    size_bytes: NonNegativeInt | None = None

    @property
    def is_deleted(self) -> bool:
        """True when no surviving manifest references this row's digest."""
        return self.size_bytes is None


class UsageReport(BaseModel):
    """Output of a full correlation run."""

    model_config = ConfigDict(frozen=True)

    rows: list[ReportRow] = []
    unlogged: list[ManifestEntry] = []  # installed but never loaded
    diagnostics: list[Diagnostic] = []
    generated_at: datetime = Field(default_factory=lambda: datetime.now().astimezone())

    @property
    def active_rows(self) -> list[ReportRow]:
        """Rows whose digest is still referenced by a manifest."""
        return [r for r in self.rows if not r.is_deleted]

    @property
    def deleted_rows(self) -> list[ReportRow]:
        """Rows for digests with no surviving manifest."""
        return [r for r in self.rows if r.is_deleted]
