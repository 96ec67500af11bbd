"""Non-fatal diagnostics surfaced by the correlation core and its sources."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class DiagnosticKind(str, Enum):
    """What went wrong with a single input unit."""

    UNPARSEABLE_TIMESTAMP = "unparseable_timestamp"
    MALFORMED_MANIFEST = "malformed_manifest"
    NO_TIMESTAMP_FOR_EVENT = "no_timestamp_for_event"
    UNREADABLE_SOURCE = "unreadable_source"


class Diagnostic(BaseModel):
    """A warning about one log line, manifest file, or log source.

    The unit it describes was excluded (or, for events without a
    timestamp, only partially used); the run itself carried on.
    """

    model_config = ConfigDict(frozen=True)

    kind: DiagnosticKind
    source: str  # log source name or manifest path
    detail: str
    line_number: int | None = None  # 1-based, log lines only

    def __str__(self) -> str:
        where = self.source
        if self.line_number is not None:
            where = f"{where}:{self.line_number}"
        return f"{self.kind.value}: {where}: {self.detail}"
