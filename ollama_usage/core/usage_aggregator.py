"""UsageAggregator — folds load events into per-digest usage records."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime

from ollama_usage.models.usage import LogEvent, UsageRecord

UsageIndex = dict[str, UsageRecord]


def _later(a: datetime | None, b: datetime | None) -> datetime | None:
    if a is None:
        return b
    if b is None:
        return a
    return max(a, b)


class UsageAggregator:
    """Groups events by digest into ``UsageRecord``s.

    ``count`` includes events without a timestamp; ``last_used`` is the
    latest defined timestamp, or ``None`` if there is none.  The fold is
    associative and commutative, so event order never matters.
    """

    def aggregate(self, events: Iterable[LogEvent]) -> UsageIndex:
        counts: dict[str, int] = {}
        latest: dict[str, datetime | None] = {}
        for event in events:
            counts[event.digest] = counts.get(event.digest, 0) + 1
            latest[event.digest] = _later(latest.get(event.digest), event.loaded_at)
        return {
            digest: UsageRecord(digest=digest, count=counts[digest], last_used=latest[digest])
            for digest in sorted(counts)
        }

    @staticmethod
    def merge(*partials: Mapping[str, UsageRecord]) -> UsageIndex:
        """Combine usage indexes built from independent chunks of log text."""
        counts: dict[str, int] = {}
        latest: dict[str, datetime | None] = {}
        for partial in partials:
            for digest, record in partial.items():
                counts[digest] = counts.get(digest, 0) + record.count
                latest[digest] = _later(latest.get(digest), record.last_used)
        return {
            digest: UsageRecord(digest=digest, count=counts[digest], last_used=latest[digest])
            for digest in sorted(counts)
        }
