"""ReportBuilder — joins usage records to manifest names.

The report is usage-centric: a digest that was never loaded produces no
row, even if it is installed.  A loaded digest produces one row per
model name that references it, all sharing the digest's statistics, or a
single ``<digest prefix>-deleted`` row when no manifest references it.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from ollama_usage.core.digests import deleted_display_name
from ollama_usage.models.usage import ManifestEntry, ReportRow, UsageRecord


def report_sort_key(row: ReportRow) -> tuple[bool, float, str, str]:
    """Most recently used first, unknown last use after all, then by name."""
    if row.last_used is None:
        return (True, 0.0, row.display_name, row.digest)
    return (False, -row.last_used.timestamp(), row.display_name, row.digest)


class ReportBuilder:
    """Builds ordered ``ReportRow``s from the two indexes."""

    def build(
        self,
        manifest_index: Mapping[str, Sequence[ManifestEntry]],
        usage_index: Mapping[str, UsageRecord],
    ) -> list[ReportRow]:
        rows: list[ReportRow] = []
        for digest, record in usage_index.items():
            entries = manifest_index.get(digest, ())
            if entries:
                rows.extend(
                    ReportRow(
                        display_name=entry.name,
                        digest=digest,
                        count=record.count,
                        last_used=record.last_used,
                        size_bytes=entry.size_bytes,
                    )
                    for entry in entries
                )
            else:
                rows.append(
                    ReportRow(
                        display_name=deleted_display_name(digest),
                        digest=digest,
                        count=record.count,
                        last_used=record.last_used,
                    )
                )
        return sorted(rows, key=report_sort_key)

    def unlogged(
        self,
        manifest_index: Mapping[str, Sequence[ManifestEntry]],
        usage_index: Mapping[str, UsageRecord],
    ) -> list[ManifestEntry]:
        """Installed models whose digest never appears in the logs."""
        entries = [
            entry
            for digest, digest_entries in manifest_index.items()
            if digest not in usage_index
            for entry in digest_entries
        ]
        return sorted(entries, key=lambda e: (e.name, e.digest))
