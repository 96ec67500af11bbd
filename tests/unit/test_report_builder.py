"""Tests for ReportBuilder — join, deleted-model rows, inventory exclusion, ordering."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from ollama_usage.core.digests import DELETED_PREFIX_LENGTH
from ollama_usage.core.report_builder import ReportBuilder
from ollama_usage.models.usage import ManifestEntry, UsageRecord
from tests.helpers import GONE_DIGEST, IDLE_DIGEST, LLAMA_DIGEST, QWEN_DIGEST

T0 = datetime(2024, 10, 29, 7, 18, 20, tzinfo=timezone.utc)


def _entry(name: str, digest: str, size: int = 100) -> ManifestEntry:
    return ManifestEntry(name=name, digest=digest, size_bytes=size)


def _record(digest: str, count: int = 1, last_used: datetime | None = T0) -> UsageRecord:
    return UsageRecord(digest=digest, count=count, last_used=last_used)


class TestJoin:
    def test_one_name_one_row(self):
        rows = ReportBuilder().build(
            {LLAMA_DIGEST: (_entry("llama3:8b", LLAMA_DIGEST, 4661211808),)},
            {LLAMA_DIGEST: _record(LLAMA_DIGEST, count=2)},
        )
        assert len(rows) == 1
        assert rows[0].display_name == "llama3:8b"
        assert rows[0].count == 2
        assert rows[0].last_used == T0
        assert rows[0].size_bytes == 4661211808
        assert rows[0].is_deleted is False

    def test_multiple_names_share_usage(self):
        rows = ReportBuilder().build(
            {
                LLAMA_DIGEST: (
                    _entry("llama3:8b", LLAMA_DIGEST, 10),
                    _entry("llama3:latest", LLAMA_DIGEST, 20),
                )
            },
            {LLAMA_DIGEST: _record(LLAMA_DIGEST, count=3)},
        )
        assert len(rows) == 2
        assert {r.count for r in rows} == {3}
        assert {r.last_used for r in rows} == {T0}
        assert [(r.display_name, r.size_bytes) for r in rows] == [
            ("llama3:8b", 10),
            ("llama3:latest", 20),
        ]

    def test_deleted_model_row(self):
        (row,) = ReportBuilder().build({}, {GONE_DIGEST: _record(GONE_DIGEST, count=4)})
        assert row.display_name == GONE_DIGEST[:DELETED_PREFIX_LENGTH] + "-deleted"
        assert row.display_name == "ff82381e2bea-deleted"
        assert row.size_bytes is None
        assert row.is_deleted is True
        assert row.count == 4
        assert row.digest == GONE_DIGEST

    def test_inventory_only_digest_produces_no_rows(self):
        rows = ReportBuilder().build(
            {IDLE_DIGEST: (_entry("phi3:mini", IDLE_DIGEST),)},
            {},
        )
        assert rows == []

    def test_digest_match_is_exact(self):
        rows = ReportBuilder().build(
            {LLAMA_DIGEST.upper(): (_entry("llama3:8b", LLAMA_DIGEST.upper()),)},
            {LLAMA_DIGEST: _record(LLAMA_DIGEST)},
        )
        assert [r.is_deleted for r in rows] == [True]


class TestOrdering:
    def test_most_recent_first(self):
        rows = ReportBuilder().build(
            {
                LLAMA_DIGEST: (_entry("llama3:8b", LLAMA_DIGEST),),
                QWEN_DIGEST: (_entry("m/qwen2:7b", QWEN_DIGEST),),
            },
            {
                LLAMA_DIGEST: _record(LLAMA_DIGEST, last_used=T0 - timedelta(days=2)),
                QWEN_DIGEST: _record(QWEN_DIGEST, last_used=T0),
                GONE_DIGEST: _record(GONE_DIGEST, last_used=T0 - timedelta(days=1)),
            },
        )
        assert [r.display_name for r in rows] == [
            "m/qwen2:7b",
            "ff82381e2bea-deleted",
            "llama3:8b",
        ]

    def test_ties_broken_by_name(self):
        rows = ReportBuilder().build(
            {
                LLAMA_DIGEST: (_entry("zeta:1b", LLAMA_DIGEST),),
                QWEN_DIGEST: (_entry("alpha:1b", QWEN_DIGEST),),
            },
            {
                LLAMA_DIGEST: _record(LLAMA_DIGEST),
                QWEN_DIGEST: _record(QWEN_DIGEST),
            },
        )
        assert [r.display_name for r in rows] == ["alpha:1b", "zeta:1b"]

    def test_unknown_last_used_sorts_last(self):
        rows = ReportBuilder().build(
            {
                LLAMA_DIGEST: (_entry("aaa:first-by-name", LLAMA_DIGEST),),
                QWEN_DIGEST: (_entry("zzz:last-by-name", QWEN_DIGEST),),
            },
            {
                LLAMA_DIGEST: _record(LLAMA_DIGEST, last_used=None),
                QWEN_DIGEST: _record(QWEN_DIGEST, last_used=datetime(1999, 1, 1, tzinfo=timezone.utc)),
            },
        )
        assert [r.display_name for r in rows] == ["zzz:last-by-name", "aaa:first-by-name"]
        assert rows[-1].last_used is None

    def test_input_order_does_not_matter(self):
        manifest_index = {
            LLAMA_DIGEST: (_entry("llama3:8b", LLAMA_DIGEST),),
            QWEN_DIGEST: (_entry("m/qwen2:7b", QWEN_DIGEST),),
        }
        usage = {
            LLAMA_DIGEST: _record(LLAMA_DIGEST),
            QWEN_DIGEST: _record(QWEN_DIGEST, last_used=None),
            GONE_DIGEST: _record(GONE_DIGEST),
        }
        builder = ReportBuilder()
        forward = builder.build(manifest_index, usage)
        backward = builder.build(
            dict(reversed(manifest_index.items())), dict(reversed(usage.items()))
        )
        assert forward == backward


class TestUnlogged:
    def test_lists_installed_but_never_loaded(self):
        manifest_index = {
            LLAMA_DIGEST: (_entry("llama3:8b", LLAMA_DIGEST),),
            IDLE_DIGEST: (_entry("phi3:mini", IDLE_DIGEST), _entry("phi3:latest", IDLE_DIGEST)),
        }
        unlogged = ReportBuilder().unlogged(manifest_index, {LLAMA_DIGEST: _record(LLAMA_DIGEST)})
        assert [e.name for e in unlogged] == ["phi3:latest", "phi3:mini"]
