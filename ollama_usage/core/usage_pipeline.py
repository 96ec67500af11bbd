"""UsagePipeline — wires the four correlation components together.

log blocks  -> LogEventExtractor -> UsageAggregator --\
                                                       +-> ReportBuilder -> UsageReport
manifests   -> ManifestIndexer -----------------------/

The pipeline performs no I/O of its own.  Inputs come from
``ollama_usage.sources`` (or from tests) already materialised as text and
parsed JSON; the result is a frozen ``UsageReport``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import PurePath
from typing import Any

from ollama_usage.core.log_extractor import LogBlock, LogEventExtractor
from ollama_usage.core.manifest_indexer import ManifestIndexer
from ollama_usage.core.report_builder import ReportBuilder
from ollama_usage.core.usage_aggregator import UsageAggregator
from ollama_usage.models.diagnostics import Diagnostic
from ollama_usage.models.usage import UsageReport

logger = logging.getLogger(__name__)


class UsagePipeline:
    """Runs one correlation pass over a snapshot of logs and manifests.

    Parameters
    ----------
    extractor, indexer, aggregator, builder:
        Component instances; defaults are created when omitted.
    """

    def __init__(
        self,
        *,
        extractor: LogEventExtractor | None = None,
        indexer: ManifestIndexer | None = None,
        aggregator: UsageAggregator | None = None,
        builder: ReportBuilder | None = None,
    ) -> None:
        self.extractor = extractor or LogEventExtractor()
        self.indexer = indexer or ManifestIndexer()
        self.aggregator = aggregator or UsageAggregator()
        self.builder = builder or ReportBuilder()

    def run(
        self,
        log_blocks: Iterable[LogBlock],
        manifest_documents: Iterable[tuple[str | PurePath, Any]],
        *,
        diagnostics: list[Diagnostic] | None = None,
    ) -> UsageReport:
        """Correlate logs with manifests and return the report.

        ``diagnostics`` is the list the input sources report into.  The core
        appends its own warnings to the same list, so problems raised while
        lazily reading log sources land in the report too.
        """
        collected = diagnostics if diagnostics is not None else []

        manifest_index = self.indexer.index(manifest_documents, collected)
        events = self.extractor.extract(log_blocks, collected)
        usage_index = self.aggregator.aggregate(events)

        rows = self.builder.build(manifest_index, usage_index)
        unlogged = self.builder.unlogged(manifest_index, usage_index)

        logger.info(
            "Correlated %d loaded digest(s) with %d indexed digest(s): %d row(s), %d warning(s)",
            len(usage_index),
            len(manifest_index),
            len(rows),
            len(collected),
        )
        return UsageReport(rows=rows, unlogged=unlogged, diagnostics=list(collected))
