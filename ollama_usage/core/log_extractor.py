"""LogEventExtractor — turns server log text into model load events.

Ollama logs every model load with a ``llama_model_loader: loaded meta
data ...`` line naming the blob file (``.../blobs/sha256-<hex>``).  The
line itself carries no time; the most recent timestamp seen earlier in
the same source is used instead.  Two timestamp forms are recognised::

    time=2024-10-29T07:18:20.601-07:00 level=INFO source=server.go ...
    2024/10/29 07:18:20 routes.go:1158: INFO server config ...

The first is ISO-8601 with an explicit UTC offset.  The second is the
older log format and is read as local time.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from datetime import datetime

from ollama_usage.core.digests import BLOB_DIGEST_PREFIX
from ollama_usage.models.diagnostics import Diagnostic, DiagnosticKind
from ollama_usage.models.usage import LogEvent

logger = logging.getLogger(__name__)

MARKER_PREFIX = "llama_model_loader: loaded meta data"

_TIME_TOKEN_RE = re.compile(r"(?:^|\s)time=(\S+)")
_LEGACY_TIME_RE = re.compile(r"^(\d{4}/\d{2}/\d{2} \d{2}:\d{2}:\d{2})")
_BLOB_DIGEST_RE = re.compile(re.escape(BLOB_DIGEST_PREFIX) + r"([^/\s]+)")

LogBlock = tuple[str, Iterable[str]]


def parse_iso_timestamp(token: str) -> datetime | None:
    """Parse an ISO-8601 timestamp that carries a UTC offset.

    Returns ``None`` if the token is not ISO-8601 or has no offset.
    """
    try:
        parsed = datetime.fromisoformat(token)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return None
    return parsed


def parse_legacy_timestamp(text: str) -> datetime | None:
    """Parse a ``YYYY/MM/DD HH:MM:SS`` local-time prefix."""
    try:
        naive = datetime.strptime(text, "%Y/%m/%d %H:%M:%S")
    except ValueError:
        return None
    return naive.astimezone()


def extract_digest(line: str) -> str | None:
    """Return the digest after the first ``sha256-`` in *line*, if any."""
    match = _BLOB_DIGEST_RE.search(line)
    return match.group(1) if match else None


class LogEventExtractor:
    """Scans log line blocks and yields one ``LogEvent`` per marker line.

    The extractor holds no state between calls: every ``extract()`` starts
    from scratch, so the same text always yields the same events.

    Each block is ``(source_name, lines)``.  Blocks are processed in the
    order given and each has its own "most recent timestamp"; a timestamp
    from one log file never dates an event in the next.
    """

    def extract(
        self,
        blocks: Iterable[LogBlock],
        diagnostics: list[Diagnostic] | None = None,
    ) -> Iterator[LogEvent]:
        """Lazily yield events from all *blocks* in source order.

        Parameters
        ----------
        blocks:
            ``(source_name, lines)`` pairs, one per log source.
        diagnostics:
            Optional caller-owned list; non-fatal problems are appended.
        """
        for source, lines in blocks:
            yield from self._extract_block(source, lines, diagnostics)

    def extract_lines(
        self,
        lines: Iterable[str],
        *,
        source: str = "<text>",
        diagnostics: list[Diagnostic] | None = None,
    ) -> Iterator[LogEvent]:
        """Convenience wrapper for a single block of lines."""
        return self.extract([(source, lines)], diagnostics)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _extract_block(
        self,
        source: str,
        lines: Iterable[str],
        diagnostics: list[Diagnostic] | None,
    ) -> Iterator[LogEvent]:
        last_seen: datetime | None = None

        for line_number, raw in enumerate(lines, start=1):
            line = raw.rstrip("\r\n")

            if line.startswith(MARKER_PREFIX):
                digest = extract_digest(line)
                if digest is None:
                    logger.debug("%s:%d: marker line without a blob digest", source, line_number)
                    continue
                if last_seen is None:
                    self._report(
                        diagnostics,
                        DiagnosticKind.NO_TIMESTAMP_FOR_EVENT,
                        source,
                        f"load of {digest[:12]} has no preceding timestamp",
                        line_number,
                    )
                yield LogEvent(digest=digest, loaded_at=last_seen)
                continue

            time_match = _TIME_TOKEN_RE.search(line)
            if time_match:
                parsed = parse_iso_timestamp(time_match.group(1))
                if parsed is None:
                    self._report(
                        diagnostics,
                        DiagnosticKind.UNPARSEABLE_TIMESTAMP,
                        source,
                        f"cannot parse timestamp {time_match.group(1)!r}",
                        line_number,
                    )
                else:
                    last_seen = parsed
                continue

            legacy_match = _LEGACY_TIME_RE.match(line)
            if legacy_match:
                parsed = parse_legacy_timestamp(legacy_match.group(1))
                if parsed is None:
                    self._report(
                        diagnostics,
                        DiagnosticKind.UNPARSEABLE_TIMESTAMP,
                        source,
                        f"cannot parse timestamp {legacy_match.group(1)!r}",
                        line_number,
                    )
                else:
                    last_seen = parsed

    @staticmethod
    def _report(
        diagnostics: list[Diagnostic] | None,
        kind: DiagnosticKind,
        source: str,
        detail: str,
        line_number: int,
    ) -> None:
        logger.debug("%s:%d: %s", source, line_number, detail)
        if diagnostics is not None:
            diagnostics.append(
                Diagnostic(kind=kind, source=source, detail=detail, line_number=line_number)
            )
