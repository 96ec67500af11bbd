"""Log sources — produce ``(source_name, lines)`` blocks for the extractor.

Two kinds exist:

- ``FileLogSource`` reads plain log files (macOS and Windows write
  ``server.log``, ``server-1.log``, ... into a log directory).
- ``JournalLogSource`` queries systemd's journal, where the Linux service
  sends its output.

A source that cannot be read yields nothing and records an
``UNREADABLE_SOURCE`` diagnostic; it never aborts the run.
"""

from __future__ import annotations

import logging
import platform
import shutil
import subprocess
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Protocol

from ollama_usage.config import UsageConfig
from ollama_usage.core.log_extractor import LogBlock
from ollama_usage.models.diagnostics import Diagnostic, DiagnosticKind
from ollama_usage.sources.platform_paths import default_log_dir

logger = logging.getLogger(__name__)


class LogSource(Protocol):
    """Anything that can produce ordered log line blocks."""

    def blocks(self, diagnostics: list[Diagnostic] | None = None) -> Iterator[LogBlock]:
        ...


def _unreadable(
    diagnostics: list[Diagnostic] | None, source: str, detail: str
) -> None:
    logger.warning("Cannot read log source %s: %s", source, detail)
    if diagnostics is not None:
        diagnostics.append(
            Diagnostic(kind=DiagnosticKind.UNREADABLE_SOURCE, source=source, detail=detail)
        )


class FileLogSource:
    """Reads a fixed list of log files, one block per file.

    Parameters
    ----------
    paths:
        Log files, in the order they should be scanned.
    """

    def __init__(self, paths: Sequence[Path]) -> None:
        self.paths = [Path(p) for p in paths]

    @classmethod
    def from_directory(cls, log_dir: Path, pattern: str = "server*.log") -> FileLogSource:
        """All files matching *pattern* in *log_dir*, by name, descending."""
        paths = sorted(Path(log_dir).glob(pattern), key=lambda p: p.name, reverse=True)
        return cls(paths)

    def blocks(self, diagnostics: list[Diagnostic] | None = None) -> Iterator[LogBlock]:
        for path in self.paths:
            try:
                text = path.read_bytes().decode("utf-8", errors="replace")
            except OSError as exc:
                _unreadable(diagnostics, str(path), str(exc))
                continue
            yield str(path), text.splitlines()


class JournalLogSource:
    """Reads the service's output from ``journalctl`` as a single block."""

    def __init__(self, unit: str = "ollama", *, timeout: float = 60.0) -> None:
        self.unit = unit
        self.timeout = timeout

    @property
    def command(self) -> list[str]:
        return ["journalctl", "-u", self.unit, "--no-pager", "-o", "cat"]

    def blocks(self, diagnostics: list[Diagnostic] | None = None) -> Iterator[LogBlock]:
        name = f"journal:{self.unit}"
        if shutil.which("journalctl") is None:
            _unreadable(diagnostics, name, "journalctl not found on PATH")
            return
        try:
            result = subprocess.run(
                self.command,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
            )
        except (subprocess.SubprocessError, OSError) as exc:
            _unreadable(diagnostics, name, str(exc))
            return
        if result.returncode != 0:
            _unreadable(
                diagnostics,
                name,
                result.stderr.strip() or f"journalctl exited with {result.returncode}",
            )
            return
        yield name, result.stdout.splitlines()


def default_log_source(cfg: UsageConfig, system: str | None = None) -> LogSource:
    """Pick the log source for this host.

    Explicit ``log_files`` win, then ``log_dir``, then the platform's
    default directory; Linux falls back to the journal.
    """
    if cfg.log_files:
        return FileLogSource(cfg.log_files)
    log_dir = cfg.log_dir or default_log_dir(system or platform.system())
    if log_dir is not None:
        return FileLogSource.from_directory(log_dir, cfg.log_glob)
    return JournalLogSource(cfg.journal_unit)
