"""Rich terminal renderer for usage reports.

Turns a ``UsageReport`` into up to four Rich tables:

- Active Models   : loaded models that are still installed
- Unlogged Models : installed models never seen in the logs
- Deleted Models  : loaded blobs no manifest references any more
- Warnings        : diagnostics, when requested
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from rich.console import Console
from rich.table import Table

from ollama_usage.core.digests import short_digest
from ollama_usage.models.diagnostics import Diagnostic
from ollama_usage.models.usage import ManifestEntry, ReportRow, UsageReport

_GIB = 1024 ** 3
_MIB = 1024 ** 2

_NO_DATE = "[dim]-[/dim]"


def format_size(size_bytes: int | None) -> str:
    """Human-readable size: GB from 1 GiB upwards, MB below.

    >>> format_size(4661211808)
    '4.3 GB'
    >>> format_size(1024 ** 2 * 512)
    '512.0 MB'
    """
    if size_bytes is None:
        return "-"
    if size_bytes >= _GIB:
        return f"{size_bytes / _GIB:.1f} GB"
    return f"{size_bytes / _MIB:.1f} MB"


def format_date(value: datetime | None) -> str:
    """Local calendar date of *value*, or a dim dash when unknown."""
    if value is None:
        return _NO_DATE
    return value.astimezone().strftime("%Y-%m-%d")


class ReportRenderer:
    """Renders ``UsageReport`` as Rich terminal output.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def active_table(self, rows: Sequence[ReportRow]) -> Table:
        table = Table(title="Active Models", title_justify="left", header_style="bold cyan")
        table.add_column("Model", style="bold")
        table.add_column("Last Used")
        table.add_column("Usage Count", justify="right")
        table.add_column("Size", justify="right")
        for row in rows:
            table.add_row(
                row.display_name,
                format_date(row.last_used),
                str(row.count),
                format_size(row.size_bytes),
            )
        return table

    def unlogged_table(self, entries: Sequence[ManifestEntry]) -> Table:
        table = Table(title="Unlogged Models", title_justify="left", header_style="bold cyan")
        table.add_column("Model", style="yellow")
        table.add_column("Size", justify="right")
        for entry in entries:
            table.add_row(entry.name, format_size(entry.size_bytes))
        return table

    def deleted_table(self, rows: Sequence[ReportRow]) -> Table:
        # No size column: the blob's manifest is gone
        table = Table(title="Deleted Models", title_justify="left", header_style="bold cyan")
        table.add_column("Model", style="dim")
        table.add_column("Last Used")
        table.add_column("Usage Count", justify="right")
        for row in rows:
            table.add_row(row.display_name, format_date(row.last_used), str(row.count))
        return table

    def inventory_table(self, entries: Sequence[ManifestEntry]) -> Table:
        table = Table(title="Installed Models", title_justify="left", header_style="bold cyan")
        table.add_column("Model", style="bold")
        table.add_column("Digest", style="dim")
        table.add_column("Size", justify="right")
        for entry in entries:
            table.add_row(entry.name, short_digest(entry.digest), format_size(entry.size_bytes))
        return table

    def diagnostics_table(self, diagnostics: Sequence[Diagnostic]) -> Table:
        table = Table(title="Warnings", title_justify="left", header_style="bold yellow")
        table.add_column("Kind", style="yellow")
        table.add_column("Source")
        table.add_column("Detail")
        for diag in diagnostics:
            source = diag.source
            if diag.line_number is not None:
                source = f"{source}:{diag.line_number}"
            table.add_row(diag.kind.value, source, diag.detail)
        return table

    # ------------------------------------------------------------------
    # Standalone print
    # ------------------------------------------------------------------

    def print_report(
        self,
        report: UsageReport,
        *,
        show_unlogged: bool = True,
        show_warnings: bool = False,
    ) -> None:
        """Print every non-empty section of *report*."""
        printed = False
        for rows_or_entries, make_table in (
            (report.active_rows, self.active_table),
            (report.unlogged if show_unlogged else [], self.unlogged_table),
            (report.deleted_rows, self.deleted_table),
        ):
            if rows_or_entries:
                self.console.print()
                self.console.print(make_table(rows_or_entries))
                printed = True

        if not printed:
            self.console.print("[dim]No model loads found in the logs.[/dim]")

        if report.diagnostics:
            self.console.print()
            if show_warnings:
                self.console.print(self.diagnostics_table(report.diagnostics))
            else:
                self.console.print(
                    f"[yellow]{len(report.diagnostics)} warning(s) while reading inputs; "
                    "rerun with --warnings to list them.[/yellow]"
                )

    def print_inventory(self, entries: Sequence[ManifestEntry]) -> None:
        if not entries:
            self.console.print("[dim]No installed models found.[/dim]")
            return
        self.console.print(self.inventory_table(entries))
