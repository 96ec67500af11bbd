"""``ollama-usage report`` — show per-model usage from the server logs.

Correlates model load events in the logs with the installed manifests and
prints active, unlogged and deleted models.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from ollama_usage.cli.logging_setup import configure_logging
from ollama_usage.config import UsageConfig
from ollama_usage.core.usage_pipeline import UsagePipeline
from ollama_usage.display.renderer import ReportRenderer
from ollama_usage.models.diagnostics import Diagnostic
from ollama_usage.sources.log_sources import default_log_source
from ollama_usage.sources.manifest_source import iter_manifest_documents, manifests_root
from ollama_usage.sources.platform_paths import default_models_dir

console = Console()


def resolve_models_dir(cfg: UsageConfig, override: Path | None) -> Path:
    """Command-line override, then ``OLLAMA_MODELS``/config, then platform default."""
    return override or cfg.models_dir or default_models_dir()


def report_cmd(
    models_dir: Path = typer.Option(
        None,
        "--models-dir",
        "-m",
        help="Ollama model store (defaults to $OLLAMA_MODELS or the platform default).",
    ),
    log_file: list[Path] = typer.Option(
        None,
        "--log-file",
        "-f",
        help="Log file to scan; repeat for several. Defaults to the platform's log source.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the report as JSON instead of tables.",
    ),
    warnings: bool = typer.Option(
        False,
        "--warnings",
        "-w",
        help="List every warning raised while reading logs and manifests.",
    ),
    unlogged: bool = typer.Option(
        None,
        "--unlogged/--no-unlogged",
        help="Show installed models that never appear in the logs.",
    ),
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Logging level for diagnostics on stderr.",
    ),
) -> None:
    """Show when each model was last loaded and how often.

    Logs and manifests are read once; the report is a point-in-time view.
    """
    cfg = UsageConfig()
    configure_logging(log_level or cfg.log_level)

    store = resolve_models_dir(cfg, models_dir)
    if not manifests_root(store).is_dir():
        console.print(f"[bold red]Manifests not found:[/bold red] {manifests_root(store)}")
        console.print("[dim]Set OLLAMA_MODELS or pass --models-dir.[/dim]")
        raise typer.Exit(code=1)

    if log_file:
        cfg = cfg.model_copy(update={"log_files": list(log_file)})

    collected: list[Diagnostic] = []
    documents = list(iter_manifest_documents(store, collected))
    blocks = default_log_source(cfg).blocks(collected)

    report = UsagePipeline().run(blocks, documents, diagnostics=collected)

    if as_json:
        typer.echo(report.model_dump_json(indent=2))
        return

    show_unlogged = cfg.show_unlogged if unlogged is None else unlogged
    ReportRenderer(console=console).print_report(
        report,
        show_unlogged=show_unlogged,
        show_warnings=warnings,
    )
