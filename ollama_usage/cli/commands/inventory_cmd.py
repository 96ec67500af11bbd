"""``ollama-usage inventory`` — list installed models from the manifests."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from ollama_usage.cli.commands.report_cmd import resolve_models_dir
from ollama_usage.cli.logging_setup import configure_logging
from ollama_usage.config import UsageConfig
from ollama_usage.core.manifest_indexer import ManifestIndexer
from ollama_usage.display.renderer import ReportRenderer
from ollama_usage.sources.manifest_source import iter_manifest_documents, manifests_root

console = Console()


def inventory_cmd(
    models_dir: Path = typer.Option(
        None,
        "--models-dir",
        "-m",
        help="Ollama model store (defaults to $OLLAMA_MODELS or the platform default).",
    ),
) -> None:
    """List every installed model with its blob digest and size."""
    cfg = UsageConfig()
    configure_logging(cfg.log_level)

    store = resolve_models_dir(cfg, models_dir)
    if not manifests_root(store).is_dir():
        console.print(f"[bold red]Manifests not found:[/bold red] {manifests_root(store)}")
        raise typer.Exit(code=1)

    index = ManifestIndexer().index(iter_manifest_documents(store))
    entries = sorted(
        (entry for entries in index.values() for entry in entries),
        key=lambda e: e.name,
    )
    ReportRenderer(console=console).print_inventory(entries)
