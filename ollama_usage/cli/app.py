"""Main Typer application — imports and registers all CLI commands.

Entry point: ``ollama-usage`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import typer

from ollama_usage import __version__
from ollama_usage.cli.commands.inventory_cmd import inventory_cmd
from ollama_usage.cli.commands.report_cmd import report_cmd

app = typer.Typer(
    name="ollama-usage",
    help="Per-model usage report for a local Ollama installation.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="report", help="Show per-model usage from the server logs.")(report_cmd)
app.command(name="inventory", help="List installed models.")(inventory_cmd)


@app.command(name="version", help="Print the ollama-usage version.")
def version_cmd() -> None:
    typer.echo(__version__)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
