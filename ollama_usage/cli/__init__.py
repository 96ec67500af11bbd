"""ollama-usage CLI — Typer-based command-line interface.

Provides the ``ollama-usage`` command with subcommands for the usage
report and the installed-model inventory.

All output uses Rich for formatted terminal display.
"""
