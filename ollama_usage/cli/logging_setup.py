"""Logging configuration for CLI invocations."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "ollama-usage"


def configure_logging(level: str = "WARNING") -> None:
    """Route the ``ollama_usage`` loggers to stderr through Rich.

    Safe to call more than once; the handler is installed only once.
    """
    package_logger = logging.getLogger("ollama_usage")
    package_logger.setLevel(level.upper())
    if any(h.get_name() == _HANDLER_NAME for h in package_logger.handlers):
        return
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.set_name(_HANDLER_NAME)
    package_logger.addHandler(handler)
    package_logger.propagate = False
