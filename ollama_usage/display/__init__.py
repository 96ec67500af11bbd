"""Terminal rendering of usage reports."""

from ollama_usage.display.renderer import ReportRenderer, format_size

__all__ = ["ReportRenderer", "format_size"]
