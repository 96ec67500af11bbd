"""ollama-usage: which local Ollama models are used, how often, and when.

Correlates model load events in the Ollama server logs with the manifest
store to report, per model name, the load count, last load date and
size, including blobs whose manifests have since been deleted.
"""

__version__ = "0.1.0"

from ollama_usage.core.usage_pipeline import UsagePipeline

__all__ = ["UsagePipeline", "__version__"]
