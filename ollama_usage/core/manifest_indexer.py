"""ManifestIndexer — maps blob digests to the model names that use them.

Manifests live at ``<root>/<registry>/<user>/<model>/<tag>`` and are
Docker-distribution style JSON documents::

    {
      "layers": [
        {"mediaType": "application/vnd.ollama.image.model",
         "digest": "sha256:1a9a3883...",
         "size": 4661211808},
        ...
      ]
    }

Documents are read tolerantly: unknown fields are ignored, and only the
fields of the model-weights layer are checked.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import PurePath
from typing import Any

from ollama_usage.core.digests import is_sha256_hex, normalize_digest
from ollama_usage.models.diagnostics import Diagnostic, DiagnosticKind
from ollama_usage.models.usage import ManifestEntry

logger = logging.getLogger(__name__)

MODEL_MEDIA_TYPE = "application/vnd.ollama.image.model"
LIBRARY_NAMESPACE = "library"

ManifestIndex = dict[str, tuple[ManifestEntry, ...]]


class MalformedManifestError(ValueError):
    """Raised internally when a manifest's model layer cannot be read."""


def model_name_from_path(path: str | PurePath) -> str | None:
    """Derive ``user/model:tag`` from the last four path components.

    The registry component is discarded and the ``library`` namespace is
    elided.  Returns ``None`` for paths with fewer than four components.

    >>> model_name_from_path("manifests/registry.ollama.ai/library/llama3/8b")
    'llama3:8b'
    >>> model_name_from_path("registry.ollama.ai/m/qwen2/7b.q4_0-max")
    'm/qwen2:7b.q4_0-max'
    """
    parts = PurePath(path).parts
    if len(parts) < 4:
        return None
    _registry, user, model, tag = parts[-4:]
    if user == LIBRARY_NAMESPACE:
        return f"{model}:{tag}"
    return f"{user}/{model}:{tag}"


def find_model_layer(document: Any) -> Mapping[str, Any] | None:
    """Return the first layer whose media type marks the model weights.

    Raises ``MalformedManifestError`` if ``layers`` is missing or is not
    a list.
    """
    if not isinstance(document, Mapping):
        raise MalformedManifestError("document is not a JSON object")
    layers = document.get("layers")
    if not isinstance(layers, list):
        raise MalformedManifestError("missing 'layers' array")
    for layer in layers:
        if isinstance(layer, Mapping) and layer.get("mediaType") == MODEL_MEDIA_TYPE:
            return layer
    return None


def read_model_layer(layer: Mapping[str, Any]) -> tuple[str, int]:
    """Return ``(digest, size_bytes)`` from a model layer."""
    raw_digest = layer.get("digest")
    if not isinstance(raw_digest, str):
        raise MalformedManifestError("model layer has no 'digest' string")
    digest = normalize_digest(raw_digest)
    if not is_sha256_hex(digest):
        raise MalformedManifestError(f"model layer digest is not a sha256 digest: {raw_digest!r}")
    size = layer.get("size")
    # bool is an int subclass; JSON true/false is not a size
    if not isinstance(size, int) or isinstance(size, bool) or size < 0:
        raise MalformedManifestError(f"model layer 'size' is not an unsigned integer: {size!r}")
    return digest, size


class ManifestIndexer:
    """Builds a ``digest -> entries`` index from parsed manifest documents.

    One bad manifest never stops the rest from being indexed: it is
    dropped and reported through the optional diagnostics list.
    """

    def index(
        self,
        documents: Iterable[tuple[str | PurePath, Any]],
        diagnostics: list[Diagnostic] | None = None,
    ) -> ManifestIndex:
        """Index ``(path, document)`` pairs, in any order.

        Entries sharing a digest are de-duplicated and sorted by name so
        the output does not depend on input order.
        """
        grouped: dict[str, set[ManifestEntry]] = {}
        for path, document in documents:
            entry = self.entry_for(path, document, diagnostics)
            if entry is not None:
                grouped.setdefault(entry.digest, set()).add(entry)
        return self._freeze(grouped)

    def entry_for(
        self,
        path: str | PurePath,
        document: Any,
        diagnostics: list[Diagnostic] | None = None,
    ) -> ManifestEntry | None:
        """Resolve one manifest to its ``ManifestEntry``, or ``None``."""
        try:
            layer = find_model_layer(document)
            if layer is None:
                logger.debug("%s: no model layer, skipping", path)
                return None
            digest, size = read_model_layer(layer)
            name = model_name_from_path(path)
            if name is None:
                raise MalformedManifestError(
                    "path is not <registry>/<user>/<model>/<tag>"
                )
        except MalformedManifestError as exc:
            logger.debug("Skipping manifest %s: %s", path, exc)
            if diagnostics is not None:
                diagnostics.append(
                    Diagnostic(
                        kind=DiagnosticKind.MALFORMED_MANIFEST,
                        source=str(path),
                        detail=str(exc),
                    )
                )
            return None
        return ManifestEntry(name=name, digest=digest, size_bytes=size)

    @classmethod
    def merge(cls, *partials: ManifestIndex) -> ManifestIndex:
        """Union partial indexes built from disjoint sets of manifests."""
        grouped: dict[str, set[ManifestEntry]] = {}
        for partial in partials:
            for digest, entries in partial.items():
                grouped.setdefault(digest, set()).update(entries)
        return cls._freeze(grouped)

    @staticmethod
    def _freeze(grouped: dict[str, set[ManifestEntry]]) -> ManifestIndex:
        return {
            digest: tuple(sorted(entries, key=lambda e: (e.name, e.size_bytes)))
            for digest, entries in sorted(grouped.items())
        }
