"""Reads manifest files from ``<models_dir>/manifests``."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from ollama_usage.models.diagnostics import Diagnostic, DiagnosticKind

logger = logging.getLogger(__name__)

MANIFESTS_SUBDIR = "manifests"


def manifests_root(models_dir: Path) -> Path:
    return Path(models_dir) / MANIFESTS_SUBDIR


def iter_manifest_documents(
    models_dir: Path,
    diagnostics: list[Diagnostic] | None = None,
) -> Iterator[tuple[str, Any]]:
    """Yield ``(relative_path, parsed_json)`` for every manifest file.

    Paths are relative to the manifests root, in sorted order.  Files that
    cannot be read or are not valid JSON are reported and skipped.
    """
    root = manifests_root(models_dir)
    if not root.is_dir():
        logger.info("No manifests directory at %s", root)
        return

    for path in sorted(p for p in root.rglob("*") if p.is_file()):
        relative = path.relative_to(root).as_posix()
        try:
            document = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.debug("Cannot read manifest %s: %s", path, exc)
            if diagnostics is not None:
                diagnostics.append(
                    Diagnostic(
                        kind=DiagnosticKind.MALFORMED_MANIFEST,
                        source=relative,
                        detail=f"unreadable manifest: {exc}",
                    )
                )
            continue
        yield relative, document
