"""Shared test fixtures for ollama-usage."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from tests.helpers import (
    GONE_DIGEST,
    IDLE_DIGEST,
    LLAMA_DIGEST,
    QWEN_DIGEST,
    manifest_document,
    marker_line,
    time_line,
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep the host's Ollama settings and .env file out of every test."""
    for var in ("OLLAMA_MODELS", "OLLAMA_USAGE_MODELS_DIR", "OLLAMA_USAGE_LOG_DIR",
                "OLLAMA_USAGE_LOG_FILES", "OLLAMA_USAGE_LOG_LEVEL",
                "OLLAMA_USAGE_SHOW_UNLOGGED"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def models_dir(tmp_path: Path) -> Path:
    """Provide an empty Ollama model store with a manifests directory."""
    store = tmp_path / "models"
    (store / "manifests").mkdir(parents=True)
    return store


@pytest.fixture
def write_manifest(models_dir: Path) -> Callable[..., Path]:
    """Factory fixture: write a manifest file under the model store."""

    def _factory(
        name: str,
        document: Any,
        registry: str = "registry.ollama.ai",
    ) -> Path:
        path = models_dir / "manifests" / registry / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(document, str):
            path.write_text(document, encoding="utf-8")
        else:
            path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _factory


@pytest.fixture
def populated_store(models_dir: Path, write_manifest: Callable[..., Path]) -> Path:
    """Two names sharing one blob, one user-namespaced model and one idle model."""
    write_manifest("library/llama3/8b", manifest_document(LLAMA_DIGEST))
    write_manifest("library/llama3/latest", manifest_document(LLAMA_DIGEST))
    write_manifest("m/qwen2/7b.q4_0-max", manifest_document(QWEN_DIGEST, size=524288000))
    write_manifest("library/phi3/mini", manifest_document(IDLE_DIGEST, size=2176178913))
    return models_dir


@pytest.fixture
def server_log_lines() -> list[str]:
    """Loads llama3 twice, qwen2 once and a since-deleted blob once."""
    return [
        "time=2024-10-28T09:00:00.000-07:00 level=INFO source=routes.go:1158 msg=\"server config\"",
        time_line("2024-10-28T09:15:02.118-07:00"),
        marker_line(LLAMA_DIGEST),
        "llama_model_loader: - kv   0: general.architecture str = llama",
        time_line("2024-10-29T07:18:20.601-07:00"),
        marker_line(QWEN_DIGEST),
        time_line("2024-10-27T11:00:00.000-07:00"),
        marker_line(GONE_DIGEST),
        time_line("2024-10-30T08:00:00.000-07:00"),
        marker_line(LLAMA_DIGEST),
    ]


@pytest.fixture
def log_file(tmp_path: Path, server_log_lines: list[str]) -> Path:
    """Write the sample server log to disk."""
    path = tmp_path / "logs" / "server.log"
    path.parent.mkdir(parents=True)
    path.write_text("\n".join(server_log_lines) + "\n", encoding="utf-8")
    return path
