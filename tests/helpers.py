"""Builders for log lines and manifest documents used across the test suite."""

from __future__ import annotations

from typing import Any

from ollama_usage.core.manifest_indexer import MODEL_MEDIA_TYPE

LLAMA_DIGEST = "1a9a388336073f25f143cdd39abe37b306a367d031d6c04a79bbb545232ae113"
QWEN_DIGEST = "43f7a214e5329f672bb05404cfba1913cbb70fdaa1a17497224e1925046b0ed5"
GONE_DIGEST = "ff82381e2bea77d91c1b824c7afb83f6fb73e9f7de9dda631bcdbca564aa5435"
IDLE_DIGEST = "6a0746a1ec1aef3e7ec53868f220ff6e389f6f8ef87a01d77c96807de94ca2aa"


def marker_line(digest: str) -> str:
    """A model load line as written by the llama.cpp loader."""
    return (
        "llama_model_loader: loaded meta data with 35 key-value pairs and 362 tensors "
        f"from /Users/matt/.ollama/models/blobs/sha256-{digest} (version GGUF V3 (latest))"
    )


def time_line(timestamp: str) -> str:
    return f"time={timestamp} level=INFO source=server.go:105 msg=\"system memory\""


def manifest_document(blob_digest: str, size: Any = 4661211808, **layer_overrides: Any) -> dict[str, Any]:
    """A Docker-distribution style manifest with a model layer."""
    model_layer: dict[str, Any] = {
        "mediaType": MODEL_MEDIA_TYPE,
        "digest": f"sha256:{blob_digest}",
        "size": size,
    }
    model_layer.update(layer_overrides)
    return {
        "schemaVersion": 2,
        "mediaType": "application/vnd.docker.distribution.manifest.v2+json",
        "config": {
            "mediaType": "application/vnd.docker.container.image.v1+json",
            "digest": "sha256:" + "0" * 64,
            "size": 485,
        },
        "layers": [
            model_layer,
            {
                "mediaType": "application/vnd.ollama.image.license",
                "digest": "sha256:" + "1" * 64,
                "size": 12403,
            },
        ],
    }
