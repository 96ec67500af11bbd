"""Digest helpers shared by the log and manifest sides of the join.

Both sides key on the bare 64-character lowercase hex SHA-256 digest.
Logs spell it ``sha256-<hex>`` (blob file names), manifests spell it
``sha256:<hex>``; either prefix is stripped before use.
"""

from __future__ import annotations

import re

MANIFEST_DIGEST_PREFIX = "sha256:"
BLOB_DIGEST_PREFIX = "sha256-"

DELETED_PREFIX_LENGTH = 12
DELETED_SUFFIX = "-deleted"

_SHA256_HEX_RE = re.compile(r"[0-9a-f]{64}")


def normalize_digest(value: str) -> str:
    """Strip a ``sha256:`` or ``sha256-`` prefix, if present."""
    for prefix in (MANIFEST_DIGEST_PREFIX, BLOB_DIGEST_PREFIX):
        if value.startswith(prefix):
            return value[len(prefix):]
    return value


def is_sha256_hex(value: str) -> bool:
    """Return True if *value* is a bare lowercase SHA-256 hex digest."""
    return _SHA256_HEX_RE.fullmatch(value) is not None


def short_digest(digest: str, length: int = DELETED_PREFIX_LENGTH) -> str:
    return digest[:length]


def deleted_display_name(digest: str) -> str:
    """Display name for a digest that no manifest references any more.

    >>> deleted_display_name("1a9a388336073f25f143cdd39abe37b3" * 2)
    '1a9a38833607-deleted'
    """
    return f"{short_digest(digest)}{DELETED_SUFFIX}"
