"""Cache keys and content hashes for source images."""

from __future__ import annotations

import hashlib
from pathlib import Path

_CHUNK_SIZE = 1024 * 1024


def cache_key(collection_key: str, filename: str) -> str:
    """Logical key for a source image: ``<collection>/<filename>``."""
    return f"{collection_key}/{filename}"


def hash_file(path: str | Path) -> str:
    """Hash a file's full contents.

    Timestamps are never consulted; any byte-level change yields a new digest.
    """
    digest = hashlib.md5(usedforsecurity=False)
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()
