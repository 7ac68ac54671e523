"""Persistent content-hash store backed by a single JSON file."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, ValidationError

from folio.types import CacheEntry, DerivedImageData

logger = logging.getLogger(__name__)


class StoreStats(BaseModel):
    """Summary of the on-disk store."""

    path: str
    entries: int = 0
    size_kb: float = 0.0
    dirty: bool = False


class ImageCacheStore:
    """What was last derived, and from which exact bytes.

    Loaded once per build, mutated in memory, written once at the end. Read
    and write failures are logged and never raised: losing the cache costs a
    slower next build, not a wrong one.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._entries: dict[str, CacheEntry] = {}
        self._dirty = False

    @property
    def path(self) -> Path:
        return self._path

    @property
    def dirty(self) -> bool:
        return self._dirty

    def load(self) -> dict[str, CacheEntry]:
        """Read the persisted mapping; a missing or corrupt file starts cold."""
        self._entries = {}
        self._dirty = False

        if not self._path.exists():
            logger.info("No image cache at %s, all images will be processed", self._path)
            return self._entries

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Could not load image cache %s: %s", self._path, e)
            return self._entries

        if not isinstance(raw, dict):
            logger.warning("Image cache %s is not a mapping, ignoring", self._path)
            return self._entries

        for key, value in raw.items():
            try:
                self._entries[key] = CacheEntry.model_validate(value)
            except ValidationError:
                logger.debug("Dropping malformed cache entry %s", key)

        logger.info("Loaded image cache with %d entries", len(self._entries))
        return self._entries

    def get(self, key: str) -> CacheEntry | None:
        return self._entries.get(key)

    def put(self, key: str, content_hash: str, data: DerivedImageData) -> None:
        """Upsert an entry; the old entry for ``key`` is replaced in full."""
        self._entries[key] = CacheEntry(hash=content_hash, data=data)
        self._dirty = True

    def persist(self) -> bool:
        """Write the full mapping if anything changed. Returns True on write."""
        if not self._dirty:
            return False

        payload = {key: entry.model_dump(mode="json") for key, entry in self._entries.items()}
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            logger.error("Error saving image cache %s: %s", self._path, e)
            return False

        self._dirty = False
        logger.info("Saved image cache with %d entries", len(self._entries))
        return True

    def clear(self) -> bool:
        """Forget every entry and delete the file. Returns True if a file was removed."""
        self._entries = {}
        self._dirty = False
        try:
            self._path.unlink()
        except FileNotFoundError:
            return False
        return True

    def stats(self) -> StoreStats:
        size = self._path.stat().st_size if self._path.exists() else 0
        return StoreStats(
            path=str(self._path),
            entries=len(self._entries),
            size_kb=size / 1024,
            dirty=self._dirty,
        )

    def __len__(self) -> int:
        return len(self._entries)
