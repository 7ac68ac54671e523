"""Change detection — reuse or recompute one source image."""

from __future__ import annotations

import logging
from pathlib import Path

from folio.cache.keys import hash_file
from folio.cache.store import ImageCacheStore

logger = logging.getLogger(__name__)


class ChangeDetector:
    """Decides whether a source image must be derived again."""

    def __init__(self, store: ImageCacheStore) -> None:
        self._store = store

    @staticmethod
    def hash_file(path: str | Path) -> str:
        return hash_file(path)

    def needs_processing(self, key: str, current_hash: str, output_dir: Path) -> bool:
        """True unless the entry exists, its hash matches, and its outputs are on disk.

        The output check catches derived files deleted by hand while the
        cache entry survived.
        """
        entry = self._store.get(key)
        if entry is None:
            return True
        if entry.hash != current_hash:
            logger.debug("Content changed for %s", key)
            return True
        if not output_dir.exists():
            logger.debug("Outputs missing for %s at %s", key, output_dir)
            return True
        return False
