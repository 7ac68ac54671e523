"""Content-hash store and change detection."""

from folio.cache.detector import ChangeDetector
from folio.cache.keys import cache_key, hash_file
from folio.cache.store import ImageCacheStore, StoreStats

__all__ = [
    "ChangeDetector",
    "ImageCacheStore",
    "StoreStats",
    "cache_key",
    "hash_file",
]
