"""Top-level entry points: build_images(), ImageBuilder."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

from folio.cache.store import ImageCacheStore
from folio.config.defaults import (
    DEFAULT_CACHE_FILE,
    DEFAULT_DIST_DIR,
    DEFAULT_MANIFEST_NAME,
    DEFAULT_MAX_WORKERS,
)
from folio.config.schema import CollectionConfig, resolve_collection_configs
from folio.pipeline.inventory import CollectionSpec, discover_collections
from folio.pipeline.manifest import write_manifest
from folio.pipeline.orchestrator import ImageOrchestrator
from folio.types import BuildReport, CollectionKind

logger = logging.getLogger(__name__)


class ImageBuilder:
    """Incremental image build for one portfolio source tree."""

    def __init__(
        self,
        site_dir: str | Path = ".",
        dist_dir: str | Path | None = None,
        cache_path: str | Path | None = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
        no_cache: bool = False,
        collection_overrides: dict[str, Any] | None = None,
        write_manifest: bool = True,
    ) -> None:
        self._site_dir = Path(site_dir)
        self._dist_dir = Path(dist_dir) if dist_dir else self._site_dir / DEFAULT_DIST_DIR
        self._store = ImageCacheStore(
            Path(cache_path) if cache_path else self._site_dir / DEFAULT_CACHE_FILE
        )
        self._max_workers = max_workers
        self._no_cache = no_cache
        self._write_manifest = write_manifest
        self._configs = resolve_collection_configs(self._dist_dir, collection_overrides)

    @property
    def store(self) -> ImageCacheStore:
        return self._store

    @property
    def configs(self) -> dict[CollectionKind, CollectionConfig]:
        return self._configs

    @property
    def manifest_path(self) -> Path:
        return self._dist_dir / DEFAULT_MANIFEST_NAME

    async def build_async(self, collections: list[CollectionSpec] | None = None) -> BuildReport:
        """Process every collection; discovers them from the site tree when not given."""
        inventory_errors: list[str] = []
        if collections is None:
            inventory = discover_collections(self._site_dir)
            collections = inventory.collections
            inventory_errors = inventory.errors
        logger.info("Found %d collections", len(collections))

        if self._no_cache:
            logger.info("Cache disabled, all images will be processed")
        else:
            self._store.load()

        orchestrator = ImageOrchestrator(
            self._store, self._configs, max_workers=self._max_workers
        )
        report = await orchestrator.run(collections)
        report.errors[:0] = inventory_errors

        if self._write_manifest and report.images:
            try:
                write_manifest(report.images, self.manifest_path)
            except OSError as e:
                message = f"Cannot write manifest {self.manifest_path}: {e}"
                logger.error("%s", message)
                report.errors.append(message)
        return report

    def build(self, collections: list[CollectionSpec] | None = None) -> BuildReport:
        return asyncio.run(self.build_async(collections))


def build_images(site_dir: str | Path = ".", **kwargs: Any) -> BuildReport:
    """Synchronous convenience wrapper around ImageBuilder."""
    return ImageBuilder(site_dir, **kwargs).build()
