"""Drives change detection and derivation across every collection.

Execution order:
  1. Advisory duplicate-filename check across all collections
  2. Per collection, in inventory order: a project with no source folder counts
     as empty; one whose source directory has gone is skipped as missing;
     otherwise run one ImageTask per image (sequentially, or on a bounded pool)
  3. Aggregate records keyed by image index, plus processed/skipped/failed counts
  4. Persist the cache store once, at the end
"""

from __future__ import annotations

import logging

from folio.cache.detector import ChangeDetector
from folio.cache.store import ImageCacheStore
from folio.concurrency.pool import ConcurrencyPool
from folio.config.schema import CollectionConfig
from folio.errors.exceptions import InventoryError
from folio.pipeline.inventory import CollectionSpec
from folio.pipeline.tasks import ImageTask, TaskOutcome, TaskStatus, run_image_task
from folio.pipeline.validation import find_duplicate_filenames
from folio.types import BuildReport, CollectionKind, CollectionStats, ImageRecord

logger = logging.getLogger(__name__)


class ImageOrchestrator:
    """Runs the incremental image build for a set of collections.

    The store is passed in already loaded; the orchestrator only reads, puts
    and finally persists it.
    """

    def __init__(
        self,
        store: ImageCacheStore,
        configs: dict[CollectionKind, CollectionConfig],
        max_workers: int = 1,
        detector: ChangeDetector | None = None,
    ) -> None:
        self._store = store
        self._configs = configs
        self._detector = detector or ChangeDetector(store)
        self._pool = ConcurrencyPool(max_workers=max_workers)

    async def run(self, collections: list[CollectionSpec]) -> BuildReport:
        report = BuildReport()
        report.warnings.extend(find_duplicate_filenames(collections))

        for spec in collections:
            report.warnings.extend(spec.warnings)
            if not spec.has_source:
                logger.info("%s has no source folder, nothing to build", spec.key)
                report.collections[spec.key] = CollectionStats()
                continue
            try:
                await self._run_collection(spec, report)
            except InventoryError as e:
                logger.error("%s", e.message)
                report.errors.append(e.message)
                report.collections[spec.key] = CollectionStats(
                    total=len(spec.images), missing=True
                )

        report.cache_written = self._store.persist()
        logger.info(
            "Images: %d processed, %d cached, %d failed",
            report.processed,
            report.skipped,
            report.failed,
        )
        return report

    async def _run_collection(self, spec: CollectionSpec, report: BuildReport) -> None:
        if not spec.source_dir.is_dir():
            raise InventoryError(
                f"Source directory for {spec.key} not found: {spec.source_dir}",
                collection=spec.key,
            )

        config = self._configs[spec.kind]
        tasks = [
            ImageTask(image=image, source=spec.source_dir / image.filename, config=config)
            for image in spec.images
        ]
        logger.info("Processing %s (%d images)", spec.key, len(tasks))

        results = await self._pool.map_ordered(self._run_task, tasks)

        stats = CollectionStats(total=len(tasks))
        records: dict[int, ImageRecord] = {}
        for task, result in zip(tasks, results, strict=True):
            if isinstance(result, BaseException):
                # run_image_task contains its own failures; this is a last resort
                message = f"Error processing {task.image.cache_key}: {result}"
                logger.error("%s", message)
                report.errors.append(message)
                stats.failed += 1
                continue
            self._record(result, stats, records, report)

        report.collections[spec.key] = stats
        report.images[spec.key] = dict(sorted(records.items()))
        logger.info(
            "%s: %d new, %d cached, %d failed (%d total)",
            spec.key,
            stats.processed,
            stats.skipped,
            stats.failed,
            stats.total,
        )

    async def _run_task(self, task: ImageTask) -> TaskOutcome:
        return await run_image_task(task, self._store, self._detector)

    @staticmethod
    def _record(
        outcome: TaskOutcome,
        stats: CollectionStats,
        records: dict[int, ImageRecord],
        report: BuildReport,
    ) -> None:
        report.warnings.extend(outcome.warnings)
        if outcome.status is TaskStatus.FAILED:
            stats.failed += 1
            if outcome.error:
                report.errors.append(outcome.error)
            return
        if outcome.status is TaskStatus.PROCESSED:
            stats.processed += 1
        else:
            stats.skipped += 1
        if outcome.record is not None:
            records[outcome.image.index] = outcome.record
