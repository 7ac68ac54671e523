"""Per-image task — hash, reuse-or-derive, record."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from folio.cache.detector import ChangeDetector
from folio.cache.store import ImageCacheStore
from folio.config.schema import CollectionConfig
from folio.imaging.engine import ORIGINAL_FILENAME, derive_image
from folio.pipeline.validation import check_min_resolution
from folio.types import DerivedImageData, ImageFormat, ImageRecord, SourceImage

logger = logging.getLogger(__name__)


class TaskStatus(StrEnum):
    PROCESSED = "processed"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class ImageTask:
    image: SourceImage
    source: Path
    config: CollectionConfig

    @property
    def output_dir(self) -> Path:
        return self.config.output_dir(self.image.collection_key, self.image.index)


@dataclass
class TaskOutcome:
    image: SourceImage
    status: TaskStatus
    record: ImageRecord | None = None
    warnings: list[str] = field(default_factory=list)
    error: str | None = None


async def run_image_task(
    task: ImageTask,
    store: ImageCacheStore,
    detector: ChangeDetector,
) -> TaskOutcome:
    """Run one image to completion. Never raises: failures become FAILED outcomes."""
    image = task.image
    key = image.cache_key
    outcome = TaskOutcome(image=image, status=TaskStatus.FAILED)

    try:
        warning = await asyncio.to_thread(
            check_min_resolution, task.source, key, task.config.max_width
        )
        if warning:
            outcome.warnings.append(warning)

        content_hash = await asyncio.to_thread(detector.hash_file, task.source)

        entry = store.get(key)
        if entry is not None and not detector.needs_processing(
            key, content_hash, task.output_dir
        ):
            outcome.status = TaskStatus.SKIPPED
            outcome.record = build_record(image, task.config, entry.data)
            logger.debug("Reusing cached derivation for %s", key)
            return outcome

        derivation = await asyncio.to_thread(
            derive_image,
            task.source,
            task.output_dir,
            task.config.ladder,
            task.config.encodings,
            task.config.placeholder,
        )
        store.put(key, content_hash, derivation.data)
        outcome.status = TaskStatus.PROCESSED
        outcome.record = build_record(image, task.config, derivation.data)
        logger.debug("Processed %s (%d files)", key, len(derivation.written))
    except Exception as e:
        outcome.status = TaskStatus.FAILED
        outcome.error = f"Error processing {key}: {e}"
        logger.error("%s", outcome.error)

    return outcome


def build_record(
    image: SourceImage,
    config: CollectionConfig,
    data: DerivedImageData,
) -> ImageRecord:
    """Attach public URLs (srcset per encoding, largest JPEG as src) to derived data."""
    path = config.public_path(image.collection_key, image.index)
    widths = sorted(data.available_widths)
    srcset = {
        encoding.extension: ", ".join(f"{path}/{w}.{encoding.extension} {w}w" for w in widths)
        for encoding in config.encodings
    }
    has_jpeg = any(e.format is ImageFormat.JPEG for e in config.encodings)
    if widths and has_jpeg:
        src = f"{path}/{widths[-1]}.jpg"
    else:
        src = f"{path}/{ORIGINAL_FILENAME}"
    return ImageRecord(
        **data.model_dump(),
        index=image.index,
        path=path,
        src=src,
        srcset=srcset,
        size=image.size,
    )
