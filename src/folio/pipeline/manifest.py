"""Serialize the image index for the page renderer."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from folio.types import ImageRecord

logger = logging.getLogger(__name__)


def manifest_payload(images: dict[str, dict[int, ImageRecord]]) -> dict[str, dict[str, dict]]:
    """``{collection: {index: record}}`` with indices as strings, in index order."""
    return {
        key: {
            str(index): record.model_dump(mode="json")
            for index, record in sorted(records.items())
        }
        for key, records in images.items()
    }


def write_manifest(images: dict[str, dict[int, ImageRecord]], path: str | Path) -> Path:
    """Write the manifest atomically and return its path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    tmp.write_text(json.dumps(manifest_payload(images), indent=2), encoding="utf-8")
    os.replace(tmp, path)
    logger.info("Wrote image manifest %s (%d collections)", path, len(images))
    return path
