"""Advisory checks. Reported to the operator, never blocking a build."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from folio.errors.exceptions import DerivationError
from folio.imaging.source import probe_dimensions

if TYPE_CHECKING:
    from folio.pipeline.inventory import CollectionSpec

logger = logging.getLogger(__name__)


def find_duplicate_filenames(collections: list[CollectionSpec]) -> list[str]:
    """Warn when a filename (case-insensitive) appears in more than one collection."""
    owners: dict[str, str] = {}
    warnings: list[str] = []
    for spec in collections:
        seen_here: set[str] = set()
        for image in spec.images:
            lowered = image.filename.lower()
            if lowered in seen_here:
                continue
            seen_here.add(lowered)
            owner = owners.get(lowered)
            if owner is None:
                owners[lowered] = spec.key
            elif owner != spec.key:
                warnings.append(
                    f'Duplicate filename: "{image.filename}" in {spec.key} (also in {owner})'
                )
    for warning in warnings:
        logger.warning("%s", warning)
    return warnings


def check_min_resolution(path: Path, label: str, min_width: int) -> str | None:
    """Warn when a source is narrower than ``min_width``; unreadable headers warn too."""
    try:
        width, _ = probe_dimensions(path)
    except DerivationError as e:
        return f"Error reading {label}: {e.message}"
    if width < min_width:
        return f"{label} is only {width}px wide (recommended: {min_width}px+)"
    return None
