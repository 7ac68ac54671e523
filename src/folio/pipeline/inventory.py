"""Discover collections of source images from a portfolio source tree.

Layout:
  projects/<dir>/project.json       slug, title, order, optional image order
  projects/<dir>/original/*.jpg     project images
  homepage/<n>.jpg                  numbered slideshow images
  homepage/Commercial Home Images/  landing category "commercial"
  homepage/Personal Home Images/    landing category "personal"
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from folio.errors.exceptions import InventoryError
from folio.imaging.source import is_supported
from folio.types import CollectionKind, SourceImage

logger = logging.getLogger(__name__)

PROJECT_EXTENSIONS = {".jpg", ".jpeg", ".png"}

_HOMEPAGE_PATTERN = re.compile(r"^(\d+)\.(jpg|jpeg|png)$", re.IGNORECASE)
_LANDING_FOLDERS: dict[str, str] = {
    "commercial": "Commercial Home Images",
    "personal": "Personal Home Images",
}


class CollectionSpec(BaseModel):
    """One collection as handed to the orchestrator."""

    key: str
    kind: CollectionKind
    source_dir: Path
    images: list[SourceImage] = Field(default_factory=list)
    title: str = ""
    order: float | None = None
    has_source: bool = True
    warnings: list[str] = Field(default_factory=list)


class Inventory(BaseModel):
    collections: list[CollectionSpec] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


def natural_key(name: str) -> list[Any]:
    """Sort key that orders 2.jpg before 10.jpg."""
    return [int(part) if part.isdigit() else part.lower() for part in re.split(r"(\d+)", name)]


def discover_collections(site_dir: str | Path) -> Inventory:
    """Projects first (by order, then title), then homepage, then landing categories."""
    site_dir = Path(site_dir)
    inventory = Inventory()

    projects_dir = site_dir / "projects"
    if projects_dir.is_dir():
        for project_dir in sorted(p for p in projects_dir.iterdir() if p.is_dir()):
            if not (project_dir / "project.json").exists():
                continue
            try:
                inventory.collections.append(load_project(project_dir))
            except InventoryError as e:
                logger.error("%s", e.message)
                inventory.errors.append(e.message)
        inventory.collections.sort(key=_project_sort_key)
    else:
        logger.info("No projects directory found at %s", projects_dir)

    homepage_dir = site_dir / "homepage"
    if homepage_dir.is_dir():
        inventory.collections.append(homepage_collection(homepage_dir))
        for category, folder in _LANDING_FOLDERS.items():
            landing_dir = homepage_dir / folder
            if landing_dir.is_dir():
                inventory.collections.append(landing_collection(landing_dir, category))
            else:
                logger.info("No %s landing folder found", category)
    else:
        logger.info("No homepage folder found at %s", homepage_dir)

    return inventory


def load_project(project_dir: Path) -> CollectionSpec:
    """Read project.json and order the project's images.

    Files listed in ``images`` come first in that order; unlisted files follow
    in natural order. Listed files that do not exist are dropped.
    """
    config_path = project_dir / "project.json"
    try:
        config = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise InventoryError(
            f"Cannot read {config_path}: {e}", collection=project_dir.name
        ) from e
    if not isinstance(config, dict):
        raise InventoryError(f"{config_path} is not a JSON object", collection=project_dir.name)

    slug = str(config.get("slug") or project_dir.name)
    source_dir = project_dir / "original"
    spec = CollectionSpec(
        key=slug,
        kind=CollectionKind.PROJECT,
        source_dir=source_dir,
        title=str(config.get("title") or slug),
        order=_parse_order(config.get("order")),
    )

    if not source_dir.is_dir():
        logger.info("Project %s has no original/ folder, no images to build", slug)
        spec.has_source = False
        return spec

    files = [
        f.name
        for f in source_dir.iterdir()
        if f.is_file() and f.suffix.lower() in PROJECT_EXTENSIONS
    ]
    listed = [i for i in config.get("images") or [] if isinstance(i, dict) and i.get("file")]
    sizes = {i["file"]: str(i.get("size") or "full") for i in listed}

    ordered = [i["file"] for i in listed if i["file"] in files]
    unlisted = sorted((f for f in files if f not in ordered), key=natural_key)
    spec.images = [
        SourceImage(
            collection_key=slug,
            filename=name,
            index=position,
            size=sizes.get(name, "full"),
        )
        for position, name in enumerate([*ordered, *unlisted], start=1)
    ]
    return spec


def homepage_collection(homepage_dir: Path) -> CollectionSpec:
    """Numbered slideshow images; the number in the filename is the index.

    When two files share a number (``1.jpg`` and ``01.jpg``) the first in name
    order keeps the slot and the others are skipped with a warning.
    """
    numbered: list[tuple[int, str]] = []
    for f in homepage_dir.iterdir():
        match = _HOMEPAGE_PATTERN.match(f.name)
        if match and f.is_file():
            numbered.append((int(match.group(1)), f.name))
    numbered.sort()

    spec = CollectionSpec(
        key="homepage",
        kind=CollectionKind.HOMEPAGE,
        source_dir=homepage_dir,
        title="Homepage",
    )
    owners: dict[int, str] = {}
    for num, name in numbered:
        if num in owners:
            warning = (
                f'Duplicate homepage index {num}: "{name}" skipped'
                f' (already used by "{owners[num]}")'
            )
            logger.warning("%s", warning)
            spec.warnings.append(warning)
            continue
        owners[num] = name
        spec.images.append(SourceImage(collection_key="homepage", filename=name, index=num))
    return spec


def landing_collection(landing_dir: Path, category: str) -> CollectionSpec:
    key = f"landing/{category}"
    files = sorted(
        (
            f.name
            for f in landing_dir.iterdir()
            if f.is_file() and is_supported(f)
        ),
        key=natural_key,
    )
    return CollectionSpec(
        key=key,
        kind=CollectionKind.LANDING,
        source_dir=landing_dir,
        title=f"Landing ({category})",
        images=[
            SourceImage(collection_key=key, filename=name, index=position)
            for position, name in enumerate(files, start=1)
        ],
    )


def _parse_order(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not value:
        return None
    return float(value)


def _project_sort_key(spec: CollectionSpec) -> tuple[int, float, str]:
    """Projects with an ``order`` come first, ascending; the rest by title."""
    if spec.order is not None:
        return (0, spec.order, spec.title.lower())
    return (1, 0.0, spec.title.lower())
