"""Shared Pydantic models for folio."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field, field_serializer

# ── Enums ──


class ImageFormat(StrEnum):
    AVIF = "avif"
    WEBP = "webp"
    JPEG = "jpeg"

    @property
    def extension(self) -> str:
        return "jpg" if self is ImageFormat.JPEG else self.value


class CollectionKind(StrEnum):
    PROJECT = "project"
    HOMEPAGE = "homepage"
    LANDING = "landing"


# ── Derived data ──


class DerivedImageData(BaseModel):
    """Everything the page renderer needs to know about one derived image."""

    available_widths: set[int] = Field(default_factory=set)
    placeholder: str = ""
    dominant_color: str = "#e8e8e6"
    aspect_ratio: float = 1.0
    width: int = 0
    height: int = 0

    @field_serializer("available_widths")
    def _sorted_widths(self, widths: set[int]) -> list[int]:
        return sorted(widths)


class CacheEntry(BaseModel):
    """A cached derivation, valid for exactly one source content hash."""

    hash: str
    data: DerivedImageData


# ── Inventory ──


class SourceImage(BaseModel):
    """One source image in a collection, in display order."""

    collection_key: str
    filename: str
    index: int
    size: str = "full"

    @property
    def cache_key(self) -> str:
        from folio.cache.keys import cache_key

        return cache_key(self.collection_key, self.filename)


# ── Outputs ──


class ImageRecord(DerivedImageData):
    """Derived data plus the public URLs for one image slot."""

    index: int
    path: str
    src: str | None = None
    srcset: dict[str, str] = Field(default_factory=dict)
    size: str = "full"


class CollectionStats(BaseModel):
    processed: int = 0
    skipped: int = 0
    failed: int = 0
    total: int = 0
    missing: bool = False

    @property
    def usable(self) -> bool:
        """A found collection that did not lose every one of its images."""
        if self.missing:
            return False
        return self.total == 0 or self.failed < self.total


class BuildReport(BaseModel):
    """Outcome of one build invocation."""

    collections: dict[str, CollectionStats] = Field(default_factory=dict)
    images: dict[str, dict[int, ImageRecord]] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    cache_written: bool = False

    @property
    def processed(self) -> int:
        return sum(s.processed for s in self.collections.values())

    @property
    def skipped(self) -> int:
        return sum(s.skipped for s in self.collections.values())

    @property
    def failed(self) -> int:
        return sum(s.failed for s in self.collections.values())

    @property
    def succeeded(self) -> bool:
        return any(s.usable for s in self.collections.values())
