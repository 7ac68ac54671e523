"""folio — incremental responsive-image builder for a photography portfolio."""

from folio.core import ImageBuilder, build_images
from folio.types import (
    BuildReport,
    CacheEntry,
    CollectionStats,
    DerivedImageData,
    ImageRecord,
    SourceImage,
)

__version__ = "0.1.0"

__all__ = [
    "BuildReport",
    "CacheEntry",
    "CollectionStats",
    "DerivedImageData",
    "ImageBuilder",
    "ImageRecord",
    "SourceImage",
    "build_images",
]
