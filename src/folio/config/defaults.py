"""Package-level default configuration values."""

from __future__ import annotations

from typing import Any

# Default site layout
DEFAULT_SITE_DIR = "."
DEFAULT_DIST_DIR = "dist"
DEFAULT_CACHE_FILE = ".image-cache.json"
DEFAULT_MANIFEST_NAME = "images.json"

# Default size ladders (ascending pixel widths)
DEFAULT_PROJECT_LADDER = [400, 800, 1200]
DEFAULT_HOMEPAGE_LADDER = [400, 800, 1200]
DEFAULT_LANDING_LADDER = [800, 1200, 1800]

# Default encoder quality settings
DEFAULT_AVIF_QUALITY = 65  # AVIF holds up perceptually at lower settings
DEFAULT_IMAGE_QUALITY = 85
DEFAULT_LANDING_WEBP_QUALITY = 80
DEFAULT_LANDING_JPEG_QUALITY = 82

# Default placeholder settings
DEFAULT_PLACEHOLDER_WIDTH = 20
DEFAULT_PLACEHOLDER_BLUR = 10
DEFAULT_PLACEHOLDER_QUALITY = 50

# Background colour used when dominant colour extraction fails
DEFAULT_FALLBACK_COLOR = "#e8e8e6"

# Default concurrency settings (1 = strictly sequential per collection)
DEFAULT_MAX_WORKERS = 1

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "site_dir": DEFAULT_SITE_DIR,
        "dist_dir": DEFAULT_DIST_DIR,
        "cache_file": DEFAULT_CACHE_FILE,
        "manifest_name": DEFAULT_MANIFEST_NAME,
        "max_workers": DEFAULT_MAX_WORKERS,
        "log_level": DEFAULT_LOG_LEVEL,
        "collections": {},
    }
