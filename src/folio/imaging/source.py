"""Source image loading and header probing."""

from __future__ import annotations

from pathlib import Path

from PIL import Image, ImageOps

from folio.errors.exceptions import DerivationError

SUPPORTED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp"}

_ORIENTATION_TAG = 0x0112
_TRANSPOSED_ORIENTATIONS = {5, 6, 7, 8}


def is_supported(path: str | Path) -> bool:
    return Path(path).suffix.lower() in SUPPORTED_EXTENSIONS


def open_source(path: str | Path) -> Image.Image:
    """Fully decode a source image, upright and in RGB.

    Raises DerivationError for anything Pillow cannot read.
    """
    path = Path(path)
    try:
        with Image.open(path) as img:
            img.load()
            upright = ImageOps.exif_transpose(img)
            return upright.convert("RGB")
    except FileNotFoundError as e:
        raise DerivationError(f"Source not found: {path}", path=path, original=e) from e
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise DerivationError(f"Cannot read image {path.name}: {e}", path=path, original=e) from e


def probe_dimensions(path: str | Path) -> tuple[int, int]:
    """Read displayed width and height from the header without decoding pixels."""
    path = Path(path)
    try:
        with Image.open(path) as img:
            width, height = img.size
            orientation = img.getexif().get(_ORIENTATION_TAG)
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise DerivationError(f"Cannot read image {path.name}: {e}", path=path, original=e) from e
    if orientation in _TRANSPOSED_ORIENTATIONS:
        return height, width
    return width, height
