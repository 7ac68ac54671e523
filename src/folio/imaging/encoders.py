"""Resize and encode one width of the ladder in every configured format."""

from __future__ import annotations

from pathlib import Path

from PIL import Image

from folio.config.schema import EncodingConfig
from folio.types import ImageFormat

# Pillow format names and extra save options per encoding
_PIL_FORMATS: dict[ImageFormat, str] = {
    ImageFormat.AVIF: "AVIF",
    ImageFormat.WEBP: "WEBP",
    ImageFormat.JPEG: "JPEG",
}


def resize_to_width(img: Image.Image, width: int) -> Image.Image:
    """Scale to ``width`` keeping aspect ratio. Callers never pass a width above the source's."""
    src_w, src_h = img.size
    if width == src_w:
        return img.copy()
    height = max(1, round(width * src_h / src_w))
    return img.resize((width, height), Image.Resampling.LANCZOS)


def save_options(encoding: EncodingConfig) -> dict[str, object]:
    options: dict[str, object] = {"quality": encoding.quality}
    if encoding.format is ImageFormat.JPEG:
        options["optimize"] = True
        options["progressive"] = encoding.progressive
    elif encoding.format is ImageFormat.WEBP:
        options["method"] = 4
    return options


def encode_width(
    img: Image.Image,
    width: int,
    output_dir: Path,
    encodings: list[EncodingConfig],
) -> list[Path]:
    """Write ``<width>.<ext>`` for each encoding and return the written paths."""
    resized = resize_to_width(img, width)
    written: list[Path] = []
    for encoding in encodings:
        out = output_dir / f"{width}.{encoding.extension}"
        resized.save(out, format=_PIL_FORMATS[encoding.format], **save_options(encoding))
        written.append(out)
    return written
