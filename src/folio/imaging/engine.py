"""Derivation engine — one source image in, a responsive output set out."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from pydantic import BaseModel, Field

from folio.config.schema import EncodingConfig, PlaceholderConfig
from folio.errors.exceptions import DerivationError
from folio.imaging.encoders import encode_width
from folio.imaging.preview import dominant_color, make_placeholder
from folio.imaging.source import open_source
from folio.types import DerivedImageData

logger = logging.getLogger(__name__)

ORIGINAL_FILENAME = "original.jpg"


class Derivation(BaseModel):
    """Result of deriving one source image."""

    data: DerivedImageData
    written: list[Path] = Field(default_factory=list)


def derive_image(
    source: str | Path,
    output_dir: str | Path,
    ladder: list[int],
    encodings: list[EncodingConfig],
    placeholder: PlaceholderConfig | None = None,
) -> Derivation:
    """Derive every output for ``source`` into ``output_dir``.

    Only ladder widths the source can fill are produced; nothing is upscaled.
    The placeholder, dominant colour and original copy are always produced.
    Knows nothing about the cache: callers decide whether to call it.

    Raises DerivationError if the source cannot be read or an encoder fails.
    """
    source = Path(source)
    output_dir = Path(output_dir)
    placeholder = placeholder or PlaceholderConfig()

    img = open_source(source)
    width, height = img.size
    output_dir.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    available: set[int] = set()
    try:
        for target in sorted(ladder):
            if width < target:
                continue
            written.extend(encode_width(img, target, output_dir, encodings))
            available.add(target)
        preview = make_placeholder(img, placeholder)
    except (OSError, ValueError, KeyError) as e:
        raise DerivationError(
            f"Encoding failed for {source.name}: {e}", path=source, original=e
        ) from e

    color = dominant_color(img)

    original = output_dir / ORIGINAL_FILENAME
    try:
        shutil.copyfile(source, original)
    except OSError as e:
        raise DerivationError(
            f"Cannot copy original {source.name}: {e}", path=source, original=e
        ) from e
    written.append(original)

    logger.debug(
        "Derived %s: %dx%d, widths %s", source.name, width, height, sorted(available)
    )
    return Derivation(
        data=DerivedImageData(
            available_widths=available,
            placeholder=preview,
            dominant_color=color,
            aspect_ratio=width / height,
            width=width,
            height=height,
        ),
        written=written,
    )
