"""Inline placeholder and dominant colour, shown before the real bytes arrive."""

from __future__ import annotations

import base64
import io
import logging

from PIL import Image, ImageFilter

from folio.config.defaults import DEFAULT_FALLBACK_COLOR
from folio.config.schema import PlaceholderConfig
from folio.imaging.encoders import resize_to_width

logger = logging.getLogger(__name__)


def make_placeholder(img: Image.Image, config: PlaceholderConfig) -> str:
    """Tiny blurred JPEG as a data URI. Produced for every source, however small."""
    small = resize_to_width(img, min(config.width, img.width))
    if config.blur_radius:
        small = small.filter(ImageFilter.GaussianBlur(config.blur_radius))
    buf = io.BytesIO()
    small.save(buf, format="JPEG", quality=config.quality)
    encoded = base64.b64encode(buf.getvalue()).decode("ascii")
    return f"data:image/jpeg;base64,{encoded}"


def dominant_color(img: Image.Image, fallback: str = DEFAULT_FALLBACK_COLOR) -> str:
    """Average colour as ``#rrggbb``, or ``fallback`` if it cannot be computed."""
    try:
        pixel = img.convert("RGB").resize((1, 1), Image.Resampling.BOX).getpixel((0, 0))
        r, g, b = pixel[:3]
    except (OSError, ValueError, TypeError) as e:
        logger.warning("Dominant colour extraction failed, using %s: %s", fallback, e)
        return fallback
    return f"#{r:02x}{g:02x}{b:02x}"
