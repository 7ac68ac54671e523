"""Pure derivation of responsive outputs from one source file."""

from folio.imaging.engine import ORIGINAL_FILENAME, Derivation, derive_image
from folio.imaging.preview import dominant_color, make_placeholder
from folio.imaging.source import SUPPORTED_EXTENSIONS, open_source, probe_dimensions

__all__ = [
    "Derivation",
    "ORIGINAL_FILENAME",
    "SUPPORTED_EXTENSIONS",
    "derive_image",
    "dominant_color",
    "make_placeholder",
    "open_source",
    "probe_dimensions",
]
