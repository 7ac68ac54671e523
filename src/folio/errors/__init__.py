"""Exception hierarchy for the image build."""

from folio.errors.exceptions import (
    ConfigError,
    DerivationError,
    FolioError,
    InventoryError,
)

__all__ = [
    "FolioError",
    "DerivationError",
    "InventoryError",
    "ConfigError",
]
