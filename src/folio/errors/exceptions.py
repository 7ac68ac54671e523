"""Custom exception hierarchy for folio."""

from __future__ import annotations

from pathlib import Path


class FolioError(Exception):
    """Base exception for all folio errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class DerivationError(FolioError):
    """Error isolated to a single source image — other images continue.

    Examples: truncated file, not an image, encoder failure.
    """

    def __init__(
        self,
        message: str = "",
        path: str | Path | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None
        self.original = original


class InventoryError(FolioError):
    """A whole collection cannot be read — the collection is skipped.

    Examples: source directory missing, unreadable project.json.
    """

    def __init__(self, message: str = "", collection: str = "") -> None:
        super().__init__(message)
        self.collection = collection


class ConfigError(FolioError):
    """Invalid build configuration — fail fast before any image work."""

    def __init__(self, message: str = "", key: str | None = None) -> None:
        super().__init__(message)
        self.key = key
