"""Pydantic models for per-collection-type build configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from folio.config import defaults
from folio.errors.exceptions import ConfigError
from folio.types import CollectionKind, ImageFormat


class EncodingConfig(BaseModel):
    format: ImageFormat
    quality: int = Field(default=defaults.DEFAULT_IMAGE_QUALITY, ge=1, le=100)
    progressive: bool = False

    @property
    def extension(self) -> str:
        return self.format.extension


class PlaceholderConfig(BaseModel):
    width: int = Field(default=defaults.DEFAULT_PLACEHOLDER_WIDTH, gt=0)
    blur_radius: float = Field(default=defaults.DEFAULT_PLACEHOLDER_BLUR, ge=0)
    quality: int = Field(default=defaults.DEFAULT_PLACEHOLDER_QUALITY, ge=1, le=100)


def _default_encodings() -> list[EncodingConfig]:
    return [
        EncodingConfig(format=ImageFormat.AVIF, quality=defaults.DEFAULT_AVIF_QUALITY),
        EncodingConfig(format=ImageFormat.WEBP, quality=defaults.DEFAULT_IMAGE_QUALITY),
        EncodingConfig(
            format=ImageFormat.JPEG, quality=defaults.DEFAULT_IMAGE_QUALITY, progressive=True
        ),
    ]


class CollectionConfig(BaseModel):
    """Settings shared by every collection of one kind.

    Resolved once before the build; the derivation engine never branches on
    collection identity.
    """

    kind: CollectionKind
    ladder: list[int] = Field(default_factory=lambda: list(defaults.DEFAULT_PROJECT_LADDER))
    encodings: list[EncodingConfig] = Field(default_factory=_default_encodings)
    placeholder: PlaceholderConfig = Field(default_factory=PlaceholderConfig)
    index_padding: int = Field(default=0, ge=0)
    output_root: Path = Path(defaults.DEFAULT_DIST_DIR) / "images"
    url_prefix: str = "/images"

    @field_validator("ladder")
    @classmethod
    def _ascending_ladder(cls, value: list[int]) -> list[int]:
        if not value:
            raise ValueError("ladder must contain at least one width")
        if any(w <= 0 for w in value):
            raise ValueError("ladder widths must be positive")
        if value != sorted(set(value)):
            raise ValueError("ladder must be strictly ascending")
        return value

    @field_validator("encodings")
    @classmethod
    def _unique_encodings(cls, value: list[EncodingConfig]) -> list[EncodingConfig]:
        formats = [e.format for e in value]
        if len(formats) != len(set(formats)):
            raise ValueError("encodings must not repeat a format")
        return value

    @property
    def max_width(self) -> int:
        return self.ladder[-1]

    def format_index(self, index: int) -> str:
        return str(index).zfill(self.index_padding)

    def output_dir(self, collection_key: str, index: int) -> Path:
        return self.output_root / collection_key / self.format_index(index)

    def public_path(self, collection_key: str, index: int) -> str:
        return f"{self.url_prefix.rstrip('/')}/{collection_key}/{self.format_index(index)}"


def default_collection_configs(dist_dir: Path) -> dict[CollectionKind, CollectionConfig]:
    """Built-in settings for each collection kind, rooted at ``dist_dir``."""
    images_root = dist_dir / "images"
    return {
        CollectionKind.PROJECT: CollectionConfig(
            kind=CollectionKind.PROJECT,
            ladder=list(defaults.DEFAULT_PROJECT_LADDER),
            index_padding=2,
            output_root=images_root,
            url_prefix="/images",
        ),
        CollectionKind.HOMEPAGE: CollectionConfig(
            kind=CollectionKind.HOMEPAGE,
            ladder=list(defaults.DEFAULT_HOMEPAGE_LADDER),
            output_root=images_root,
            url_prefix="/images",
        ),
        CollectionKind.LANDING: CollectionConfig(
            kind=CollectionKind.LANDING,
            ladder=list(defaults.DEFAULT_LANDING_LADDER),
            encodings=[
                EncodingConfig(format=ImageFormat.AVIF, quality=defaults.DEFAULT_AVIF_QUALITY),
                EncodingConfig(
                    format=ImageFormat.WEBP, quality=defaults.DEFAULT_LANDING_WEBP_QUALITY
                ),
                EncodingConfig(
                    format=ImageFormat.JPEG,
                    quality=defaults.DEFAULT_LANDING_JPEG_QUALITY,
                    progressive=True,
                ),
            ],
            output_root=images_root,
            url_prefix="/images",
        ),
    }


def resolve_collection_configs(
    dist_dir: Path,
    overrides: dict[str, Any] | None = None,
) -> dict[CollectionKind, CollectionConfig]:
    """Apply ``collections:`` overrides from config on top of the built-in settings.

    Overrides are keyed by kind name (``project``, ``homepage``, ``landing``)
    and replace individual fields of that kind's settings.
    """
    configs = default_collection_configs(dist_dir)
    for name, fields in (overrides or {}).items():
        try:
            kind = CollectionKind(name)
        except ValueError:
            raise ConfigError(f"Unknown collection kind: {name}", key=name) from None
        if not isinstance(fields, dict):
            raise ConfigError(f"Settings for '{name}' must be a mapping", key=name)
        merged = configs[kind].model_dump()
        merged.update(fields)
        try:
            configs[kind] = CollectionConfig(**merged)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings for '{name}': {e}", key=name) from e
    return configs
