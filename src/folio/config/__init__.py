"""Configuration: defaults, YAML/env hierarchy and per-kind collection settings."""

from folio.config.hierarchy import load_config_hierarchy
from folio.config.schema import (
    CollectionConfig,
    EncodingConfig,
    PlaceholderConfig,
    default_collection_configs,
    resolve_collection_configs,
)

__all__ = [
    "CollectionConfig",
    "EncodingConfig",
    "PlaceholderConfig",
    "default_collection_configs",
    "load_config_hierarchy",
    "resolve_collection_configs",
]
