"""Tests for per-kind collection settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from folio.config.schema import (
    CollectionConfig,
    EncodingConfig,
    default_collection_configs,
    resolve_collection_configs,
)
from folio.errors.exceptions import ConfigError
from folio.types import CollectionKind, ImageFormat


class TestCollectionConfig:
    def test_ladder_must_ascend(self):
        with pytest.raises(ValidationError):
            CollectionConfig(kind=CollectionKind.PROJECT, ladder=[800, 400])

    def test_ladder_no_duplicates(self):
        with pytest.raises(ValidationError):
            CollectionConfig(kind=CollectionKind.PROJECT, ladder=[400, 400])

    def test_ladder_not_empty(self):
        with pytest.raises(ValidationError):
            CollectionConfig(kind=CollectionKind.PROJECT, ladder=[])

    def test_ladder_positive(self):
        with pytest.raises(ValidationError):
            CollectionConfig(kind=CollectionKind.PROJECT, ladder=[0, 400])

    def test_repeated_encoding(self):
        with pytest.raises(ValidationError):
            CollectionConfig(
                kind=CollectionKind.PROJECT,
                encodings=[
                    EncodingConfig(format=ImageFormat.JPEG),
                    EncodingConfig(format=ImageFormat.JPEG, quality=50),
                ],
            )

    def test_quality_bounds(self):
        with pytest.raises(ValidationError):
            EncodingConfig(format=ImageFormat.WEBP, quality=0)

    def test_paths(self):
        config = CollectionConfig(
            kind=CollectionKind.PROJECT,
            index_padding=2,
            output_root=Path("/out/images"),
            url_prefix="/images/",
        )
        assert config.output_dir("alpha", 3) == Path("/out/images/alpha/03")
        assert config.public_path("alpha", 3) == "/images/alpha/03"
        assert config.public_path("alpha", 120) == "/images/alpha/120"

    def test_unpadded(self):
        config = CollectionConfig(kind=CollectionKind.HOMEPAGE)
        assert config.format_index(7) == "7"

    def test_jpeg_extension(self):
        assert EncodingConfig(format=ImageFormat.JPEG).extension == "jpg"


class TestDefaultConfigs:
    def test_every_kind(self, tmp_path):
        configs = default_collection_configs(tmp_path)
        assert set(configs) == set(CollectionKind)
        assert configs[CollectionKind.PROJECT].index_padding == 2
        assert configs[CollectionKind.LANDING].max_width == 1800
        assert configs[CollectionKind.HOMEPAGE].output_root == tmp_path / "images"

    def test_encoding_order(self, tmp_path):
        formats = [e.format for e in default_collection_configs(tmp_path)[CollectionKind.PROJECT].encodings]
        assert formats == [ImageFormat.AVIF, ImageFormat.WEBP, ImageFormat.JPEG]


class TestResolveConfigs:
    def test_no_overrides(self, tmp_path):
        assert resolve_collection_configs(tmp_path) == default_collection_configs(tmp_path)

    def test_override_fields(self, tmp_path):
        configs = resolve_collection_configs(
            tmp_path, {"landing": {"ladder": [1000, 2000], "url_prefix": "/img"}}
        )
        landing = configs[CollectionKind.LANDING]
        assert landing.ladder == [1000, 2000]
        assert landing.url_prefix == "/img"
        assert landing.encodings[1].quality == 80

    def test_override_encodings_from_yaml_shape(self, tmp_path):
        configs = resolve_collection_configs(
            tmp_path, {"project": {"encodings": [{"format": "webp", "quality": 70}]}}
        )
        encodings = configs[CollectionKind.PROJECT].encodings
        assert [e.format for e in encodings] == [ImageFormat.WEBP]

    def test_unknown_kind(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            resolve_collection_configs(tmp_path, {"gallery": {}})
        assert exc_info.value.key == "gallery"

    def test_not_a_mapping(self, tmp_path):
        with pytest.raises(ConfigError):
            resolve_collection_configs(tmp_path, {"project": [400]})

    def test_invalid_values(self, tmp_path):
        with pytest.raises(ConfigError):
            resolve_collection_configs(tmp_path, {"project": {"ladder": [900, 100]}})
