from pathlib import Path

import pytest
from PIL import Image, features

from folio.config.schema import CollectionConfig, EncodingConfig
from folio.types import CollectionKind, ImageFormat

AVIF_SUPPORTED = features.check("avif")


def write_image(
    path: Path,
    width: int = 1000,
    height: int = 500,
    color: tuple[int, int, int] = (200, 40, 40),
    fmt: str = "JPEG",
) -> Path:
    """Write a solid-colour image and return its path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", (width, height), color).save(path, format=fmt)
    return path


@pytest.fixture
def make_image():
    return write_image


@pytest.fixture
def encodings():
    """WebP + JPEG, plus AVIF where this Pillow build can write it."""
    result = [
        EncodingConfig(format=ImageFormat.WEBP, quality=80),
        EncodingConfig(format=ImageFormat.JPEG, quality=80, progressive=True),
    ]
    if AVIF_SUPPORTED:
        result.insert(0, EncodingConfig(format=ImageFormat.AVIF, quality=60))
    return result


@pytest.fixture
def project_config(tmp_path, encodings):
    """Project collection settings writing under tmp_path/dist/images."""
    return CollectionConfig(
        kind=CollectionKind.PROJECT,
        ladder=[400, 800, 1200],
        encodings=encodings,
        index_padding=2,
        output_root=tmp_path / "dist" / "images",
    )


@pytest.fixture
def sample_site(tmp_path):
    """A small portfolio source tree: two projects, homepage, one landing folder."""
    site = tmp_path / "site"
    alpha = site / "projects" / "alpha"
    alpha.mkdir(parents=True)
    (alpha / "project.json").write_text(
        '{"slug": "alpha", "title": "Alpha", "order": 2,'
        ' "images": [{"file": "b.jpg", "size": "half"}]}'
    )
    write_image(alpha / "original" / "a.jpg", 1300, 650)
    write_image(alpha / "original" / "b.jpg", 900, 600)

    beta = site / "projects" / "beta"
    beta.mkdir(parents=True)
    (beta / "project.json").write_text('{"title": "Beta", "order": 1}')
    write_image(beta / "original" / "10.jpg", 500, 500)
    write_image(beta / "original" / "2.jpg", 500, 500)

    write_image(site / "homepage" / "1.jpg", 1200, 800)
    write_image(site / "homepage" / "2.jpg", 800, 1200)
    write_image(site / "homepage" / "Commercial Home Images" / "shoot.jpg", 1800, 1200)
    return site


@pytest.fixture
def site_overrides():
    """Collection overrides that keep default ladders but drop AVIF when unavailable."""
    if AVIF_SUPPORTED:
        return None
    encodings = [{"format": "webp", "quality": 80}, {"format": "jpeg", "quality": 80}]
    return {kind: {"encodings": encodings} for kind in ("project", "homepage", "landing")}
