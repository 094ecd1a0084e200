"""Test configuration and fixtures for adapt_image.

This module provides:
- Pytest configuration (markers)
- Image factories writing synthetic JPEG/PNG/GIF files with Pillow
- Settings with a private cache and a short retry delay
- A counting raster engine and resizers built on it
"""

import threading
from collections.abc import Callable
from pathlib import Path
from typing import override

import pytest
from PIL import ExifTags, Image, ImageDraw

from adapt_image.config import AdaptImageSettings
from adapt_image.engine import PillowEngine, PillowImage
from adapt_image.image_file_info import ImageFileInfo
from adapt_image.output import BasedirOutputPathGenerator
from adapt_image.resizer import ImageResizer

ImageFactory = Callable[..., Path]


# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "concurrency: starts several threads against one cache directory",
    )


# ============================================================================
# Test Media Fixtures
# ============================================================================


def draw_test_pattern(size: tuple[int, int], mode: str = "RGB") -> Image.Image:
    """A grid with a filled circle, so resampling and cropping change the pixels."""
    width, height = size
    img = Image.new("RGB", size, color=(73, 109, 137))
    draw = ImageDraw.Draw(img)
    step = max(4, min(width, height) // 8)
    for x in range(0, width, step):
        draw.line([(x, 0), (x, height)], fill=(255, 255, 255), width=1)
    for y in range(0, height, step):
        draw.line([(0, y), (width, y)], fill=(255, 255, 255), width=1)
    draw.ellipse([width // 4, height // 4, 3 * width // 4, 3 * height // 4], fill=(200, 100, 100))
    if mode == "P":
        return img.convert("P", palette=Image.Palette.ADAPTIVE, colors=32)
    return img.convert(mode)


@pytest.fixture
def make_image(tmp_path: Path) -> ImageFactory:
    """
    Factory writing a synthetic image below tmp_path/"originals".

    Usage:
        path = make_image("photo.jpg", (600, 200))
        path = make_image("rotated.jpg", (200, 100), orientation=6)
        path = make_image("logo.png", (80, 80), fmt="PNG", mode="RGBA")
    """
    originals = tmp_path / "originals"
    originals.mkdir(exist_ok=True)

    def _make(
        name: str,
        size: tuple[int, int],
        fmt: str = "JPEG",
        orientation: int | None = None,
        mode: str | None = None,
    ) -> Path:
        if mode is None:
            mode = "P" if fmt == "GIF" else "RGB"
        img = draw_test_pattern(size, mode)
        path = originals / name
        path.parent.mkdir(parents=True, exist_ok=True)

        save_kwargs: dict[str, object] = {}
        if orientation is not None:
            exif = Image.Exif()
            exif[ExifTags.Base.Orientation] = orientation
            save_kwargs["exif"] = exif
        if fmt == "JPEG":
            save_kwargs["quality"] = 90

        img.save(path, fmt, **save_kwargs)
        return path

    return _make


@pytest.fixture
def jpeg_image(make_image: ImageFactory) -> Path:
    return make_image("landscape.jpg", (600, 200))


@pytest.fixture
def png_image(make_image: ImageFactory) -> Path:
    return make_image("square.png", (300, 300), fmt="PNG", mode="RGBA")


@pytest.fixture
def gif_image(make_image: ImageFactory) -> Path:
    return make_image("anim.gif", (120, 60), fmt="GIF")


@pytest.fixture
def jpeg_info(jpeg_image: Path) -> ImageFileInfo:
    return ImageFileInfo.from_file(jpeg_image)


# ============================================================================
# Resizer Fixtures
# ============================================================================


class CountingEngine(PillowEngine):
    """PillowEngine that counts how often an image was opened for processing."""

    def __init__(self):
        self._lock = threading.Lock()
        self.open_count = 0

    @override
    def open(self, path: str | Path) -> PillowImage:
        with self._lock:
            self.open_count += 1
        return super().open(path)


@pytest.fixture
def settings(tmp_path: Path) -> AdaptImageSettings:
    return AdaptImageSettings(
        cache_dir=tmp_path / "cache",
        lock_dir=tmp_path / "locks",
        max_attempts=5,
        retry_delay=0.05,
    )


@pytest.fixture
def cache_dir(settings: AdaptImageSettings) -> Path:
    return settings.cache_dir


@pytest.fixture
def engine() -> CountingEngine:
    return CountingEngine()


@pytest.fixture
def resizer(engine: CountingEngine, settings: AdaptImageSettings) -> ImageResizer:
    return ImageResizer(
        engine=engine,
        path_generator=BasedirOutputPathGenerator(settings.cache_dir),
        settings=settings,
    )
