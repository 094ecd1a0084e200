"""
Raster engine protocol - the narrow interface the filters and the resizer
use for pixel work.

Design goals:
- Filters never touch a concrete imaging library
- Tests can wrap or replace the engine (e.g. to count invocations)
- Image handles are mutable and return themselves, so calls can be chained
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import ClassVar, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from ..geometry import Box, Point
from ..image_file_info import RasterType


class ScaleAlgorithm(StrEnum):
    """Resampling filter used when scaling; UNDEFINED lets the engine choose."""

    UNDEFINED = "undefined"
    NEAREST = "nearest"
    BOX = "box"
    BILINEAR = "bilinear"
    HAMMING = "hamming"
    BICUBIC = "bicubic"
    LANCZOS = "lanczos"


class InterlaceMode(StrEnum):
    NONE = "none"
    LINE = "line"


class SaveOptions(BaseModel):
    """Encoder options passed to RasterImage.save()."""

    format: RasterType
    jpeg_quality: int | None = Field(None, ge=0, le=100)
    png_compression_level: int | None = Field(None, ge=0, le=9)
    png_compression_filter: int | None = Field(None, ge=0, le=5)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")


@runtime_checkable
class RasterImage(Protocol):
    """An opened image that filters operate on."""

    @property
    def size(self) -> Box: ...

    def resize(self, size: Box, algorithm: ScaleAlgorithm = ScaleAlgorithm.UNDEFINED) -> RasterImage: ...

    def crop(self, start: Point, size: Box) -> RasterImage: ...

    def rotate(self, degrees: int) -> RasterImage:
        """Rotate clockwise by a multiple of 90 degrees."""
        ...

    def flip_horizontally(self) -> RasterImage: ...

    def flip_vertically(self) -> RasterImage: ...

    def interlace(self, mode: InterlaceMode) -> RasterImage: ...

    def sharpen(self) -> RasterImage: ...

    def unsharp_mask(self, sigma: float, amount: float, threshold: float) -> RasterImage:
        """
        Args:
            sigma: Gaussian blur radius
            amount: Strength as a fraction (1.0 = 100%)
            threshold: Minimum brightness change as a fraction of the full range
        """
        ...

    def strip(self) -> RasterImage:
        """Drop all metadata (EXIF, ICC profile, comments) from the image."""
        ...

    def save(self, path: str | Path, options: SaveOptions) -> None: ...


@runtime_checkable
class RasterEngine(Protocol):
    def open(self, path: str | Path) -> RasterImage: ...
