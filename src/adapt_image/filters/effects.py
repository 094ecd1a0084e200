"""Filters that keep the image size: encoding hints, sharpening, metadata removal."""

import math
from typing import override

from pydantic import Field, PositiveFloat, field_validator

from ..engine.base import InterlaceMode, RasterImage
from .base import ImageFilter

_LEVELS = 255


class Interlace(ImageFilter):
    """Request progressive (JPEG) or interlaced (PNG/GIF) encoding."""

    mode: InterlaceMode = InterlaceMode.LINE

    @override
    def apply(self, image: RasterImage) -> RasterImage:
        return image.interlace(self.mode)


class Sharpen(ImageFilter):
    @override
    def apply(self, image: RasterImage) -> RasterImage:
        return image.sharpen()


class UnsharpMask(ImageFilter):
    """
    Unsharp mask with parameters as known from image editors.

    Attributes:
        radius: Radius in pixels; converted to a gaussian sigma
        amount: Strength, either a fraction (0.8) or a percentage (80)
        threshold: Either a fraction of the full range or a level in 1..255
    """

    radius: PositiveFloat
    amount: float = Field(1.0, ge=0)
    threshold: float = Field(0.0, ge=0, le=_LEVELS)

    @field_validator("amount")
    @classmethod
    def normalize_amount(cls, v: float) -> float:
        return v / 100 if v > 10 else v

    @field_validator("threshold")
    @classmethod
    def normalize_threshold(cls, v: float) -> float:
        return v / _LEVELS if v >= 1 else v

    @property
    def sigma(self) -> float:
        if self.radius < 1:
            return self.radius
        return math.sqrt(self.radius)

    @override
    def apply(self, image: RasterImage) -> RasterImage:
        return image.unsharp_mask(self.sigma, self.amount, self.threshold)


class Strip(ImageFilter):
    """Remove EXIF, ICC profile, comments and other metadata."""

    @override
    def apply(self, image: RasterImage) -> RasterImage:
        return image.strip()
