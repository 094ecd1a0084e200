from typing import Self, override

from pydantic import PositiveInt, model_validator

from ..engine.base import RasterImage, ScaleAlgorithm
from ..geometry import Box, Unrestricted
from .base import ImageFilter


class ProportionalResize(ImageFilter):
    """Resize an image keeping its aspect ratio.

    Attributes:
        width: Target width
        height: Target height, or UNRESTRICTED to scale to the width only
        min: If False the image is fitted into the box ("contain"), if True it
             covers the box and overflows it on one axis ("cover")
        upscale: Whether images smaller than the target may be enlarged
        algorithm: Resampling algorithm
    """

    width: PositiveInt
    height: PositiveInt | Unrestricted
    min: bool = False
    upscale: bool = False
    algorithm: ScaleAlgorithm = ScaleAlgorithm.UNDEFINED

    @model_validator(mode="after")
    def validate_cover_needs_height(self) -> Self:
        if self.min and isinstance(self.height, Unrestricted):
            raise ValueError("When height is not restricted, min must be False")
        return self

    @override
    def apply(self, image: RasterImage) -> RasterImage:
        current = image.size
        new_size = self.calculate_size(current)
        if new_size == current:
            return image
        return image.resize(new_size, self.algorithm)

    @override
    def calculate_size(self, size: Box) -> Box:
        if size.is_empty:
            return size
        height = self.height
        if isinstance(height, Unrestricted):
            by_width = True
            ratio = self.width / size.width
        else:
            target = Box(self.width, height)
            if size == target or (not self.upscale and target.contains(size)):
                return size
            ratio_w = self.width / size.width
            ratio_h = height / size.height
            by_width = ratio_w >= ratio_h if self.min else ratio_w <= ratio_h
            ratio = ratio_w if by_width else ratio_h

        # never enlarge unless asked to; in cover mode this keeps a source that is
        # smaller than the box on one axis unchanged, so crop mode never pads
        if ratio > 1 and not self.upscale:
            return size

        if by_width or isinstance(height, Unrestricted):
            return size.widen(self.width)
        return size.heighten(height)
