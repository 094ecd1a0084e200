from typing import override

from pydantic import field_validator

from ..engine.base import RasterImage
from ..geometry import Box, Point
from .base import ImageFilter
from .proportional_resize import ProportionalResize


class Crop(ImageFilter):
    """Cut a region of `size` starting at `start`.

    Images smaller than `size` on any axis are returned unchanged unless
    `upscale` is set; in that case they are first enlarged to cover `size`
    and the region is taken from the center. The crop never pads: a start
    that would run past the image border is moved back inside.
    """

    start: Point = Point(0, 0)
    size: Box
    upscale: bool = False

    @field_validator("size")
    @classmethod
    def validate_size(cls, size: Box) -> Box:
        if size.is_empty:
            raise ValueError(f"Crop size must not be empty, got {size}")
        return size

    def is_big_enough(self, size: Box) -> bool:
        return size.width >= self.size.width and size.height >= self.size.height

    def crop_start(self, size: Box) -> Point:
        return Point(
            min(self.start.x, size.width - self.size.width),
            min(self.start.y, size.height - self.size.height),
        )

    @override
    def apply(self, image: RasterImage) -> RasterImage:
        current = image.size
        if self.is_big_enough(current):
            start = self.crop_start(current)
        elif self.upscale:
            image = ProportionalResize(
                width=self.size.width,
                height=self.size.height,
                min=True,
                upscale=True,
            ).apply(image)
            start = _center(image.size, self.size)
        else:
            return image
        return image.crop(start, self.size)

    @override
    def calculate_size(self, size: Box) -> Box:
        if not self.upscale and not self.is_big_enough(size):
            return size
        return self.size


class CropCenter(Crop):
    """Crop the centered region of `size`."""

    @override
    def crop_start(self, size: Box) -> Point:
        return _center(size, self.size)


def _center(size: Box, target: Box) -> Point:
    return Point(
        max(0, (size.width - target.width) // 2),
        max(0, (size.height - target.height) // 2),
    )
