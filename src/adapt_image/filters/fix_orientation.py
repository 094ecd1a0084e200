from typing import override

from pydantic import Field

from ..engine.base import RasterImage
from ..geometry import Box
from .base import ImageFilter


class FixOrientation(ImageFilter):
    """Turn an image upright according to its EXIF orientation code."""

    orientation: int = Field(ge=0, le=8)

    @override
    def apply(self, image: RasterImage) -> RasterImage:
        match self.orientation:
            case 2:
                return image.flip_horizontally()
            case 3:
                return image.rotate(180)
            case 4:
                return image.flip_vertically()
            case 5:
                return image.rotate(90).flip_horizontally()
            case 6:
                return image.rotate(90)
            case 7:
                return image.rotate(-90).flip_horizontally()
            case 8:
                return image.rotate(-90)
            case _:
                return image

    @override
    def calculate_size(self, size: Box) -> Box:
        # 5..8 are the transposed orientations
        if self.orientation >= 5:
            return size.swapped()
        return size
