"""Image filters and the FilterChain that sequences them."""

from .base import ImageFilter
from .crop import Crop, CropCenter
from .effects import Interlace, Sharpen, Strip, UnsharpMask
from .filter_chain import FilterChain
from .fix_orientation import FixOrientation
from .proportional_resize import ProportionalResize

__all__ = [
    "Crop",
    "CropCenter",
    "FilterChain",
    "FixOrientation",
    "ImageFilter",
    "Interlace",
    "ProportionalResize",
    "Sharpen",
    "Strip",
    "UnsharpMask",
]
