"""Output formats, encoder options and cache path generation."""

from .path_generator import BasedirOutputPathGenerator, OutputPathGenerator
from .type_map import OutputTypeMap
from .type_options import GifOutputOptions, JpegOutputOptions, OutputTypeOptions, PngOutputOptions

__all__ = [
    "BasedirOutputPathGenerator",
    "GifOutputOptions",
    "JpegOutputOptions",
    "OutputPathGenerator",
    "OutputTypeMap",
    "OutputTypeOptions",
    "PngOutputOptions",
]
