"""Raster engine interface and the Pillow implementation."""

from .base import InterlaceMode, RasterEngine, RasterImage, SaveOptions, ScaleAlgorithm
from .pillow_engine import PillowEngine, PillowImage, get_pil_format

__all__ = [
    "InterlaceMode",
    "PillowEngine",
    "PillowImage",
    "RasterEngine",
    "RasterImage",
    "SaveOptions",
    "ScaleAlgorithm",
    "get_pil_format",
]
