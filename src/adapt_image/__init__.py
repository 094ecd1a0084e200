"""adapt_image - cached, on-demand image resizing and responsive <img> markup."""

from .adaptive import AdaptiveImageResizer
from .config import AdaptImageSettings, get_settings
from .engine import PillowEngine, RasterEngine, RasterImage, ScaleAlgorithm
from .errors import (
    AdaptImageError,
    ConfigurationError,
    ImageClassNotRegisteredError,
    ImageFileNotFoundError,
    ImageGenerationError,
    ImageTypeNotSupportedError,
    ImageUnreadableError,
    WidthNotAllowedError,
)
from .filters import FilterChain, ImageFilter
from .geometry import UNRESTRICTED, Box, Point
from .image_file_info import ImageFileInfo, RasterType
from .output import BasedirOutputPathGenerator, OutputTypeMap
from .resize_definition import ImageResizeDefinition, ResizeMode
from .resizer import ImageResizer, predict_size
from .responsive import DocumentRootRouter, ResponsiveImage, ResponsiveImageClass, ResponsiveImageHelper
from .thumbnail import ThumbnailGenerator
from .web_image_info import WebImageInfo

__version__ = "0.1.0"

__all__ = [
    "UNRESTRICTED",
    "AdaptImageError",
    "AdaptImageSettings",
    "AdaptiveImageResizer",
    "BasedirOutputPathGenerator",
    "Box",
    "ConfigurationError",
    "DocumentRootRouter",
    "FilterChain",
    "ImageClassNotRegisteredError",
    "ImageFileInfo",
    "ImageFileNotFoundError",
    "ImageFilter",
    "ImageGenerationError",
    "ImageResizeDefinition",
    "ImageResizer",
    "ImageTypeNotSupportedError",
    "ImageUnreadableError",
    "OutputTypeMap",
    "PillowEngine",
    "Point",
    "RasterEngine",
    "RasterImage",
    "RasterType",
    "ResizeMode",
    "ResponsiveImage",
    "ResponsiveImageClass",
    "ResponsiveImageHelper",
    "ScaleAlgorithm",
    "ThumbnailGenerator",
    "WebImageInfo",
    "predict_size",
    "WidthNotAllowedError",
    "__version__",
    "get_settings",
]
