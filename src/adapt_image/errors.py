"""Exception hierarchy for adapt_image.

Every error derives from AdaptImageError and from the builtin exception that
describes the same condition, so callers may catch either.
"""

from __future__ import annotations


class AdaptImageError(Exception):
    """Base class for all adapt_image errors."""


class ImageFileNotFoundError(AdaptImageError, FileNotFoundError):
    def __init__(self, pathname: str):
        self.pathname: str = pathname
        super().__init__(f"Image file '{pathname}' not found or not readable")


class ImageUnreadableError(AdaptImageError, OSError):
    """The file claims to be a supported bitmap type but cannot be decoded."""

    def __init__(self, pathname: str):
        self.pathname: str = pathname
        super().__init__(f"Image file '{pathname}' is malformed and cannot be read")


class ImageTypeNotSupportedError(AdaptImageError, ValueError):
    def __init__(self, pathname: str):
        self.pathname: str = pathname
        super().__init__(f"Image file '{pathname}' is not of a supported image type")


class ConfigurationError(AdaptImageError, ValueError):
    """Invalid resize definition or responsive image class."""


class ImageGenerationError(AdaptImageError, RuntimeError):
    def __init__(self, pathname: str, reason: str):
        self.pathname: str = pathname
        self.reason: str = reason
        super().__init__(f"Could not generate image '{pathname}': {reason}")


class ImageClassNotRegisteredError(AdaptImageError, LookupError):
    def __init__(self, class_name: str):
        self.class_name: str = class_name
        super().__init__(f"Responsive image class '{class_name}' is not registered")


class WidthNotAllowedError(AdaptImageError, LookupError):
    def __init__(self, width: int):
        self.width: int = width
        super().__init__(f"Image width {width} is not allowed")
