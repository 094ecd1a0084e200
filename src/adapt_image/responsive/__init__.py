"""Responsive images: srcset/sizes generation and on-demand serving."""

from .helper import ResponsiveImageHelper
from .image_class import HeightConstraint, ResponsiveImageClass
from .responsive_image import ResponsiveImage
from .router import DocumentRootRouter, ResponsiveImageRouter

__all__ = [
    "DocumentRootRouter",
    "HeightConstraint",
    "ResponsiveImage",
    "ResponsiveImageClass",
    "ResponsiveImageHelper",
    "ResponsiveImageRouter",
]
