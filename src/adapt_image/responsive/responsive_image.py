"""ResponsiveImage - the versions of one original image in one ResponsiveImageClass."""

from __future__ import annotations

from loguru import logger

from ..errors import ImageTypeNotSupportedError, WidthNotAllowedError
from ..image_file_info import ImageFileInfo
from ..resizer import ImageResizer, predict_size
from ..web_image_info import WebImageInfo
from .image_class import ResponsiveImageClass
from .router import ResponsiveImageRouter


class ResponsiveImage:
    """
    Computes which versions of an image are worth offering.

    Without upscaling, every width beyond the natural width of the original
    yields the same image; such consecutive duplicates are collapsed into the
    first of them. Nothing is generated on construction, sizes are predicted
    the way ImageResizer generates them, EXIF rotation included.
    """

    def __init__(self, router: ResponsiveImageRouter, url: str, image_class: ResponsiveImageClass):
        self.router: ResponsiveImageRouter = router
        self.url: str = url
        self.image_class: ResponsiveImageClass = image_class

        original = router.get_original_image_file_info(url)
        if original.raster_type is None:
            raise ImageTypeNotSupportedError(original.pathname)
        self.original: ImageFileInfo = original

        versions: dict[int, WebImageInfo] = {}
        previous_width = 0
        for width, definition in image_class.definitions.items():
            size = predict_size(definition, original)
            if size.width != previous_width:
                options = definition.output_type_map.get_output_type_options(original.raster_type)
                versions[width] = WebImageInfo(
                    url=router.generate_url(url, image_class.name, width),
                    width=size.width,
                    height=size.height,
                    mime_type=options.raster_type.mime_type,
                )
            previous_width = size.width
        self._versions: dict[int, WebImageInfo] = versions
        logger.debug(f"{url} in class '{image_class.name}': versions {list(versions)}")

    @property
    def versions(self) -> dict[int, WebImageInfo]:
        """Distinct versions keyed by the class width they are generated for."""
        return dict(self._versions)

    @property
    def srcset_attribute(self) -> str:
        return ", ".join(f"{info.url} {info.width}w" for info in self._versions.values())

    @property
    def sizes_attribute(self) -> str:
        return self.image_class.sizes_attribute

    @property
    def default_image_info(self) -> WebImageInfo:
        """Version for the class default width.

        If that width collapsed into a smaller one, the largest version below
        it stands in.
        """
        default_width = self.image_class.default_width
        candidates = [width for width in self._versions if width <= default_width]
        return self._versions[max(candidates)]

    def create_resized_versions(self, resizer: ImageResizer) -> list[ImageFileInfo]:
        """Generate every width of the class (collapsed ones included)."""
        return [
            resizer.resize(definition, self.original, really_do_it=True)
            for definition in self.image_class.definitions.values()
        ]

    def get_resized_version(self, resizer: ImageResizer, width: int) -> ImageFileInfo:
        if not self.image_class.has_width(width):
            raise WidthNotAllowedError(width)
        return resizer.resize(self.image_class.get_definition(width), self.original, really_do_it=True)
