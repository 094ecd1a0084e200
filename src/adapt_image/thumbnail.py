"""ThumbnailGenerator - fixed-size, metadata-free previews."""

from __future__ import annotations

from collections.abc import Iterable

from .filters.base import ImageFilter
from .filters.effects import Strip
from .image_file_info import ImageFileInfo
from .resize_definition import ImageResizeDefinition, ResizeMode
from .resizer import ImageResizer


class ThumbnailGenerator:
    """
    Creates thumbnails of at most width x height.

    With crop=False the whole image is fitted into the box ("inset"); with
    crop=True the box is filled and the overflow cut off ("outbound").
    Thumbnails never carry metadata.
    """

    def __init__(
        self,
        width: int,
        height: int,
        crop: bool = False,
        filters: Iterable[ImageFilter] = (),
        resizer: ImageResizer | None = None,
    ):
        self.definition: ImageResizeDefinition = ImageResizeDefinition(
            width,
            height,
            mode=ResizeMode.CROP if crop else ResizeMode.MAX,
            filters=filters,
            post_filters=[Strip()],
        )
        self.resizer: ImageResizer = resizer or ImageResizer()

    def thumbnail(self, image: ImageFileInfo, really_do_it: bool = False) -> ImageFileInfo:
        return self.resizer.resize(self.definition, image, really_do_it=really_do_it)
