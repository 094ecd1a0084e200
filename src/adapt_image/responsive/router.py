"""Mapping between image URLs, original files and resized-image URLs."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, override, runtime_checkable
from urllib.parse import unquote, urlsplit

from ..errors import ImageFileNotFoundError, ImageTypeNotSupportedError
from ..image_file_info import ImageFileInfo


@runtime_checkable
class ResponsiveImageRouter(Protocol):
    def get_original_image_file_info(self, url: str) -> ImageFileInfo:
        """Inspect the original image behind `url`.

        Raises:
            ImageFileNotFoundError: If there is no file for the URL
            ImageTypeNotSupportedError: If the file is not a supported raster image
        """
        ...

    def generate_url(self, url: str, image_class: str, width: int) -> str:
        """URL under which the `width` version of `url` in `image_class` is served."""
        ...


class DocumentRootRouter(ResponsiveImageRouter):
    """
    Router for images served from a document root.

    Original URLs are paths relative to the document root; resized versions
    are served under `{url_prefix}/{image_class}/{width}/{url}`, matching the
    routes created by adapt_image.responsive.routes.create_router().
    """

    def __init__(self, document_root: str | Path, url_prefix: str = "/images"):
        self.document_root: Path = Path(document_root).resolve()
        self.url_prefix: str = url_prefix.rstrip("/")

    def resolve_path(self, url: str) -> Path:
        """Absolute file path for `url`; paths escaping the document root are rejected."""
        relative = unquote(urlsplit(url).path).lstrip("/")
        path = (self.document_root / relative).resolve()
        if not relative or not path.is_relative_to(self.document_root):
            raise ImageFileNotFoundError(url)
        return path

    @override
    def get_original_image_file_info(self, url: str) -> ImageFileInfo:
        image = ImageFileInfo.from_file(self.resolve_path(url))
        if image.raster_type is None:
            raise ImageTypeNotSupportedError(url)
        return image

    @override
    def generate_url(self, url: str, image_class: str, width: int) -> str:
        return f"{self.url_prefix}/{image_class}/{width}/{url.lstrip('/')}"
