"""Descriptor of an image file: path, dimensions, raster type, mtime and EXIF orientation."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import ClassVar, NamedTuple, Self

from loguru import logger
from PIL import ExifTags, Image, UnidentifiedImageError
from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, model_validator

from .errors import ImageFileNotFoundError, ImageUnreadableError
from .geometry import Box
from .utils.media_types import determine_mime, guess_mime_from_extension


class RasterType(StrEnum):
    """Bitmap types the resizer can decode and encode."""

    JPEG = "jpeg"
    PNG = "png"
    GIF = "gif"

    @property
    def mime_type(self) -> str:
        return f"image/{self.value}"

    @property
    def extension(self) -> str:
        return "jpg" if self is RasterType.JPEG else self.value

    @classmethod
    def from_mime(cls, mime_type: str) -> RasterType | None:
        return _MIME_TYPES.get(mime_type.lower())

    @classmethod
    def from_pil_format(cls, pil_format: str | None) -> RasterType | None:
        return _PIL_FORMATS.get(pil_format or "")


_MIME_TYPES: dict[str, RasterType] = {
    "image/jpeg": RasterType.JPEG,
    "image/pjpeg": RasterType.JPEG,
    "image/png": RasterType.PNG,
    "image/gif": RasterType.GIF,
}

# MPO is the multi-picture JPEG variant written by many phone cameras
_PIL_FORMATS: dict[str, RasterType] = {
    "JPEG": RasterType.JPEG,
    "MPO": RasterType.JPEG,
    "PNG": RasterType.PNG,
    "GIF": RasterType.GIF,
}

# leading bytes Pillow itself checks before decoding
_SIGNATURES: tuple[tuple[bytes, RasterType], ...] = (
    (b"\xff\xd8\xff", RasterType.JPEG),
    (b"\x89PNG\r\n\x1a\n", RasterType.PNG),
    (b"GIF87a", RasterType.GIF),
    (b"GIF89a", RasterType.GIF),
)

_ORIENTATION_TAG = ExifTags.Base.Orientation


class ImageInspection(NamedTuple):
    width: int
    height: int
    raster_type: RasterType | None
    orientation: int


def inspect_image(pathname: str | Path) -> ImageInspection:
    """Read dimensions, raster type and EXIF orientation of an image file.

    Raises:
        ImageFileNotFoundError: If the file does not exist or cannot be opened
        ImageUnreadableError: If the content looks like a supported bitmap but cannot be decoded

    Files of any other type are reported with raster_type None and zero dimensions.
    """
    path = Path(pathname)
    if not path.is_file():
        raise ImageFileNotFoundError(str(pathname))

    try:
        with Image.open(path) as img:
            raster_type = RasterType.from_pil_format(img.format)
            if raster_type is None:
                return ImageInspection(0, 0, None, 0)
            width, height = img.size
            orientation = _read_orientation(img)
    except PermissionError as exc:
        raise ImageFileNotFoundError(str(pathname)) from exc
    except (UnidentifiedImageError, OSError, SyntaxError, EOFError) as exc:
        # Pillow raises the same error for unknown formats and for broken bitmaps
        if sniff_raster_type(path) is not None:
            raise ImageUnreadableError(str(pathname)) from exc
        logger.debug(f"Unsupported image format: {pathname}")
        return ImageInspection(0, 0, None, 0)

    return ImageInspection(width, height, raster_type, orientation)


def sniff_raster_type(pathname: str | Path) -> RasterType | None:
    """Raster type announced by the file signature, falling back to libmagic."""
    with open(pathname, "rb") as f:
        header = f.read(8)
    for signature, raster_type in _SIGNATURES:
        if header.startswith(signature):
            return raster_type
    return RasterType.from_mime(determine_mime(pathname))


def _read_orientation(img: Image.Image) -> int:
    try:
        value = img.getexif().get(_ORIENTATION_TAG, 0)
    except Exception as exc:
        logger.debug(f"Ignoring unreadable EXIF data: {exc}")
        return 0
    if not isinstance(value, int) or not 0 <= value <= 8:
        return 0
    return value


class ImageFileInfo(BaseModel):
    """Information about an existing image file or about a derivative yet to be generated.

    width and height are 0 when unknown; last_modified is 0 for files that do not exist yet.
    """

    pathname: str
    width: NonNegativeInt = 0
    height: NonNegativeInt = 0
    raster_type: RasterType | None = None
    last_modified: float = 0
    orientation: int = Field(0, ge=0, le=8)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def validate_unsupported_has_no_size(self) -> Self:
        if self.raster_type is None and (self.width or self.height):
            raise ValueError("Images of unsupported type must not have dimensions")
        return self

    @classmethod
    def from_file(cls, pathname: str | Path) -> ImageFileInfo:
        inspection = inspect_image(pathname)
        try:
            last_modified = Path(pathname).stat().st_mtime
        except FileNotFoundError as exc:
            raise ImageFileNotFoundError(str(pathname)) from exc
        return cls(
            pathname=str(pathname),
            width=inspection.width,
            height=inspection.height,
            raster_type=inspection.raster_type,
            last_modified=last_modified,
            orientation=inspection.orientation,
        )

    @property
    def path(self) -> Path:
        return Path(self.pathname)

    @property
    def filename(self) -> str:
        return self.path.name

    @property
    def extension(self) -> str:
        """File extension without the dot, lower case (e.g. "jpg")."""
        return self.path.suffix[1:].lower()

    @property
    def mime_type(self) -> str:
        if self.raster_type is not None:
            return self.raster_type.mime_type
        return guess_mime_from_extension(self.pathname)

    @property
    def size(self) -> Box:
        return Box(self.width, self.height)

    @property
    def has_normal_orientation(self) -> bool:
        return self.orientation in (0, 1)
