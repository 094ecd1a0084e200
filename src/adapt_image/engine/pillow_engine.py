"""Raster engine implementation on top of Pillow."""

from pathlib import Path
from typing import Self, override

from PIL import Image, ImageFilter

from ..geometry import Box, Point
from ..image_file_info import RasterType
from .base import InterlaceMode, RasterEngine, SaveOptions, ScaleAlgorithm

_RESAMPLING: dict[ScaleAlgorithm, Image.Resampling] = {
    ScaleAlgorithm.UNDEFINED: Image.Resampling.LANCZOS,
    ScaleAlgorithm.NEAREST: Image.Resampling.NEAREST,
    ScaleAlgorithm.BOX: Image.Resampling.BOX,
    ScaleAlgorithm.BILINEAR: Image.Resampling.BILINEAR,
    ScaleAlgorithm.HAMMING: Image.Resampling.HAMMING,
    ScaleAlgorithm.BICUBIC: Image.Resampling.BICUBIC,
    ScaleAlgorithm.LANCZOS: Image.Resampling.LANCZOS,
}

# Pillow rotates counter-clockwise, RasterImage.rotate() is clockwise
_ROTATIONS: dict[int, Image.Transpose] = {
    90: Image.Transpose.ROTATE_270,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_90,
}

# metadata that is part of the pixel data rather than descriptive
_STRUCTURAL_INFO_KEYS = ("transparency",)


def get_pil_format(raster_type: RasterType) -> str:
    """Convert a raster type to the PIL format name."""
    format_map = {
        RasterType.JPEG: "JPEG",
        RasterType.PNG: "PNG",
        RasterType.GIF: "GIF",
    }
    return format_map[raster_type]


class PillowImage:
    """A mutable handle around a PIL image; operations replace the wrapped image."""

    def __init__(self, image: Image.Image):
        self._image: Image.Image = image
        self._interlace: InterlaceMode = InterlaceMode.NONE
        self._stripped: bool = False

    @property
    def image(self) -> Image.Image:
        return self._image

    @property
    def size(self) -> Box:
        width, height = self._image.size
        return Box(width, height)

    @property
    def interlace_mode(self) -> InterlaceMode:
        return self._interlace

    def _continuous_tone(self) -> Image.Image:
        # palette and bilevel images can only be resampled with NEAREST and not filtered at all
        img = self._image
        if img.mode in ("P", "1"):
            return img.convert("RGBA" if "transparency" in img.info else "RGB")
        return img

    def resize(self, size: Box, algorithm: ScaleAlgorithm = ScaleAlgorithm.UNDEFINED) -> Self:
        self._image = self._continuous_tone().resize(
            (size.width, size.height),
            _RESAMPLING[algorithm],
        )
        return self

    def crop(self, start: Point, size: Box) -> Self:
        self._image = self._image.crop(
            (start.x, start.y, start.x + size.width, start.y + size.height)
        )
        return self

    def rotate(self, degrees: int) -> Self:
        degrees %= 360
        if degrees == 0:
            return self
        transpose = _ROTATIONS.get(degrees)
        if transpose is not None:
            self._image = self._image.transpose(transpose)
        else:
            self._image = self._image.rotate(-degrees, expand=True)
        return self

    def flip_horizontally(self) -> Self:
        self._image = self._image.transpose(Image.Transpose.FLIP_LEFT_RIGHT)
        return self

    def flip_vertically(self) -> Self:
        self._image = self._image.transpose(Image.Transpose.FLIP_TOP_BOTTOM)
        return self

    def interlace(self, mode: InterlaceMode) -> Self:
        self._interlace = mode
        return self

    def sharpen(self) -> Self:
        self._image = self._continuous_tone().filter(ImageFilter.SHARPEN)
        return self

    def unsharp_mask(self, sigma: float, amount: float, threshold: float) -> Self:
        self._image = self._continuous_tone().filter(
            ImageFilter.UnsharpMask(
                radius=sigma,
                percent=round(amount * 100),
                threshold=round(threshold * 255),
            )
        )
        return self

    def strip(self) -> Self:
        self._image.info = {
            key: value
            for key, value in self._image.info.items()
            if key in _STRUCTURAL_INFO_KEYS
        }
        self._stripped = True
        return self

    def save(self, path: str | Path, options: SaveOptions) -> None:
        img = self._image
        interlaced = self._interlace is not InterlaceMode.NONE
        save_kwargs: dict[str, object] = {}

        if options.format is RasterType.JPEG:
            # JPEG does not support alpha channel or palettes
            if img.mode not in ("RGB", "L", "CMYK"):
                img = img.convert("RGB")
            if options.jpeg_quality is not None:
                save_kwargs["quality"] = options.jpeg_quality
            save_kwargs["progressive"] = interlaced

        elif options.format is RasterType.PNG:
            # Pillow chooses the PNG row filter itself, png_compression_filter has no equivalent
            if options.png_compression_level is not None:
                save_kwargs["compress_level"] = options.png_compression_level

        elif options.format is RasterType.GIF:
            save_kwargs["interlace"] = interlaced

        icc_profile = img.info.get("icc_profile")
        if icc_profile and not self._stripped:
            save_kwargs["icc_profile"] = icc_profile

        # EXIF is never written, so derivatives carry no orientation tag
        img.save(path, format=get_pil_format(options.format), **save_kwargs)


class PillowEngine(RasterEngine):
    """Opens image files as PillowImage handles."""

    @override
    def open(self, path: str | Path) -> PillowImage:
        with Image.open(path) as img:
            img.load()
            # copy() detaches the pixel data from the file handle closed on exit
            return PillowImage(img.copy())
