"""
Per-format encoder settings.

Each options object knows the raster type it produces, the file extension,
the filters that have to run right before encoding (e.g. progressive JPEG)
and the SaveOptions handed to the engine.
"""

from abc import ABC, abstractmethod
from typing import ClassVar, override

from pydantic import BaseModel, ConfigDict, Field

from ..engine.base import InterlaceMode, SaveOptions
from ..filters.effects import Interlace
from ..filters.filter_chain import FilterChain
from ..image_file_info import RasterType


class OutputTypeOptions(BaseModel, ABC):
    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    @property
    @abstractmethod
    def raster_type(self) -> RasterType: ...

    @property
    def extension(self) -> str:
        return self.raster_type.extension

    def filters(self) -> FilterChain:
        """Filters applied after the post transformation, right before saving."""
        return FilterChain()

    @abstractmethod
    def save_options(self) -> SaveOptions: ...

    def describe(self) -> dict[str, object]:
        return {"type": self.raster_type.value, **self.model_dump(mode="json")}


class JpegOutputOptions(OutputTypeOptions):
    quality: int = Field(85, ge=0, le=100)
    progressive: bool = False

    @property
    @override
    def raster_type(self) -> RasterType:
        return RasterType.JPEG

    @override
    def filters(self) -> FilterChain:
        chain = FilterChain()
        if self.progressive:
            chain.add(Interlace(mode=InterlaceMode.LINE))
        return chain

    @override
    def save_options(self) -> SaveOptions:
        return SaveOptions(format=RasterType.JPEG, jpeg_quality=self.quality)


class PngOutputOptions(OutputTypeOptions):
    compression_level: int = Field(7, ge=0, le=9)
    compression_filter: int = Field(5, ge=0, le=5)

    @property
    @override
    def raster_type(self) -> RasterType:
        return RasterType.PNG

    @override
    def save_options(self) -> SaveOptions:
        return SaveOptions(
            format=RasterType.PNG,
            png_compression_level=self.compression_level,
            png_compression_filter=self.compression_filter,
        )


class GifOutputOptions(OutputTypeOptions):
    @property
    @override
    def raster_type(self) -> RasterType:
        return RasterType.GIF

    @override
    def save_options(self) -> SaveOptions:
        return SaveOptions(format=RasterType.GIF)
