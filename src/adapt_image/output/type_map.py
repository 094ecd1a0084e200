"""OutputTypeMap - chooses the output format for an input raster type."""

from __future__ import annotations

from ..image_file_info import RasterType
from .type_options import GifOutputOptions, JpegOutputOptions, OutputTypeOptions, PngOutputOptions


class OutputTypeMap:
    """
    Maps input raster types to output options.

    By default every supported type is written in its own format. Input types
    without an entry (including None) fall back to the default type.
    """

    def __init__(
        self,
        options: dict[RasterType, OutputTypeOptions] | None = None,
        default_type: RasterType = RasterType.JPEG,
    ):
        self._map: dict[RasterType, OutputTypeOptions] = {
            RasterType.GIF: GifOutputOptions(),
            RasterType.PNG: PngOutputOptions(),
            RasterType.JPEG: JpegOutputOptions(),
        }
        if options:
            self._map.update(options)
        self._default_type: RasterType = default_type

    @property
    def default_type(self) -> RasterType:
        return self._default_type

    def get_output_type_options(self, input_type: RasterType | None) -> OutputTypeOptions:
        if input_type is None or input_type not in self._map:
            input_type = self._default_type
        return self._map[input_type]

    def set_output_type_options(self, input_type: RasterType, options: OutputTypeOptions) -> OutputTypeMap:
        self._map[input_type] = options
        return self

    def set_default_type(self, default_type: RasterType) -> OutputTypeMap:
        self._default_type = default_type
        return self

    def describe(self) -> dict[str, object]:
        return {
            "default": self._default_type.value,
            "map": {input_type.value: options.describe() for input_type, options in self._map.items()},
        }
