"""
ImageResizeDefinition - a named resize policy.

A definition bundles the target box, the fit mode and everything else that
determines how a derivative looks: the resize chain (proportional resize,
center crop, extra filters), the post chain that always runs and the output
type map.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum

from .engine.base import ScaleAlgorithm
from .errors import ConfigurationError
from .filters.base import ImageFilter
from .filters.crop import CropCenter
from .filters.filter_chain import FilterChain
from .filters.proportional_resize import ProportionalResize
from .geometry import Box, Height, Unrestricted
from .output.path_generator import describe_hash
from .output.type_map import OutputTypeMap


class ResizeMode(StrEnum):
    """How the image is fitted into the target box.

    MAX: the whole image fits inside the box ("contain")
    MIN: the image covers the box, one axis may overflow ("cover")
    CROP: like MIN, then the overflow is cut off centered
    """

    MAX = "max"
    MIN = "min"
    CROP = "crop"


class ImageResizeDefinition:
    def __init__(
        self,
        width: int,
        height: Height | None = None,
        mode: ResizeMode | str = ResizeMode.MAX,
        upscale: bool = False,
        filters: Iterable[ImageFilter] = (),
        scale_algorithm: ScaleAlgorithm = ScaleAlgorithm.UNDEFINED,
        post_filters: Iterable[ImageFilter] = (),
        output_type_map: OutputTypeMap | None = None,
    ):
        if height is None:
            height = width
        try:
            mode = ResizeMode(mode)
        except ValueError:
            raise ConfigurationError(f"Unknown resize mode '{mode}'") from None
        if isinstance(height, Unrestricted):
            if mode is not ResizeMode.MAX:
                raise ConfigurationError('Unrestricted height is only allowed in "max" mode')
        elif height < 1:
            raise ConfigurationError(f"height must be greater than 0, got {height}")
        if width < 1:
            raise ConfigurationError(f"width must be greater than 0, got {width}")

        self._width: int = width
        self._height: Height = height
        self._mode: ResizeMode = mode
        self._upscale: bool = upscale
        self._resize_filter: ProportionalResize = ProportionalResize(
            width=width,
            height=height,
            min=mode in (ResizeMode.MIN, ResizeMode.CROP),
            upscale=upscale,
            algorithm=scale_algorithm,
        )

        self._resize_chain: FilterChain = FilterChain([self._resize_filter])
        if mode is ResizeMode.CROP:
            assert not isinstance(height, Unrestricted)
            self._resize_chain.add(CropCenter(size=Box(width, height)))
        for image_filter in filters:
            self._resize_chain.add(image_filter)

        self._post_chain: FilterChain = FilterChain(post_filters)
        self._output_type_map: OutputTypeMap = output_type_map or OutputTypeMap()
        self._resize_chain_hash: str | None = None

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> Height:
        return self._height

    @property
    def mode(self) -> ResizeMode:
        return self._mode

    @property
    def upscale(self) -> bool:
        return self._upscale

    @property
    def scale_algorithm(self) -> ScaleAlgorithm:
        return self._resize_filter.algorithm

    @scale_algorithm.setter
    def scale_algorithm(self, algorithm: ScaleAlgorithm) -> None:
        self._resize_filter.algorithm = algorithm
        self._resize_chain_hash = None

    @property
    def output_type_map(self) -> OutputTypeMap:
        return self._output_type_map

    @output_type_map.setter
    def output_type_map(self, output_type_map: OutputTypeMap) -> None:
        self._output_type_map = output_type_map

    @property
    def resize_transformation(self) -> FilterChain:
        """Copy of the resize chain; use add_filter() to change it."""
        return self._resize_chain.copy()

    @property
    def post_transformation(self) -> FilterChain:
        return self._post_chain.copy()

    def add_filter(self, image_filter: ImageFilter, priority: int = 0) -> ImageResizeDefinition:
        """Add a filter to the resize chain.

        Like the resize itself, these filters are skipped when the source
        already has the target size and type.
        """
        self._resize_chain.add(image_filter, priority)
        self._resize_chain_hash = None
        return self

    def add_post_filter(self, image_filter: ImageFilter, priority: int = 0) -> ImageResizeDefinition:
        """Add a filter that runs on every derivative, resized or not."""
        self._post_chain.add(image_filter, priority)
        return self

    def calculate_size(self, size: Box) -> Box:
        return self._resize_chain.calculate_size(size)

    @property
    def resize_chain_hash(self) -> str:
        # concurrent first calls compute the same value
        if self._resize_chain_hash is None:
            self._resize_chain_hash = describe_hash(self._resize_chain.describe())
        return self._resize_chain_hash

    def __repr__(self) -> str:
        height = self._height.value if isinstance(self._height, Unrestricted) else self._height
        return f"ImageResizeDefinition({self._width}x{height}, mode={self._mode.value}, upscale={self._upscale})"
