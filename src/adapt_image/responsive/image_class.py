"""ResponsiveImageClass - a set of widths an image may be rendered in."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from ..engine.base import ScaleAlgorithm
from ..errors import ConfigurationError, WidthNotAllowedError
from ..filters.base import ImageFilter
from ..geometry import Height, Unrestricted, round_half_up
from ..output.type_map import OutputTypeMap
from ..resize_definition import ImageResizeDefinition, ResizeMode

HeightConstraint = Unrestricted | float | Callable[[int], Height]


class ResponsiveImageClass:
    """
    One ImageResizeDefinition per available width, all sharing the same
    policy: height constraint, mode, upscaling, filters and output types.

    Args:
        name: Class name, used in URLs of the resized versions
        available_widths: Widths offered in srcset; sorted and deduplicated
        sizes_attribute: Value of the HTML sizes attribute
        height_constraint: UNRESTRICTED, a height/width ratio, or a function
            returning the height for a width
        default_width: Width used for src; defaults to the smallest width
    """

    def __init__(
        self,
        name: str,
        available_widths: Iterable[int],
        sizes_attribute: str,
        height_constraint: HeightConstraint = Unrestricted.UNRESTRICTED,
        default_width: int | None = None,
        upscale: bool = False,
        scale_algorithm: ScaleAlgorithm = ScaleAlgorithm.UNDEFINED,
        additional_filters: Iterable[ImageFilter] = (),
        post_filters: Iterable[ImageFilter] = (),
        output_type_map: OutputTypeMap | None = None,
        mode: ResizeMode | str = ResizeMode.MAX,
    ):
        if not name:
            raise ConfigurationError("Responsive image class needs a name")
        widths = sorted(set(available_widths))
        if not widths:
            raise ConfigurationError(f"Responsive image class '{name}' has no widths")
        if widths[0] < 1:
            raise ConfigurationError(f"Widths must be positive, got {widths[0]}")
        if default_width is None:
            default_width = widths[0]
        elif default_width not in widths:
            raise ConfigurationError(
                f"Default width {default_width} of class '{name}' is not one of its widths {widths}"
            )

        additional_filters = list(additional_filters)
        post_filters = list(post_filters)
        self._name: str = name
        self._sizes_attribute: str = sizes_attribute
        self._default_width: int = default_width
        self._definitions: dict[int, ImageResizeDefinition] = {
            width: ImageResizeDefinition(
                width,
                _height_for(width, height_constraint),
                mode=mode,
                upscale=upscale,
                filters=additional_filters,
                scale_algorithm=scale_algorithm,
                post_filters=post_filters,
                output_type_map=output_type_map,
            )
            for width in widths
        }

    @property
    def name(self) -> str:
        return self._name

    @property
    def available_widths(self) -> list[int]:
        return list(self._definitions)

    @property
    def sizes_attribute(self) -> str:
        return self._sizes_attribute

    @property
    def default_width(self) -> int:
        return self._default_width

    @property
    def definitions(self) -> dict[int, ImageResizeDefinition]:
        """Definitions keyed by width, ascending."""
        return dict(self._definitions)

    @property
    def default_definition(self) -> ImageResizeDefinition:
        return self._definitions[self._default_width]

    def has_width(self, width: int) -> bool:
        return width in self._definitions

    def get_definition(self, width: int) -> ImageResizeDefinition:
        try:
            return self._definitions[width]
        except KeyError:
            raise WidthNotAllowedError(width) from None

    def add_filter(self, image_filter: ImageFilter, priority: int = 0) -> ResponsiveImageClass:
        for definition in self._definitions.values():
            definition.add_filter(image_filter, priority)
        return self

    def add_post_filter(self, image_filter: ImageFilter, priority: int = 0) -> ResponsiveImageClass:
        for definition in self._definitions.values():
            definition.add_post_filter(image_filter, priority)
        return self

    def set_scale_algorithm(self, algorithm: ScaleAlgorithm) -> ResponsiveImageClass:
        for definition in self._definitions.values():
            definition.scale_algorithm = algorithm
        return self

    def set_output_type_map(self, output_type_map: OutputTypeMap) -> ResponsiveImageClass:
        for definition in self._definitions.values():
            definition.output_type_map = output_type_map
        return self

    def __repr__(self) -> str:
        return f"ResponsiveImageClass({self._name!r}, widths={self.available_widths})"


def _height_for(width: int, height_constraint: HeightConstraint) -> Height:
    if isinstance(height_constraint, Unrestricted):
        return height_constraint
    if callable(height_constraint):
        return height_constraint(width)
    if height_constraint <= 0:
        raise ConfigurationError(f"Height ratio must be positive, got {height_constraint}")
    return max(1, round_half_up(width * height_constraint))
