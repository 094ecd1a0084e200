"""AdaptiveImageResizer - pick the best fitting of several widths for a requested width."""

from __future__ import annotations

import bisect
from collections.abc import Iterable

from .errors import ConfigurationError
from .geometry import UNRESTRICTED
from .image_file_info import ImageFileInfo
from .resize_definition import ImageResizeDefinition
from .resizer import ImageResizer


class AdaptiveImageResizer:
    """
    Serves a requested width from a fixed set of resize definitions, so that
    arbitrary client widths map onto a small number of cached derivatives.
    """

    def __init__(self, definitions: Iterable[ImageResizeDefinition] = (), resizer: ImageResizer | None = None):
        self.resizer: ImageResizer = resizer or ImageResizer()
        self._definitions: dict[int, ImageResizeDefinition] = {}
        for definition in definitions:
            self.add_definition(definition)

    @classmethod
    def create(cls, widths: Iterable[int], resizer: ImageResizer | None = None) -> AdaptiveImageResizer:
        """Build definitions with unrestricted height for each width."""
        return cls([ImageResizeDefinition(width, UNRESTRICTED) for width in widths], resizer)

    @property
    def definitions(self) -> list[ImageResizeDefinition]:
        return list(self._definitions.values())

    def add_definition(self, definition: ImageResizeDefinition) -> AdaptiveImageResizer:
        """Add a definition; one with the same width replaces the existing one."""
        self._definitions[definition.width] = definition
        self._definitions = dict(sorted(self._definitions.items()))
        return self

    def get_definition_for_width(self, width: int, fit_in_width: bool = False) -> ImageResizeDefinition:
        """
        Choose the definition for a requested width.

        By default the smallest definition at least as wide as `width` is
        chosen, so the image can be scaled down by the client. With
        `fit_in_width` the largest definition not wider than `width` is
        chosen instead. If no definition qualifies, the nearest one is used.

        Raises:
            ConfigurationError: If there are no definitions
        """
        if not self._definitions:
            raise ConfigurationError("No image resize definitions available")

        widths = list(self._definitions)
        if fit_in_width:
            index = bisect.bisect_right(widths, width) - 1
            return self._definitions[widths[max(index, 0)]]
        index = bisect.bisect_left(widths, width)
        return self._definitions[widths[min(index, len(widths) - 1)]]

    def resize(
        self,
        image: ImageFileInfo,
        width: int,
        really_do_it: bool = False,
        fit_in_width: bool = False,
    ) -> ImageFileInfo:
        definition = self.get_definition_for_width(width, fit_in_width)
        return self.resizer.resize(definition, image, really_do_it=really_do_it)
