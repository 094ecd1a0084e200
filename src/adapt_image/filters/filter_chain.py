"""FilterChain - an ordered, prioritized sequence of filters."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from ..engine.base import RasterImage
from ..geometry import Box
from .base import ImageFilter


class FilterChain:
    """
    Filters grouped by integer priority.

    Lower priorities run first; filters with the same priority run in
    insertion order. A chain can itself predict the size of its result by
    folding calculate_size() over its filters.
    """

    def __init__(self, filters: Iterable[ImageFilter] = ()):
        self._filters: dict[int, list[ImageFilter]] = {}
        self._sorted: list[ImageFilter] | None = None
        for image_filter in filters:
            self.add(image_filter)

    def add(self, image_filter: ImageFilter, priority: int = 0) -> FilterChain:
        self._filters.setdefault(priority, []).append(image_filter)
        self._sorted = None
        return self

    @property
    def filters(self) -> list[ImageFilter]:
        """Filters in execution order."""
        if self._sorted is None:
            self._sorted = [f for priority in sorted(self._filters) for f in self._filters[priority]]
        return list(self._sorted)

    def apply(self, image: RasterImage) -> RasterImage:
        for image_filter in self.filters:
            image = image_filter.apply(image)
        return image

    def calculate_size(self, size: Box) -> Box:
        if size.is_empty:
            return size
        for image_filter in self.filters:
            size = image_filter.calculate_size(size)
        return size

    def append(self, chain: FilterChain) -> FilterChain:
        """Add all filters of `chain` after every filter already present."""
        priority = max(self._filters) + 1 if self._filters else 0
        for image_filter in chain.filters:
            self.add(image_filter, priority)
        return self

    def prepend(self, chain: FilterChain) -> FilterChain:
        """Add all filters of `chain` before every filter already present."""
        priority = min(self._filters) - 1 if self._filters else 0
        for image_filter in chain.filters:
            self.add(image_filter, priority)
        return self

    def copy(self) -> FilterChain:
        chain = FilterChain()
        chain._filters = {priority: list(filters) for priority, filters in self._filters.items()}
        return chain

    def describe(self) -> list[dict[str, object]]:
        return [f.describe() for f in self.filters]

    def __len__(self) -> int:
        return sum(len(filters) for filters in self._filters.values())

    def __iter__(self) -> Iterator[ImageFilter]:
        return iter(self.filters)

    def __bool__(self) -> bool:
        return len(self) > 0

    def __repr__(self) -> str:
        return f"FilterChain({self.filters!r})"
