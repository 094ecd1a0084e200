"""Image sizes, coordinates and the unrestricted-height marker."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum


class Unrestricted(StrEnum):
    """Marker for a height that is not limited (only valid in "max" mode)."""

    UNRESTRICTED = "unrestricted"


UNRESTRICTED = Unrestricted.UNRESTRICTED

Height = int | Unrestricted


def round_half_up(value: float) -> int:
    # half away from zero; the built-in round() rounds half to even
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class Box:
    """Width and height of an image in pixels; 0x0 stands for a size not known yet."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Box dimensions must not be negative, got {self.width}x{self.height}")

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def contains(self, other: Box) -> bool:
        """True if `other` fits into this box without exceeding either axis."""
        return other.width <= self.width and other.height <= self.height

    def scale(self, ratio: float) -> Box:
        return Box(max(1, round_half_up(self.width * ratio)), max(1, round_half_up(self.height * ratio)))

    def widen(self, width: int) -> Box:
        """Scale proportionally to the given width."""
        return self.scale(width / self.width)

    def heighten(self, height: int) -> Box:
        """Scale proportionally to the given height."""
        return self.scale(height / self.height)

    def swapped(self) -> Box:
        return Box(self.height, self.width)

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Point coordinates must not be negative, got ({self.x}, {self.y})")
