"""ImageFilter - base class for all image operations."""

from abc import ABC, abstractmethod
from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from ..engine.base import RasterImage
from ..geometry import Box


class ImageFilter(BaseModel, ABC):
    """
    An operation on a RasterImage, described by its (validated) parameters.

    Every filter can predict the size of its result without touching pixels.
    The default prediction is "size unchanged"; filters that change the
    geometry override calculate_size() and must keep it consistent with
    apply().
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", validate_assignment=True)

    @abstractmethod
    def apply(self, image: RasterImage) -> RasterImage:
        """Apply the operation and return the resulting image."""
        ...

    def calculate_size(self, size: Box) -> Box:
        return size

    def describe(self) -> dict[str, object]:
        """JSON-serializable description, used to derive cache keys."""
        return {"filter": type(self).__name__, **self.model_dump(mode="json")}
