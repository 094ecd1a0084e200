from typing import ClassVar

from pydantic import BaseModel, ConfigDict, PositiveInt


class WebImageInfo(BaseModel):
    """An image version as seen by a browser: where it is and how big it is."""

    url: str
    width: PositiveInt
    height: PositiveInt
    mime_type: str

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")
