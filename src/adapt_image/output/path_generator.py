"""Cache path generation for resized images."""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, override, runtime_checkable

from ..filters.filter_chain import FilterChain
from ..image_file_info import ImageFileInfo

if TYPE_CHECKING:
    from ..resize_definition import ImageResizeDefinition


def md5_hex(data: str) -> str:
    return hashlib.md5(data.encode("utf-8")).hexdigest()


def describe_hash(description: object) -> str:
    """md5 over a canonical JSON rendering of a description."""
    return md5_hex(json.dumps(description, sort_keys=True, separators=(",", ":")))


@runtime_checkable
class OutputPathGenerator(Protocol):
    def get_output_pathname(
        self,
        image: ImageFileInfo,
        definition: ImageResizeDefinition,
        extension: str,
        additional_transformation: FilterChain | None = None,
    ) -> Path: ...


class BasedirOutputPathGenerator(OutputPathGenerator):
    """
    Lays out the cache below a base directory:

        basedir/<resize chain hash>/<md5(source path + extra hash)>.<extension>

    The directory changes whenever the resize chain changes, so old entries
    are simply never looked up again. The file name folds in everything else
    that influences the result: pre-transformation, post filters and the
    encoder options for the source type.
    """

    def __init__(self, basedir: str | Path):
        self.basedir: Path = Path(basedir)

    @override
    def get_output_pathname(
        self,
        image: ImageFileInfo,
        definition: ImageResizeDefinition,
        extension: str,
        additional_transformation: FilterChain | None = None,
    ) -> Path:
        extra = FilterChain()
        if additional_transformation is not None:
            extra.append(additional_transformation)
        extra.append(definition.post_transformation)
        options = definition.output_type_map.get_output_type_options(image.raster_type)

        extra_hash = describe_hash({"filters": extra.describe(), "output": options.describe()})
        filename = f"{md5_hex(image.pathname + extra_hash)}.{extension}"
        return self.basedir / definition.resize_chain_hash / filename
