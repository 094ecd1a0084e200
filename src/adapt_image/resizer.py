"""
ImageResizer - produces cached derivatives of image files.

Flow for resize(definition, image):
1. Work out the cache path for (source, definition, pre-transformation, output type)
2. Return the cached file if it is newer than the source
3. Dry run: predict the result without touching pixels
4. Otherwise generate the derivative under a per-file lock, retrying while
   another worker holds it, and return the fresh file
"""

from __future__ import annotations

import os
import shutil
import tempfile
import time
from collections.abc import Callable
from pathlib import Path

from loguru import logger

from .config import AdaptImageSettings, get_settings
from .engine.base import RasterEngine
from .engine.pillow_engine import PillowEngine
from .errors import ImageFileNotFoundError, ImageGenerationError, ImageTypeNotSupportedError
from .filters.filter_chain import FilterChain
from .filters.fix_orientation import FixOrientation
from .geometry import Box
from .image_file_info import ImageFileInfo
from .locking import cache_lock
from .output.path_generator import BasedirOutputPathGenerator, OutputPathGenerator
from .output.type_options import OutputTypeOptions
from .resize_definition import ImageResizeDefinition
from .utils.profiling import timed


class ImageResizer:
    """Resizes images according to ImageResizeDefinitions, caching the results.

    Safe to share between threads; concurrent requests for the same derivative
    (from threads or processes using the same cache and lock directories)
    generate it only once.
    """

    def __init__(
        self,
        engine: RasterEngine | None = None,
        path_generator: OutputPathGenerator | None = None,
        settings: AdaptImageSettings | None = None,
    ):
        self.settings: AdaptImageSettings = settings or get_settings()
        self.engine: RasterEngine = engine or PillowEngine()
        self.path_generator: OutputPathGenerator = path_generator or BasedirOutputPathGenerator(
            self.settings.cache_dir
        )

    def resize(
        self,
        definition: ImageResizeDefinition,
        image: ImageFileInfo,
        really_do_it: bool = False,
        pre_transformation: FilterChain | None = None,
    ) -> ImageFileInfo:
        """
        Get the derivative of `image` described by `definition`.

        Args:
            definition: Resize policy
            image: Source image
            really_do_it: If False, only predict the resulting file (path,
                size, type) without generating it, unless it is already cached
            pre_transformation: Filters applied before the resize chain

        Returns:
            ImageFileInfo of the cached file, or a synthesized one with
            last_modified 0 for a dry run

        Raises:
            ImageTypeNotSupportedError: If the source is not a supported raster type
            ImageFileNotFoundError: If the source disappeared before generation
            ImageGenerationError: If the engine failed or the lock could not be acquired
        """
        if image.raster_type is None:
            raise ImageTypeNotSupportedError(image.pathname)

        pre_transformation = _oriented(image, pre_transformation)

        options = definition.output_type_map.get_output_type_options(image.raster_type)
        cache_path = Path(
            self.path_generator.get_output_pathname(image, definition, options.extension, pre_transformation)
        )

        if _is_cached(cache_path, image.last_modified):
            logger.debug(f"Cache hit for {image.pathname}: {cache_path}")
            return ImageFileInfo.from_file(cache_path)

        transformation = _full_transformation(definition, pre_transformation)

        if not really_do_it:
            size = transformation.calculate_size(image.size)
            logger.debug(f"Predicted {cache_path} as {size} for {image.pathname}")
            return ImageFileInfo(
                pathname=str(cache_path),
                width=size.width,
                height=size.height,
                raster_type=options.raster_type,
                last_modified=0,
            )

        if not image.path.is_file():
            raise ImageFileNotFoundError(image.pathname)

        max_attempts = self.settings.max_attempts
        for attempt in range(1, max_attempts + 1):
            with cache_lock(cache_path, self.settings.lock_dir) as acquired:
                if acquired:
                    if _is_stale(cache_path, image.last_modified):
                        self._generate(
                            image,
                            definition,
                            options,
                            transformation,
                            bool(pre_transformation),
                            cache_path,
                        )
                    break
            if attempt < max_attempts:
                logger.warning(
                    f"{cache_path} is being generated elsewhere, retrying in {self.settings.retry_delay}s "
                    f"(attempt {attempt}/{max_attempts})"
                )
                time.sleep(self.settings.retry_delay)
        else:
            logger.error(f"Giving up on {cache_path} after {max_attempts} attempts")
            raise ImageGenerationError(str(cache_path), f"lock not acquired after {max_attempts} attempts")

        return ImageFileInfo.from_file(cache_path)

    @timed
    def _generate(
        self,
        image: ImageFileInfo,
        definition: ImageResizeDefinition,
        options: OutputTypeOptions,
        transformation: FilterChain,
        has_pre_transformation: bool,
        cache_path: Path,
    ) -> None:
        old_size = image.size
        if old_size.is_empty:
            # descriptor built without inspecting the file
            old_size = ImageFileInfo.from_file(image.path).size
        new_size = transformation.calculate_size(old_size)
        resize_needed = (
            new_size != old_size
            or options.raster_type is not image.raster_type
            or has_pre_transformation
        )
        post_transformation = FilterChain().append(definition.post_transformation).append(options.filters())

        cache_path.parent.mkdir(parents=True, exist_ok=True)

        if not resize_needed and not post_transformation:
            try:
                _write_atomically(cache_path, lambda tmp: shutil.copyfile(image.pathname, tmp))
            except FileNotFoundError as exc:
                raise ImageFileNotFoundError(image.pathname) from exc
            except OSError as exc:
                logger.error(f"Copying {image.pathname} to {cache_path} failed: {exc}")
                raise ImageGenerationError(str(cache_path), str(exc)) from exc
            logger.info(f"Copied {image.pathname} unchanged to {cache_path}")
            return

        try:
            raster = self.engine.open(image.path)
            if resize_needed:
                raster = transformation.apply(raster)
            raster = post_transformation.apply(raster)
            _write_atomically(cache_path, lambda tmp: raster.save(tmp, options.save_options()))
        except FileNotFoundError as exc:
            raise ImageFileNotFoundError(image.pathname) from exc
        except (OSError, ValueError) as exc:
            logger.error(f"Generating {cache_path} from {image.pathname} failed: {exc}")
            raise ImageGenerationError(str(cache_path), str(exc)) from exc

        logger.info(f"Generated {cache_path} ({new_size if resize_needed else old_size}) from {image.pathname}")


def predict_size(
    definition: ImageResizeDefinition,
    image: ImageFileInfo,
    pre_transformation: FilterChain | None = None,
) -> Box:
    """Size of the derivative ImageResizer.resize() would generate, without any I/O.

    Like the resizer, the rotation given by the EXIF orientation of `image`
    is applied first. A source of unknown size (0x0) is returned unchanged.
    """
    return _full_transformation(definition, _oriented(image, pre_transformation)).calculate_size(image.size)


def _oriented(image: ImageFileInfo, pre_transformation: FilterChain | None) -> FilterChain | None:
    if image.has_normal_orientation:
        return pre_transformation
    # never touch the caller's chain
    oriented = FilterChain([FixOrientation(orientation=image.orientation)])
    if pre_transformation is not None:
        _ = oriented.append(pre_transformation)
    return oriented


def _full_transformation(definition: ImageResizeDefinition, pre_transformation: FilterChain | None) -> FilterChain:
    if pre_transformation:
        return FilterChain().append(pre_transformation).append(definition.resize_transformation)
    return definition.resize_transformation


def _mtime(path: Path) -> float | None:
    try:
        return path.stat().st_mtime
    except FileNotFoundError:
        return None


def _is_cached(cache_path: Path, source_mtime: float) -> bool:
    mtime = _mtime(cache_path)
    return mtime is not None and mtime > source_mtime


def _is_stale(cache_path: Path, source_mtime: float) -> bool:
    mtime = _mtime(cache_path)
    return mtime is None or mtime < source_mtime


def _write_atomically(target: Path, write: Callable[[Path], object]) -> None:
    """Write via a temporary sibling so readers never see a partial file."""
    fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.stem}.", suffix=".tmp")
    os.close(fd)
    tmp_path = Path(tmp_name)
    try:
        _ = write(tmp_path)
        # mkstemp creates the file private to the owner
        os.chmod(tmp_path, 0o644)
        os.replace(tmp_path, target)
    finally:
        tmp_path.unlink(missing_ok=True)
