"""Tests for ImageResizeDefinition."""

import pytest

from adapt_image.engine import ScaleAlgorithm
from adapt_image.errors import ConfigurationError
from adapt_image.filters import CropCenter, ProportionalResize, Sharpen, Strip
from adapt_image.geometry import UNRESTRICTED, Box
from adapt_image.output import OutputTypeMap
from adapt_image.resize_definition import ImageResizeDefinition, ResizeMode


def filter_names(definition: ImageResizeDefinition) -> list[str]:
    return [type(f).__name__ for f in definition.resize_transformation]


# ============================================================================
# Construction and validation
# ============================================================================


def test_height_defaults_to_width():
    """Test a definition without height is square."""
    definition = ImageResizeDefinition(300)

    assert definition.height == 300
    assert definition.mode is ResizeMode.MAX
    assert filter_names(definition) == ["ProportionalResize"]


def test_crop_mode_adds_center_crop():
    """Test crop mode covers the box and cuts the overflow."""
    definition = ImageResizeDefinition(300, 200, mode="crop")

    filters = definition.resize_transformation.filters
    assert isinstance(filters[0], ProportionalResize)
    assert filters[0].min is True
    assert isinstance(filters[1], CropCenter)
    assert filters[1].size == Box(300, 200)


def test_extra_filters_follow_the_resize():
    """Test extra filters run after resizing and cropping."""
    definition = ImageResizeDefinition(300, mode=ResizeMode.CROP, filters=[Sharpen()])

    assert filter_names(definition) == ["ProportionalResize", "CropCenter", "Sharpen"]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"width": 0},
        {"width": 100, "height": 0},
        {"width": 100, "height": UNRESTRICTED, "mode": "min"},
        {"width": 100, "height": UNRESTRICTED, "mode": "crop"},
        {"width": 100, "mode": "stretch"},
    ],
)
def test_invalid_definitions_are_rejected(kwargs):
    """Test invalid parameters raise ConfigurationError."""
    with pytest.raises(ConfigurationError):
        _ = ImageResizeDefinition(**kwargs)


def test_configuration_error_is_value_error():
    """Test callers may catch ValueError."""
    with pytest.raises(ValueError):
        _ = ImageResizeDefinition(100, UNRESTRICTED, mode="min")


# ============================================================================
# Size calculation
# ============================================================================


@pytest.mark.parametrize(
    "definition, source, expected",
    [
        (ImageResizeDefinition(300), Box(600, 200), Box(300, 100)),
        (ImageResizeDefinition(300), Box(200, 600), Box(100, 300)),
        (ImageResizeDefinition(300), Box(80, 80), Box(80, 80)),
        (ImageResizeDefinition(300, upscale=True), Box(80, 80), Box(300, 300)),
        (ImageResizeDefinition(300, mode="min"), Box(1200, 600), Box(600, 300)),
        (ImageResizeDefinition(300, mode="crop"), Box(1200, 600), Box(300, 300)),
        (ImageResizeDefinition(300, mode="crop"), Box(600, 200), Box(600, 200)),
        (ImageResizeDefinition(300, mode="crop", upscale=True), Box(600, 200), Box(300, 300)),
        (ImageResizeDefinition(500, UNRESTRICTED), Box(1900, 1200), Box(500, 316)),
    ],
)
def test_calculate_size(definition: ImageResizeDefinition, source: Box, expected: Box):
    """Test predicted sizes for the resize modes."""
    assert definition.calculate_size(source) == expected


def test_post_filters_do_not_affect_size():
    """Test the post chain is not part of the size calculation."""
    definition = ImageResizeDefinition(300, post_filters=[Strip()])

    assert definition.calculate_size(Box(600, 200)) == Box(300, 100)
    assert len(definition.post_transformation) == 1


# ============================================================================
# Mutation and hashing
# ============================================================================


def test_resize_chain_hash_is_stable():
    """Test equal definitions hash equally and the hash is memoized."""
    first = ImageResizeDefinition(300, mode="crop")
    second = ImageResizeDefinition(300, mode="crop")

    assert first.resize_chain_hash == second.resize_chain_hash
    assert first.resize_chain_hash == first.resize_chain_hash
    assert first.resize_chain_hash != ImageResizeDefinition(300).resize_chain_hash


def test_hash_is_invalidated_by_add_filter():
    """Test adding a resize filter changes the hash."""
    definition = ImageResizeDefinition(300)
    before = definition.resize_chain_hash

    _ = definition.add_filter(Sharpen())

    assert definition.resize_chain_hash != before


def test_hash_is_invalidated_by_scale_algorithm():
    """Test changing the scale algorithm changes the resize filter and the hash."""
    definition = ImageResizeDefinition(300)
    before = definition.resize_chain_hash

    definition.scale_algorithm = ScaleAlgorithm.BICUBIC

    assert definition.scale_algorithm is ScaleAlgorithm.BICUBIC
    assert definition.resize_chain_hash != before


def test_post_filters_do_not_change_hash():
    """Test the post chain is keyed separately from the resize chain."""
    definition = ImageResizeDefinition(300)
    before = definition.resize_chain_hash

    _ = definition.add_post_filter(Strip())

    assert definition.resize_chain_hash == before


def test_output_type_map_setter():
    """Test the output type map can be replaced."""
    definition = ImageResizeDefinition(300)
    type_map = OutputTypeMap()

    definition.output_type_map = type_map

    assert definition.output_type_map is type_map


def test_transformations_are_copies():
    """Test changing a returned chain leaves the definition and its hash alone."""
    definition = ImageResizeDefinition(300)
    before = definition.resize_chain_hash

    _ = definition.resize_transformation.add(Sharpen())
    _ = definition.post_transformation.add(Strip())

    assert filter_names(definition) == ["ProportionalResize"]
    assert len(definition.post_transformation) == 0
    assert definition.resize_chain_hash == before
