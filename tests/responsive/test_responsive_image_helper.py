"""Tests for ResponsiveImageHelper, ResponsiveImage and <img> rewriting."""

from pathlib import PurePosixPath
from typing import override

import pytest
from bs4 import BeautifulSoup

from adapt_image.errors import (
    ConfigurationError,
    ImageClassNotRegisteredError,
    ImageTypeNotSupportedError,
    WidthNotAllowedError,
)
from adapt_image.image_file_info import ImageFileInfo, RasterType
from adapt_image.output import OutputTypeMap, PngOutputOptions
from adapt_image.responsive import (
    DocumentRootRouter,
    ResponsiveImage,
    ResponsiveImageClass,
    ResponsiveImageHelper,
    ResponsiveImageRouter,
)


class MockRouter(ResponsiveImageRouter):
    """Every .jpg URL is a 1900x1200 JPEG; everything else is unsupported."""

    @override
    def get_original_image_file_info(self, url: str) -> ImageFileInfo:
        if PurePosixPath(url).suffix != ".jpg":
            raise ImageTypeNotSupportedError(url)
        return ImageFileInfo(pathname=url, width=1900, height=1200, raster_type=RasterType.JPEG)

    @override
    def generate_url(self, url: str, image_class: str, width: int) -> str:
        return f"/imagemock/{width}/{url}"


@pytest.fixture
def helper() -> ResponsiveImageHelper:
    helper = ResponsiveImageHelper(MockRouter())
    _ = helper.add_class(ResponsiveImageClass("first", [500, 1000, 2000], "100vw"))
    return helper


def img_tag(src: str, tag: str = "img"):
    soup = BeautifulSoup(f'<{tag} src="{src}" alt="test">', "html.parser")
    return soup.find(tag)


# ============================================================================
# ResponsiveImage
# ============================================================================


def test_srcset_collapses_widths_beyond_natural_size(helper: ResponsiveImageHelper):
    """Test the largest width is reported with the natural width of the original."""
    image = helper.get_responsive_image("image1.jpg", "first")

    assert image.srcset_attribute == (
        "/imagemock/500/image1.jpg 500w, /imagemock/1000/image1.jpg 1000w, /imagemock/2000/image1.jpg 1900w"
    )
    assert image.sizes_attribute == "100vw"


def test_consecutive_duplicates_are_dropped():
    """Test widths all beyond the natural width collapse into the first of them."""
    helper = ResponsiveImageHelper(MockRouter())
    _ = helper.add_class(ResponsiveImageClass("wide", [500, 2000, 3000, 4000], "50vw"))

    image = helper.get_responsive_image("image1.jpg", "wide")

    assert list(image.versions) == [500, 2000]
    assert image.versions[2000].width == 1900
    assert image.versions[2000].height == 1200


def test_versions_carry_output_mime_type():
    """Test the MIME type follows the output type map."""
    type_map = OutputTypeMap().set_output_type_options(RasterType.JPEG, PngOutputOptions())
    helper = ResponsiveImageHelper(MockRouter())
    _ = helper.add_class(ResponsiveImageClass("png", [500], "100vw", output_type_map=type_map))

    image = helper.get_responsive_image("image1.jpg", "png")

    assert image.versions[500].mime_type == "image/png"


def test_default_image_info(helper: ResponsiveImageHelper):
    """Test the default version is the smallest width unless configured."""
    default = helper.get_responsive_image("image1.jpg", "first").default_image_info

    assert default.url == "/imagemock/500/image1.jpg"
    assert (default.width, default.height) == (500, 316)
    assert default.mime_type == "image/jpeg"


def test_collapsed_default_width_falls_back():
    """Test a default width that collapsed into a smaller one uses that version."""
    helper = ResponsiveImageHelper(MockRouter())
    _ = helper.add_class(ResponsiveImageClass("wide", [500, 2000, 3000], "50vw", default_width=3000))

    default = helper.get_responsive_image("image1.jpg", "wide").default_image_info

    assert default.url == "/imagemock/2000/image1.jpg"
    assert default.width == 1900


def test_get_resized_version_rejects_unknown_width(helper: ResponsiveImageHelper, resizer):
    """Test only widths of the class can be generated."""
    image = helper.get_responsive_image("image1.jpg", "first")

    with pytest.raises(WidthNotAllowedError):
        _ = image.get_resized_version(resizer, 750)


def test_unsupported_original_is_rejected(helper: ResponsiveImageHelper):
    """Test unsupported originals cannot become responsive images."""
    with pytest.raises(ImageTypeNotSupportedError):
        _ = helper.get_responsive_image("image3.svg", "first")


# ============================================================================
# Class registry
# ============================================================================


def test_class_registry(helper: ResponsiveImageHelper):
    """Test registered classes can be looked up."""
    assert helper.is_class_defined("first")
    assert not helper.is_class_defined("second")
    assert helper.get_class("first").available_widths == [500, 1000, 2000]


def test_duplicate_class_is_rejected(helper: ResponsiveImageHelper):
    """Test a class name can only be registered once."""
    with pytest.raises(ConfigurationError):
        _ = helper.add_class(ResponsiveImageClass("first", [100], "10vw"))


def test_unknown_class_is_an_error(helper: ResponsiveImageHelper):
    """Test looking up an unregistered class fails."""
    with pytest.raises(ImageClassNotRegisteredError) as exc_info:
        _ = helper.get_responsive_image("image1.jpg", "nope")

    assert exc_info.value.class_name == "nope"
    assert isinstance(exc_info.value, LookupError)


# ============================================================================
# <img> rewriting
# ============================================================================


def test_make_img_element_responsive(helper: ResponsiveImageHelper):
    """Test src, width, height, srcset and sizes are set on the element."""
    img = img_tag("image2.jpg")

    _ = helper.make_img_element_responsive(img, "first")

    assert img["srcset"] == (
        "/imagemock/500/image2.jpg 500w, /imagemock/1000/image2.jpg 1000w, /imagemock/2000/image2.jpg 1900w"
    )
    assert img["sizes"] == "100vw"
    assert img["src"] == "/imagemock/500/image2.jpg"
    assert img["width"] == "500"
    assert img["height"] == "316"
    assert img["alt"] == "test"


def test_svg_is_left_untouched(helper: ResponsiveImageHelper):
    """Test an unsupported image keeps its attributes."""
    img = img_tag("image3.svg")

    _ = helper.make_img_element_responsive(img, "first")

    assert img.attrs == {"src": "image3.svg", "alt": "test"}


def test_unknown_class_leaves_element_untouched(helper: ResponsiveImageHelper):
    """Test an unregistered class does not break the page."""
    img = img_tag("image2.jpg")

    _ = helper.make_img_element_responsive(img, "nope")

    assert img.attrs == {"src": "image2.jpg", "alt": "test"}


def test_non_img_element_is_rejected(helper: ResponsiveImageHelper):
    """Test only <img> elements are accepted."""
    with pytest.raises(ValueError):
        _ = helper.make_img_element_responsive(img_tag("image2.jpg", tag="video"), "first")


def test_render_img_tag(helper: ResponsiveImageHelper):
    """Test the DOM-free rendering of a responsive <img>."""
    html = helper.render_img_tag("image1.jpg", "first", {"alt": "A photo"})

    img = BeautifulSoup(html, "html.parser").find("img")
    assert img is not None
    assert img["alt"] == "A photo"
    assert img["src"] == "/imagemock/500/image1.jpg"
    assert img["sizes"] == "100vw"


def test_render_img_tag_for_unsupported_image(helper: ResponsiveImageHelper):
    """Test unsupported images are rendered with their original src."""
    html = helper.render_img_tag("drawing.svg", "first")

    assert html == '<img src="drawing.svg"/>'


# ============================================================================
# EXIF orientation
# ============================================================================


def test_rotated_original_reports_upright_sizes(make_image, tmp_path, resizer):
    """Test versions of a photo with EXIF orientation 6 match the files the resizer generates."""
    _ = make_image("rot.jpg", (1000, 600), orientation=6)
    router = DocumentRootRouter(tmp_path / "originals", url_prefix="/images")
    image = ResponsiveImage(router, "rot.jpg", ResponsiveImageClass("rotated", [500, 800, 2000], "50vw"))

    assert image.srcset_attribute == "/images/rotated/500/rot.jpg 500w, /images/rotated/800/rot.jpg 600w"
    assert (image.default_image_info.width, image.default_image_info.height) == (500, 833)
    for width, version in image.versions.items():
        generated = image.get_resized_version(resizer, width)
        assert (version.width, version.height) == (generated.width, generated.height)
