"""Tests for DocumentRootRouter."""

from pathlib import Path

import pytest

from adapt_image.errors import ImageFileNotFoundError, ImageTypeNotSupportedError
from adapt_image.image_file_info import RasterType
from adapt_image.responsive import DocumentRootRouter, ResponsiveImageRouter


@pytest.fixture
def document_root(make_image, tmp_path: Path) -> Path:
    _ = make_image("photos/beach.jpg", (1900, 1200))
    root = tmp_path / "originals"
    _ = (root / "logo.svg").write_text('<svg xmlns="http://www.w3.org/2000/svg"/>\n')
    return root


def test_router_satisfies_protocol(document_root: Path):
    """Test DocumentRootRouter implements the router protocol."""
    assert isinstance(DocumentRootRouter(document_root), ResponsiveImageRouter)


def test_original_file_info(document_root: Path):
    """Test URLs are resolved below the document root."""
    router = DocumentRootRouter(document_root)

    info = router.get_original_image_file_info("/photos/beach.jpg")

    assert Path(info.pathname) == (document_root / "photos" / "beach.jpg").resolve()
    assert info.raster_type is RasterType.JPEG
    assert (info.width, info.height) == (1900, 1200)


def test_query_string_and_escapes_are_ignored(document_root: Path):
    """Test the URL path is decoded and the query dropped."""
    router = DocumentRootRouter(document_root)

    info = router.get_original_image_file_info("photos/%62each.jpg?v=3")

    assert info.filename == "beach.jpg"


@pytest.mark.parametrize("url", ["/photos/missing.jpg", "/../outside.jpg", "/photos/../../outside.jpg", "/"])
def test_missing_or_escaping_urls(document_root: Path, url: str):
    """Test missing files and path traversal are reported as not found."""
    router = DocumentRootRouter(document_root)

    with pytest.raises(ImageFileNotFoundError):
        _ = router.get_original_image_file_info(url)


def test_unsupported_original(document_root: Path):
    """Test an SVG original is rejected."""
    with pytest.raises(ImageTypeNotSupportedError):
        _ = DocumentRootRouter(document_root).get_original_image_file_info("/logo.svg")


def test_generate_url(document_root: Path):
    """Test resized URLs carry prefix, class and width."""
    router = DocumentRootRouter(document_root, url_prefix="/images/")

    assert router.generate_url("/photos/beach.jpg", "gallery", 500) == "/images/gallery/500/photos/beach.jpg"
