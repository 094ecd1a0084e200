"""ResponsiveImageHelper - registry of image classes and <img> rewriting."""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag
from loguru import logger

from ..errors import AdaptImageError, ConfigurationError, ImageClassNotRegisteredError
from .image_class import ResponsiveImageClass
from .responsive_image import ResponsiveImage
from .router import ResponsiveImageRouter


class ResponsiveImageHelper:
    """
    Usage:
        helper = ResponsiveImageHelper(router)
        helper.add_class(ResponsiveImageClass("content", [480, 960, 1920], "100vw"))

        soup = BeautifulSoup(html, "html.parser")
        for img in soup.find_all("img"):
            helper.make_img_element_responsive(img, "content")
    """

    def __init__(self, router: ResponsiveImageRouter):
        self.router: ResponsiveImageRouter = router
        self._classes: dict[str, ResponsiveImageClass] = {}

    def add_class(self, image_class: ResponsiveImageClass) -> ResponsiveImageHelper:
        if image_class.name in self._classes:
            raise ConfigurationError(f"Responsive image class '{image_class.name}' is already defined")
        self._classes[image_class.name] = image_class
        return self

    def is_class_defined(self, class_name: str) -> bool:
        return class_name in self._classes

    def get_class(self, class_name: str) -> ResponsiveImageClass:
        try:
            return self._classes[class_name]
        except KeyError:
            raise ImageClassNotRegisteredError(class_name) from None

    def get_responsive_image(self, url: str, class_name: str) -> ResponsiveImage:
        return ResponsiveImage(self.router, url, self.get_class(class_name))

    def make_img_element_responsive(self, img: Tag, class_name: str) -> Tag:
        """
        Set src, width, height, srcset and sizes of an <img> element.

        An image that cannot be made responsive (missing or unsupported file,
        unknown class) is left untouched so the page still renders.

        Raises:
            ValueError: If `img` is not an <img> element
        """
        if img.name != "img":
            raise ValueError(f"Expected an <img> element, got <{img.name}>")

        url = img.get("src")
        if not isinstance(url, str) or not url:
            logger.debug("Leaving <img> without src untouched")
            return img

        try:
            responsive_image = self.get_responsive_image(url, class_name)
            default = responsive_image.default_image_info
            attributes = {
                "src": default.url,
                "width": str(default.width),
                "height": str(default.height),
                "srcset": responsive_image.srcset_attribute,
                "sizes": responsive_image.sizes_attribute,
            }
        except (AdaptImageError, OSError, ValueError, LookupError) as exc:
            logger.debug(f"Leaving <img src='{url}'> untouched: {exc}")
            return img

        for name, value in attributes.items():
            img[name] = value
        return img

    def render_img_tag(self, url: str, class_name: str, attrs: dict[str, str] | None = None) -> str:
        """Render an <img> tag for `url` without a surrounding document."""
        soup = BeautifulSoup("", "html.parser")
        img = soup.new_tag("img", attrs={**(attrs or {}), "src": url})
        return str(self.make_img_element_responsive(img, class_name))
