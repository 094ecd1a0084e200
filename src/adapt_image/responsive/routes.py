"""Route factory serving resized images on demand."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Path
from fastapi.responses import FileResponse
from loguru import logger

from ..errors import (
    ImageClassNotRegisteredError,
    ImageFileNotFoundError,
    ImageGenerationError,
    ImageTypeNotSupportedError,
    ImageUnreadableError,
    WidthNotAllowedError,
)
from ..resizer import ImageResizer
from .helper import ResponsiveImageHelper


def create_router(helper: ResponsiveImageHelper, resizer: ImageResizer) -> APIRouter:
    """Create router with injected dependencies.

    Mount it under the URL prefix of the DocumentRootRouter (or whichever
    router generates the srcset URLs), e.g.
    app.include_router(create_router(helper, resizer), prefix="/images").

    Args:
        helper: Registry of the responsive image classes
        resizer: ImageResizer generating and caching the versions

    Returns:
        Configured APIRouter with the resized image endpoint
    """
    router = APIRouter()

    @router.get("/{image_class}/{width}/{image_url:path}")
    def get_resized_image(
        image_class: str,
        width: Annotated[int, Path(gt=0, description="One of the widths of the image class")],
        image_url: str,
    ) -> FileResponse:
        """Return the `width` version of `image_url` in `image_class`, generating it if needed."""
        try:
            responsive_image = helper.get_responsive_image(image_url, image_class)
            resized = responsive_image.get_resized_version(resizer, width)
        except (ImageClassNotRegisteredError, WidthNotAllowedError, ImageFileNotFoundError) as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except ImageTypeNotSupportedError as exc:
            raise HTTPException(status_code=415, detail=str(exc)) from exc
        except (ImageGenerationError, ImageUnreadableError) as exc:
            logger.error(f"Serving {image_class}/{width}/{image_url} failed: {exc}")
            raise HTTPException(status_code=500, detail=str(exc)) from exc

        return FileResponse(resized.pathname, media_type=resized.mime_type)

    # Mark function as used (accessed via FastAPI decorator)
    _ = get_resized_image

    return router
