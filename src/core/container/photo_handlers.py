"""Photo handler dependency factories.

- UploadPhotoHandler: app-scoped (it tracks announcements still in flight
  after their request ended)
- ListPhotosHandler / FetchPhotoHandler: request-scoped

Reference:
    See src/application/commands/handlers/upload_photo_handler.py.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.config import get_settings
from src.core.container.infrastructure import (
    get_image_converter,
    get_logger,
    get_metadata_recorder,
    get_storage_router,
)
from src.core.container.sse import get_broadcast_dispatcher

if TYPE_CHECKING:
    from src.application.commands.handlers.upload_photo_handler import (
        UploadPhotoHandler,
    )
    from src.application.queries.handlers.fetch_photo_handler import (
        FetchPhotoHandler,
    )
    from src.application.queries.handlers.list_photos_handler import (
        ListPhotosHandler,
    )


@lru_cache()
def get_upload_photo_handler() -> "UploadPhotoHandler":
    """Get UploadPhoto command handler (app-scoped)."""
    from src.application.commands.handlers.upload_photo_handler import (
        UploadPhotoHandler,
    )

    return UploadPhotoHandler(
        converter=get_image_converter(),
        storage=get_storage_router(),
        metadata_recorder=get_metadata_recorder(),
        dispatcher=get_broadcast_dispatcher(),
        logger=get_logger(),
        thumbnail_max_width=get_settings().thumbnail_max_width,
    )


def get_list_photos_handler() -> "ListPhotosHandler":
    """Get ListPhotos query handler (request-scoped)."""
    from src.application.queries.handlers.list_photos_handler import (
        ListPhotosHandler,
    )

    return ListPhotosHandler(storage=get_storage_router())


def get_fetch_photo_handler() -> "FetchPhotoHandler":
    """Get FetchPhoto query handler (request-scoped)."""
    from src.application.queries.handlers.fetch_photo_handler import (
        FetchPhotoHandler,
    )

    return FetchPhotoHandler(storage=get_storage_router())
