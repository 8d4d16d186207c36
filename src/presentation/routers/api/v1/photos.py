"""Photos resource handlers.

Handler functions for event photo upload, gallery listing and fetch.
Routes are registered via ROUTE_REGISTRY in routes/registry.py.

Handlers:
    upload_event_photo - Upload a photo and announce it to live viewers
    list_event_photos  - Gallery of stored photos, newest first
    get_event_photo    - Original bytes of one photo (data URL)
"""

from typing import Annotated

from fastapi import Depends, File, Form, Request, UploadFile
from fastapi.responses import JSONResponse

from src.application.commands.handlers.upload_photo_handler import (
    UploadPhotoHandler,
)
from src.application.commands.upload_commands import UploadPhoto
from src.application.errors import ApplicationError, ApplicationErrorCode
from src.application.queries.handlers.fetch_photo_handler import FetchPhotoHandler
from src.application.queries.handlers.list_photos_handler import ListPhotosHandler
from src.application.queries.photo_queries import FetchPhoto, ListPhotos
from src.core.container import (
    get_fetch_photo_handler,
    get_list_photos_handler,
    get_storage_router,
    get_upload_photo_handler,
)
from src.core.enums import ErrorCode
from src.core.errors import ValidationError
from src.core.result import Failure
from src.domain.value_objects import UploadContext
from src.infrastructure.storage.storage_router import StorageRouter
from src.presentation.routers.api.middleware.topic_dependencies import (
    get_event_topic,
)
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder
from src.schemas.photo_schemas import (
    PhotoContentResponse,
    PhotoListResponse,
    PhotoUploadResponse,
)


async def _read_optional(upload: UploadFile | None) -> tuple[bytes | None, str | None]:
    """Read an optional file field; an empty part counts as absent."""
    if upload is None or not upload.filename:
        return None, None
    data = await upload.read()
    if not data:
        return None, None
    return data, upload.filename


# =============================================================================
# Handlers
# =============================================================================


async def upload_event_photo(
    request: Request,
    topic: Annotated[str, Depends(get_event_topic)],
    original_file: Annotated[
        UploadFile, File(description="Photo (JPEG, PNG, camera RAW, ...)")
    ],
    handler: Annotated[UploadPhotoHandler, Depends(get_upload_photo_handler)],
    storage: Annotated[StorageRouter, Depends(get_storage_router)],
    thumb_file: Annotated[
        UploadFile | None, File(description="Optional pre-rendered thumbnail")
    ] = None,
    original_name: Annotated[
        str | None, Form(description="Original file name on the uploader's machine")
    ] = None,
    local_path: Annotated[
        str | None, Form(description="Path on the uploader's machine")
    ] = None,
    shot_at: Annotated[str | None, Form(description="Capture time")] = None,
    checksum: Annotated[str | None, Form(description="Checksum of the file")] = None,
    uploader_id: Annotated[str | None, Form(description="Uploader identifier")] = None,
) -> PhotoUploadResponse | JSONResponse:
    """Upload a photo to an event.

    POST /api/v1/events/{event_code}/photos → 201 Created

    The original is converted when needed (camera RAW and other formats
    become JPEG), stored with a thumbnail, and announced to every viewer
    of the event's stream.

    Returns:
        PhotoUploadResponse on success.
        JSONResponse with RFC 9457 error on failure (415 conversion,
        503 storage).
    """
    data = await original_file.read()
    filename = original_file.filename or ""
    if not data:
        return ErrorResponseBuilder.from_application_error(
            error=ApplicationError(
                code=ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
                message="Empty file",
                domain_error=ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message="Empty file",
                    field="original_file",
                ),
            ),
            request=request,
        )

    thumbnail, thumbnail_filename = await _read_optional(thumb_file)

    command = UploadPhoto(
        topic=topic,
        original=data,
        original_filename=filename,
        thumbnail=thumbnail,
        thumbnail_filename=thumbnail_filename,
        context=UploadContext(
            original_name=original_name or filename or None,
            local_path=local_path,
            shot_at=shot_at,
            checksum=checksum,
            uploader_id=uploader_id,
        ),
    )

    result = await handler.handle(command)

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_application_error(result.error, request)

    return PhotoUploadResponse.from_artifact(result.value, storage.mode)


async def list_event_photos(
    request: Request,
    topic: Annotated[str, Depends(get_event_topic)],
    handler: Annotated[ListPhotosHandler, Depends(get_list_photos_handler)],
) -> PhotoListResponse | JSONResponse:
    """List an event's photos, newest first.

    GET /api/v1/events/{event_code}/photos → 200 OK

    An event with no photos yet returns an empty list.
    """
    result = await handler.handle(ListPhotos(topic=topic))

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_application_error(result.error, request)

    return PhotoListResponse.from_artifacts(topic, result.value)


async def get_event_photo(
    request: Request,
    photo_id: str,
    topic: Annotated[str, Depends(get_event_topic)],
    handler: Annotated[FetchPhotoHandler, Depends(get_fetch_photo_handler)],
) -> PhotoContentResponse | JSONResponse:
    """Get one photo's original as a base64 data URL.

    GET /api/v1/events/{event_code}/photos/{photo_id} → 200 OK
    """
    result = await handler.handle(FetchPhoto(topic=topic, artifact_id=photo_id))

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_application_error(result.error, request)

    return PhotoContentResponse.from_content(result.value)
