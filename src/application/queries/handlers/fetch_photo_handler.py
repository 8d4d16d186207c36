"""FetchPhoto query handler.

Reads one stored original through the storage router. Used by clients
that want the bytes inline (data URL) instead of following a storage URL.
"""

from src.application.dtos import PhotoContent
from src.application.errors import ApplicationError, ApplicationErrorCode
from src.application.queries.photo_queries import FetchPhoto
from src.core.errors import NotFoundError
from src.core.result import Failure, Result, Success
from src.infrastructure.storage.storage_router import StorageRouter


class FetchPhotoHandler:
    """Handler for FetchPhoto query.

    Dependencies (injected via constructor):
        - storage: Router over the configured storage backend

    Returns:
        Result[PhotoContent, ApplicationError]
    """

    def __init__(self, *, storage: StorageRouter) -> None:
        self._storage = storage

    async def handle(self, query: FetchPhoto) -> Result[PhotoContent, ApplicationError]:
        """Handle FetchPhoto query.

        Returns:
            Success(PhotoContent): Original bytes and content type.
            Failure(ApplicationError): NOT_FOUND or STORAGE_UNAVAILABLE.
        """
        result = await self._storage.fetch(query.topic, query.artifact_id)
        match result:
            case Success(value=(data, content_type)):
                return Success(
                    value=PhotoContent(
                        artifact_id=query.artifact_id,
                        topic=query.topic,
                        data=data,
                        content_type=content_type,
                    )
                )
            case Failure(error=NotFoundError() as error):
                return Failure(
                    error=ApplicationError(
                        code=ApplicationErrorCode.NOT_FOUND,
                        message=error.message,
                        domain_error=error,
                    )
                )
            case Failure(error=error):
                return Failure(
                    error=ApplicationError(
                        code=ApplicationErrorCode.STORAGE_UNAVAILABLE,
                        message=error.message,
                        domain_error=error,
                    )
                )
