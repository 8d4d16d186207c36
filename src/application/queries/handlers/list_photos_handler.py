"""ListPhotos query handler.

Recovers an event's gallery from storage, newest first.

Architecture:
- Application layer handler (orchestrates data retrieval)
- Returns Result[list[UploadArtifact], ApplicationError]
- NO broadcasts (queries are side-effect free)

URLs are resolved per query, so S3 signed URLs are fresh every time a
late-joining viewer loads the gallery.
"""

from src.application.errors import ApplicationError, ApplicationErrorCode
from src.application.queries.photo_queries import ListPhotos
from src.core.result import Failure, Result, Success
from src.domain.entities import UploadArtifact
from src.domain.value_objects import StoredArtifact
from src.infrastructure.storage.storage_router import StorageRouter


class ListPhotosHandler:
    """Handler for ListPhotos query.

    Dependencies (injected via constructor):
        - storage: Router over the configured storage backend

    Returns:
        Result[list[UploadArtifact], ApplicationError]
    """

    def __init__(self, *, storage: StorageRouter) -> None:
        self._storage = storage

    async def handle(
        self, query: ListPhotos
    ) -> Result[list[UploadArtifact], ApplicationError]:
        """Handle ListPhotos query.

        Args:
            query: ListPhotos query.

        Returns:
            Success(list[UploadArtifact]): Possibly empty, newest first.
            Failure(ApplicationError): STORAGE_UNAVAILABLE if listing failed.
        """
        result = await self._storage.list(query.topic)
        if isinstance(result, Failure):
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.STORAGE_UNAVAILABLE,
                    message=result.error.message,
                    domain_error=result.error,
                )
            )

        return Success(value=[self._to_artifact(query.topic, s) for s in result.value])

    def _to_artifact(self, topic: str, stored: StoredArtifact) -> UploadArtifact:
        download_url = self._storage.url_for(stored.original_key)
        display_url = (
            self._storage.url_for(stored.thumbnail_key)
            if stored.thumbnail_key is not None
            else download_url
        )
        return UploadArtifact(
            id=stored.artifact_id,
            topic=topic,
            original_key=stored.original_key,
            thumbnail_key=stored.thumbnail_key,
            display_url=display_url,
            download_url=download_url,
            last_modified=stored.modified_at,
        )
