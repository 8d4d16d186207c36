"""Domain value objects.

Immutable value objects passed between the upload pipeline's steps.
"""

from src.domain.value_objects.converted_image import ConvertedImage
from src.domain.value_objects.stored_object import StoredArtifact, StoredKeys
from src.domain.value_objects.upload_context import UploadContext

__all__ = [
    "ConvertedImage",
    "StoredArtifact",
    "StoredKeys",
    "UploadContext",
]
