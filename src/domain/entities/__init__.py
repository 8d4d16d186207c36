"""Domain entities.

Pure business entities with no framework dependencies.
"""

from src.domain.entities.upload_artifact import UploadArtifact

__all__ = ["UploadArtifact"]
