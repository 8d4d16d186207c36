"""Storage info schemas."""

from pydantic import BaseModel, Field


class StorageInfoResponse(BaseModel):
    """Configured storage backend.

    Attributes:
        mode: Backend mode (local, s3).
        details: Backend-specific settings (bucket and region, or root path).
    """

    mode: str = Field(description="Storage backend mode")
    details: dict[str, str] = Field(description="Backend-specific settings")

    @classmethod
    def from_description(cls, description: dict[str, str]) -> "StorageInfoResponse":
        details = {k: v for k, v in description.items() if k != "mode"}
        return cls(mode=description["mode"], details=details)
