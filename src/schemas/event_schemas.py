"""Event stream schemas."""

from typing import Any

from pydantic import BaseModel, Field


class ConnectionStatsResponse(BaseModel):
    """Live gallery connections, per topic.

    Attributes:
        total_topics: Topics with at least one viewer.
        total_connections: Open streams across all topics.
        topics: Open streams per topic.
    """

    total_topics: int = Field(description="Topics with at least one viewer")
    total_connections: int = Field(description="Open streams across all topics")
    topics: dict[str, int] = Field(description="Open streams per topic")

    @classmethod
    def from_stats(cls, stats: dict[str, Any]) -> "ConnectionStatsResponse":
        return cls(**stats)
