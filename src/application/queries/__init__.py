"""Queries - Read operations that fetch data.

Queries represent a request for information. They are immutable dataclasses
with question-like names (ListPhotos, FetchPhoto).

Each query has a corresponding handler that fetches and returns the requested
data. Queries NEVER change state.
"""

from src.application.queries.photo_queries import FetchPhoto, ListPhotos

__all__ = [
    "FetchPhoto",
    "ListPhotos",
]
