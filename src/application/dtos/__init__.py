"""Data Transfer Objects (DTOs) for application layer.

DTOs are result dataclasses returned by command and query handlers.
They transfer data from the application layer to the presentation layer.

Usage:
    from src.application.dtos import PhotoContent
"""

from src.application.dtos.photo_dtos import PhotoContent

__all__ = ["PhotoContent"]
