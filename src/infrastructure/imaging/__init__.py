"""Image conversion adapters."""

from src.infrastructure.imaging.pillow_converter import PillowImageConverter

__all__ = ["PillowImageConverter"]
