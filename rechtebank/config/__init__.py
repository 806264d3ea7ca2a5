"""Configuration helpers."""

from .settings import MAX_PHOTO_BYTES, Settings, get_settings

__all__ = ["MAX_PHOTO_BYTES", "Settings", "get_settings"]
