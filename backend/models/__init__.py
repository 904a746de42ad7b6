"""Models package - Pydantic schemas and domain types."""

from .share_types import ContentType, PlatformDisplay, ShareEvent, SharePlatform

__all__ = [
    "ContentType",
    "PlatformDisplay",
    "ShareEvent",
    "SharePlatform",
]
