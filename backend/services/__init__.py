"""
Services layer for business logic.

This package contains service modules that encapsulate business logic
separate from the API routes.
"""

from .share_links_service import ShareLinksService
from .share_tracking_service import ShareTrackingService

__all__ = [
    "ShareLinksService",
    "ShareTrackingService",
]
