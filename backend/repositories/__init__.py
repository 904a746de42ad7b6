"""
Storage layer for recorded share events.
"""

from .share_event_store import (
    InMemoryShareEventStore,
    ShareEventStore,
    get_share_event_store,
    share_event_store,
)

__all__ = [
    "InMemoryShareEventStore",
    "ShareEventStore",
    "get_share_event_store",
    "share_event_store",
]
