"""
Share event store.

Keeps recorded share events for the lifetime of the process. There is no
durable backend: events are lost on restart and are not shared between
worker processes.

Known limitation: the store is unbounded. The per-client rate limit is
keyed on proxy headers the caller controls, so it does not cap growth; a
long-running process that must survive abusive traffic needs an eviction
policy or a durable backend behind ``ShareEventStore``.
"""

import threading
from collections import Counter, defaultdict
from datetime import datetime
from typing import Optional, Protocol

from models.share_types import ContentType, ShareEvent


class ShareEventStore(Protocol):
    """Append-only storage for share events, keyed by content."""

    def append(self, event: ShareEvent) -> None:
        """Record an event."""
        ...

    def events_for(
        self, content_id: str, content_type: ContentType
    ) -> list[ShareEvent]:
        """All events recorded for one piece of content, oldest first."""
        ...

    def count(self, since: Optional[datetime] = None) -> int:
        """Total number of events, optionally only those at or after ``since``."""
        ...

    def most_shared(self, limit: int) -> list[tuple[str, ContentType, int]]:
        """Content keys with their share counts, highest first."""
        ...

    def events_since(self, since: datetime) -> list[ShareEvent]:
        """Every event recorded at or after ``since``, oldest first."""
        ...


class InMemoryShareEventStore:
    """Thread-safe in-memory implementation of ``ShareEventStore``."""

    def __init__(self) -> None:
        self._events: dict[tuple[str, ContentType], list[ShareEvent]] = (
            defaultdict(list)
        )
        self._lock = threading.Lock()

    def append(self, event: ShareEvent) -> None:
        with self._lock:
            self._events[event.key].append(event)

    def events_for(
        self, content_id: str, content_type: ContentType
    ) -> list[ShareEvent]:
        key = (content_id, content_type)
        with self._lock:
            # .get() so reads never create empty buckets
            return list(self._events.get(key, ()))

    def count(self, since: Optional[datetime] = None) -> int:
        """Total number of events across all content."""
        with self._lock:
            if since is None:
                return sum(len(events) for events in self._events.values())
            return sum(
                1
                for events in self._events.values()
                for event in events
                if event.timestamp >= since
            )

    def most_shared(self, limit: int) -> list[tuple[str, ContentType, int]]:
        """
        Top ``limit`` pieces of content by share count.

        Ties keep the order in which content was first shared.
        """
        with self._lock:
            counts = Counter(
                {key: len(events) for key, events in self._events.items() if events}
            )
        return [
            (content_id, content_type, shares)
            for (content_id, content_type), shares in counts.most_common(limit)
        ]

    def events_since(self, since: datetime) -> list[ShareEvent]:
        with self._lock:
            recent = [
                event
                for events in self._events.values()
                for event in events
                if event.timestamp >= since
            ]
        return sorted(recent, key=lambda event: event.timestamp)

    def clear(self) -> None:
        """
        Drop every recorded event.

        Used by tests for isolation; no API operation deletes events.
        """
        with self._lock:
            self._events.clear()


# Process-wide store - imported by the social router and tests
share_event_store = InMemoryShareEventStore()


def get_share_event_store() -> ShareEventStore:
    """Dependency returning the process-wide share event store."""
    return share_event_store
