"""
Share tracking service for business logic.

Validates share events, applies the per-client rate limit, records events
and aggregates per-content statistics.
"""

from collections import Counter
from datetime import timedelta
from typing import Any

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from helpers.ip_utils import anonymize_ip
from helpers.rate_limiter import RateLimiter
from helpers.time_utils import format_iso8601, utc_now
from models.exceptions import (
    InvalidShareEventException,
    InvalidShareQueryException,
    RateLimitExceededException,
)
from models.schemas import (
    DailyShareCount,
    ShareEventData,
    ShareStats,
    ShareTrendsData,
    TopSharedContent,
    TopSharedContentData,
    TrackShareRequest,
)
from models.share_types import ContentType, ShareEvent, SharePlatform
from repositories.share_event_store import ShareEventStore


class ShareTrackingService:
    """Service for share tracking business logic."""

    def __init__(self, store: ShareEventStore, limiter: RateLimiter):
        """
        Initialize the service.

        Args:
            store: Where share events are recorded
            limiter: Per-client budget for recording shares
        """
        self.store = store
        self.limiter = limiter

    @staticmethod
    def parse_share_request(payload: Any) -> TrackShareRequest:
        """
        Validate a decoded share event payload.

        Args:
            payload: Decoded JSON body (any JSON value)

        Returns:
            The validated request

        Raises:
            InvalidShareEventException: If the payload is not an object, or a
                field is missing, empty, not a string, or outside its allowed set
        """
        try:
            return TrackShareRequest.model_validate(payload)
        except PydanticValidationError as e:
            raise InvalidShareEventException() from e

    @staticmethod
    def parse_content_query(
        content_id: str | None, content_type: str | None
    ) -> tuple[str, ContentType]:
        """
        Validate the content key of a read query.

        Raises:
            InvalidShareQueryException: If either value is missing or the
                content type is not blog/podcast
        """
        if not content_id or not content_type:
            raise InvalidShareQueryException()

        try:
            return content_id, ContentType(content_type)
        except ValueError as e:
            raise InvalidShareQueryException() from e

    def record_share(self, payload: Any, client_ip: str) -> ShareEventData:
        """
        Record a share event.

        Validation runs first and has no side effects. Every valid request
        then counts against the client's budget; a request over budget is
        rejected and not recorded.

        Args:
            payload: Decoded JSON body
            client_ip: Client identity for rate limiting

        Returns:
            ShareEventData acknowledging the recorded event

        Raises:
            InvalidShareEventException: If the payload is invalid
            RateLimitExceededException: If the client is over its budget
        """
        share_request = self.parse_share_request(payload)

        if not self.limiter.hit(client_ip):
            logger.warning(
                "Share rate limit exceeded for {client}",
                client=anonymize_ip(client_ip),
            )
            raise RateLimitExceededException(
                retry_after=self.limiter.retry_after(client_ip)
            )

        event = ShareEvent(
            content_id=share_request.content_id,
            content_type=share_request.content_type,
            platform=share_request.platform,
            url=share_request.url,
            timestamp=utc_now(),
        )
        self.store.append(event)

        logger.info(
            "Share tracked: {content_type}/{content_id} via {platform} from {client}",
            content_id=event.content_id,
            content_type=event.content_type.value,
            platform=event.platform.value,
            client=anonymize_ip(client_ip),
        )

        return ShareEventData(
            content_id=event.content_id,
            content_type=event.content_type,
            platform=event.platform,
            timestamp=format_iso8601(event.timestamp),
        )

    def get_stats(
        self, content_id: str | None, content_type: str | None
    ) -> ShareStats:
        """
        Aggregate share counts for one piece of content.

        Pure read: not rate limited and never modifies the store.

        Args:
            content_id: Content identifier
            content_type: "blog" or "podcast"

        Returns:
            ShareStats with every platform present (0 when never shared)
            and the time of the latest share (None when never shared)

        Raises:
            InvalidShareQueryException: If the query is missing or invalid
        """
        content_id, parsed_type = self.parse_content_query(content_id, content_type)

        events = self.store.events_for(content_id, parsed_type)
        counts = Counter(event.platform for event in events)

        return ShareStats(
            content_id=content_id,
            content_type=parsed_type,
            total_shares=len(events),
            shares_by_platform={
                platform.value: counts.get(platform, 0) for platform in SharePlatform
            },
            last_shared=(
                format_iso8601(max(event.timestamp for event in events))
                if events
                else None
            ),
        )

    def get_top_content(self, limit: int = 10) -> TopSharedContentData:
        """
        Get the most shared content across the site.

        Args:
            limit: Maximum number of items

        Returns:
            TopSharedContentData with the site-wide total and the top items
        """
        return TopSharedContentData(
            total_shares=self.store.count(),
            items=[
                TopSharedContent(
                    content_id=content_id, content_type=content_type, shares=shares
                )
                for content_id, content_type, shares in self.store.most_shared(limit)
            ],
        )

    def get_trends(self, days: int = 30) -> ShareTrendsData:
        """
        Get share counts per UTC day over the last ``days`` days.

        Days without shares are omitted.

        Args:
            days: Size of the look-back window

        Returns:
            ShareTrendsData with one entry per day, oldest first
        """
        cutoff = utc_now() - timedelta(days=days)
        per_day = Counter(
            event.timestamp.date().isoformat()
            for event in self.store.events_since(cutoff)
        )

        return ShareTrendsData(
            days=days,
            trends=[
                DailyShareCount(date=date, shares=shares)
                for date, shares in sorted(per_day.items())
            ],
        )
