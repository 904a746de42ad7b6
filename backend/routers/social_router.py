"""
Social router for API endpoints.

Handles share event tracking, share statistics and share link generation
for blog posts and podcast episodes. No authentication required.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

import models.schemas as schemas
from helpers.rate_limiter import RateLimiter, get_rate_limiter
from helpers.request_utils import get_client_ip
from models.exceptions import InvalidJSONException
from repositories.share_event_store import ShareEventStore, get_share_event_store
from services.share_links_service import ShareLinksService
from services.share_tracking_service import ShareTrackingService

router = APIRouter(prefix="/social", tags=["social"])

ERROR_RESPONSES: dict[int | str, dict] = {
    400: {"model": schemas.ErrorResponse},
    500: {"model": schemas.ErrorResponse},
}

TRACK_SHARE_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def get_share_tracking_service(
    store: ShareEventStore = Depends(get_share_event_store),
    limiter: RateLimiter = Depends(get_rate_limiter),
) -> ShareTrackingService:
    return ShareTrackingService(store=store, limiter=limiter)


@router.post(
    "/track-share",
    response_model=schemas.TrackShareResponse,
    responses={**ERROR_RESPONSES, 429: {"model": schemas.ErrorResponse}},
)
async def track_share(
    request: Request,
    service: ShareTrackingService = Depends(get_share_tracking_service),
):
    """
    Record a share event for a blog post or podcast episode.

    - **contentId**: ID of the shared content
    - **contentType**: blog or podcast
    - **platform**: linkedin, twitter, facebook, whatsapp, email, copy or native
    - **url**: URL that was shared

    Rate limited per client IP (X-Forwarded-For, then X-Real-IP).
    """
    try:
        payload = await request.json()
    except ValueError as e:
        raise InvalidJSONException() from e

    data = service.record_share(payload, client_ip=get_client_ip(request))
    return schemas.TrackShareResponse(data=data)


@router.get(
    "/track-share",
    response_model=schemas.ShareStatsResponse,
    responses=ERROR_RESPONSES,
)
def get_share_stats(
    content_id: Optional[str] = Query(None, alias="contentId"),
    content_type: Optional[str] = Query(None, alias="contentType"),
    service: ShareTrackingService = Depends(get_share_tracking_service),
):
    """
    Get share statistics for one piece of content.

    Returns total shares and a per-platform breakdown that always lists
    every platform.
    """
    return schemas.ShareStatsResponse(
        data=service.get_stats(content_id=content_id, content_type=content_type)
    )


@router.get(
    "/share-stats/top",
    response_model=schemas.TopSharedContentResponse,
    responses={500: {"model": schemas.ErrorResponse}},
)
def get_top_shared_content(
    limit: int = Query(10, ge=1, le=100, description="Max items to return"),
    service: ShareTrackingService = Depends(get_share_tracking_service),
):
    """
    Get the most shared blog posts and podcast episodes.

    Returns the site-wide share total and up to **limit** items ordered by
    share count. Not rate limited.
    """
    return schemas.TopSharedContentResponse(data=service.get_top_content(limit=limit))


@router.get(
    "/share-stats/trends",
    response_model=schemas.ShareTrendsResponse,
    responses={500: {"model": schemas.ErrorResponse}},
)
def get_share_trends(
    days: int = Query(30, ge=1, le=365, description="Days to look back"),
    service: ShareTrackingService = Depends(get_share_tracking_service),
):
    """
    Get share counts per day (UTC) over the last **days** days.

    Days without shares are omitted. Not rate limited.
    """
    return schemas.ShareTrendsResponse(data=service.get_trends(days=days))


@router.options("/track-share")
def track_share_preflight() -> JSONResponse:
    """CORS preflight for the share tracking resource."""
    return JSONResponse(content={}, headers=TRACK_SHARE_CORS_HEADERS)


@router.get(
    "/share-links",
    response_model=schemas.ShareLinksResponse,
    responses=ERROR_RESPONSES,
)
def get_share_links(
    url: Optional[str] = Query(None),
    title: Optional[str] = Query(None),
    content_type: Optional[str] = Query("blog", alias="contentType"),
    excerpt: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    tags: Optional[str] = Query(None, description="Comma-separated tags"),
):
    """
    Build share targets for every platform.

    Returns the share URL and button metadata for each platform, with
    platform-specific copy for blog posts and podcast episodes.
    """
    content_url, content = ShareLinksService.parse_share_content(
        url=url,
        title=title,
        content_type=content_type,
        excerpt=excerpt,
        category=category,
        tags=tags,
    )
    return schemas.ShareLinksResponse(
        data=schemas.ShareLinksData(
            url=content_url,
            content_type=content.type,
            links=ShareLinksService.build_share_links(content, content_url),
        )
    )
