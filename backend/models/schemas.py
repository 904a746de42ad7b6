from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from models.share_types import ContentType, SharePlatform


# Share Tracking Schemas
class TrackShareRequest(BaseModel):
    """Body of POST /api/social/track-share."""

    model_config = ConfigDict(populate_by_name=True)

    content_id: StrictStr = Field(..., alias="contentId", min_length=1)
    content_type: ContentType = Field(..., alias="contentType")
    platform: SharePlatform
    url: StrictStr = Field(..., min_length=1)


class ShareEventData(BaseModel):
    """Acknowledgement of a recorded share (the URL is not echoed back)."""

    model_config = ConfigDict(populate_by_name=True)

    content_id: str = Field(..., alias="contentId")
    content_type: ContentType = Field(..., alias="contentType")
    platform: SharePlatform
    timestamp: str


class TrackShareResponse(BaseModel):
    success: bool = True
    message: str = "Share event tracked successfully"
    data: ShareEventData


class ShareStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content_id: str = Field(..., alias="contentId")
    content_type: ContentType = Field(..., alias="contentType")
    total_shares: int = Field(..., alias="totalShares")
    shares_by_platform: dict[str, int] = Field(..., alias="sharesByPlatform")
    last_shared: Optional[str] = Field(None, alias="lastShared")


class ShareStatsResponse(BaseModel):
    success: bool = True
    data: ShareStats


class TopSharedContent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content_id: str = Field(..., alias="contentId")
    content_type: ContentType = Field(..., alias="contentType")
    shares: int


class TopSharedContentData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_shares: int = Field(..., alias="totalShares")
    items: list[TopSharedContent]


class TopSharedContentResponse(BaseModel):
    success: bool = True
    data: TopSharedContentData


class DailyShareCount(BaseModel):
    date: str  # YYYY-MM-DD, UTC
    shares: int


class ShareTrendsData(BaseModel):
    days: int
    trends: list[DailyShareCount]


class ShareTrendsResponse(BaseModel):
    success: bool = True
    data: ShareTrendsData


# Share Link Schemas
class ShareLink(BaseModel):
    """A ready-to-open share target for one platform."""

    model_config = ConfigDict(populate_by_name=True)

    platform: SharePlatform
    name: str
    color: str
    aria_label: str = Field(..., alias="ariaLabel")
    share_url: str = Field(..., alias="shareUrl")


class ShareLinksData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str
    content_type: ContentType = Field(..., alias="contentType")
    links: list[ShareLink]


class ShareLinksResponse(BaseModel):
    success: bool = True
    data: ShareLinksData


# Error / Health Schemas
class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    correlation_id: str | None = None


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    environment: str
    uptime: float
    version: str
