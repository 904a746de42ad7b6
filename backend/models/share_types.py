"""Share domain types: content types, platforms and recorded share events."""

from datetime import datetime
from enum import Enum
from typing import NamedTuple


class ContentType(str, Enum):
    """Kinds of site content that can be shared."""

    BLOG = "blog"
    PODCAST = "podcast"


class SharePlatform(str, Enum):
    """Platforms a visitor can share content to."""

    LINKEDIN = "linkedin"
    TWITTER = "twitter"
    FACEBOOK = "facebook"
    WHATSAPP = "whatsapp"
    EMAIL = "email"
    COPY = "copy"
    NATIVE = "native"


class PlatformDisplay(NamedTuple):
    """Display metadata for a share button."""

    name: str
    color: str  # hex, checked for WCAG contrast on white
    aria_label: str


PLATFORM_DISPLAY: dict[SharePlatform, PlatformDisplay] = {
    SharePlatform.LINKEDIN: PlatformDisplay(
        "LinkedIn", "#0A66C2", "Compartir en LinkedIn"
    ),
    SharePlatform.TWITTER: PlatformDisplay(
        "Twitter/X", "#000000", "Compartir en Twitter/X"
    ),
    SharePlatform.FACEBOOK: PlatformDisplay(
        "Facebook", "#1877F2", "Compartir en Facebook"
    ),
    SharePlatform.WHATSAPP: PlatformDisplay(
        "WhatsApp", "#128C7E", "Compartir en WhatsApp"
    ),
    SharePlatform.EMAIL: PlatformDisplay("Email", "#C5221F", "Compartir por email"),
    SharePlatform.COPY: PlatformDisplay("Copiar enlace", "#6B7280", "Copiar enlace"),
    SharePlatform.NATIVE: PlatformDisplay("Compartir", "#6366F1", "Compartir"),
}


class ShareEvent(NamedTuple):
    """
    A recorded share of a blog post or podcast episode.

    Immutable once recorded; the timestamp is always assigned server-side.
    """

    content_id: str
    content_type: ContentType
    platform: SharePlatform
    url: str
    timestamp: datetime

    @property
    def key(self) -> tuple[str, ContentType]:
        """Aggregation key for statistics lookups."""
        return (self.content_id, self.content_type)
