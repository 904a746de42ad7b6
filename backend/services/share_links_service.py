"""
Share link service.

Builds the share targets behind the share buttons of blog posts and podcast
episodes: one URL per platform plus the platform-specific message copy.
"""

from typing import NamedTuple, Optional
from urllib.parse import quote, urlencode

from models.config import settings
from models.exceptions import InvalidShareQueryException
from models.schemas import ShareLink
from models.share_types import PLATFORM_DISPLAY, ContentType, SharePlatform

DEFAULT_CATEGORY = "transformación empresarial"
MAX_CONTENT_HASHTAGS = 3
SHARE_LINKS_QUERY_ERROR = "Missing or invalid url, title or contentType parameter"


class ShareContent(NamedTuple):
    """The piece of content being shared."""

    type: ContentType
    title: str
    excerpt: Optional[str] = None
    category: Optional[str] = None
    tags: tuple[str, ...] = ()


class ShareMessage(NamedTuple):
    """Text and URL handed to one platform."""

    url: str
    title: str
    description: Optional[str] = None
    hashtags: tuple[str, ...] = ()
    via: Optional[str] = None


def _encode(value: str) -> str:
    """Percent-encode a URL component, leaving the same marks browsers do."""
    return quote(value, safe="!~*'()")


def build_linkedin_share_url(url: str) -> str:
    return f"https://www.linkedin.com/sharing/share-offsite/?url={_encode(url)}"


def build_twitter_share_url(message: ShareMessage) -> str:
    """Tweet intent with text, URL and optional hashtags and via handle."""
    params: list[tuple[str, str]] = [("text", message.title), ("url", message.url)]
    if message.hashtags:
        params.append(("hashtags", ",".join(message.hashtags)))
    if message.via:
        params.append(("via", message.via))
    return f"https://twitter.com/intent/tweet?{urlencode(params)}"


def build_facebook_share_url(url: str) -> str:
    return f"https://www.facebook.com/sharer/sharer.php?u={_encode(url)}"


def build_whatsapp_share_url(message: ShareMessage) -> str:
    text = f"{message.title}\n\n{message.url}"
    return f"https://wa.me/?text={_encode(text)}"


def build_email_share_url(message: ShareMessage, brand: str | None = None) -> str:
    """mailto: link with the title as subject and a branded body."""
    brand = brand or settings.SHARE_BRAND_NAME
    body = (
        f"{message.description or message.title}\n\n"
        f"Leer más: {message.url}\n\n---\nCompartido desde {brand}"
    )
    return f"mailto:?subject={_encode(message.title)}&body={_encode(body)}"


def generate_share_messages(
    content: ShareContent, url: str
) -> dict[SharePlatform, ShareMessage]:
    """
    Write platform-specific copy for a blog post or podcast episode.

    LinkedIn is professional, Twitter is short with hashtags, Facebook is
    community-oriented, WhatsApp is personal and email is formal.
    """
    is_blog = content.type == ContentType.BLOG
    category = content.category or DEFAULT_CATEGORY
    handle = settings.SHARE_TWITTER_HANDLE
    brand = settings.SHARE_BRAND_NAME

    hashtags = list(content.tags[:MAX_CONTENT_HASHTAGS])
    if handle not in hashtags:
        hashtags.append(handle)

    if is_blog:
        email_description = content.excerpt or (
            f"Te comparto este artículo de {brand} sobre {category} "
            "que puede ser de tu interés."
        )
    else:
        email_description = content.excerpt or (
            f"Te comparto este episodio del Podcast DUO sobre {category}."
        )

    return {
        SharePlatform.LINKEDIN: ShareMessage(
            url=url,
            title=content.title,
            description=(
                f"Interesante artículo sobre {category}: {content.title}"
                if is_blog
                else f"Nuevo episodio de podcast: {content.title}"
            ),
        ),
        SharePlatform.TWITTER: ShareMessage(
            url=url,
            title=(
                f"{content.title} - Insights sobre transformación empresarial"
                if is_blog
                else f"{content.title} - Podcast DUO"
            ),
            hashtags=tuple(hashtags),
            via=handle,
        ),
        SharePlatform.FACEBOOK: ShareMessage(
            url=url,
            title=content.title,
            description=(
                f"Te comparto este artículo interesante de {brand}: {content.title}"
                if is_blog
                else f"Escucha este episodio del Podcast DUO: {content.title}"
            ),
        ),
        SharePlatform.WHATSAPP: ShareMessage(
            url=url,
            title=(
                f"Te recomiendo este artículo:\n{content.title}"
                if is_blog
                else f"Escucha este podcast interesante:\n{content.title}"
            ),
            description=content.excerpt,
        ),
        SharePlatform.EMAIL: ShareMessage(
            url=url,
            title=(
                f"Artículo recomendado: {content.title} | {brand}"
                if is_blog
                else f"Podcast recomendado: {content.title} | {brand}"
            ),
            description=email_description,
        ),
    }


class ShareLinksService:
    """Service assembling share targets for every platform."""

    @staticmethod
    def parse_share_content(
        url: str | None,
        title: str | None,
        content_type: str | None,
        excerpt: str | None = None,
        category: str | None = None,
        tags: str | None = None,
    ) -> tuple[str, ShareContent]:
        """
        Validate share-link query parameters.

        Args:
            tags: Comma-separated tag list; blank entries are ignored

        Raises:
            InvalidShareQueryException: If url or title is missing or the
                content type is not blog/podcast
        """
        if not url or not title or not content_type:
            raise InvalidShareQueryException(SHARE_LINKS_QUERY_ERROR)

        try:
            parsed_type = ContentType(content_type)
        except ValueError as e:
            raise InvalidShareQueryException(SHARE_LINKS_QUERY_ERROR) from e

        tag_list = tuple(tag.strip() for tag in (tags or "").split(",") if tag.strip())

        return url, ShareContent(
            type=parsed_type,
            title=title,
            excerpt=excerpt or None,
            category=category or None,
            tags=tag_list,
        )

    @staticmethod
    def build_share_links(content: ShareContent, url: str) -> list[ShareLink]:
        """
        Build one share target per platform, in catalogue order.

        Copy and native sharing happen in the browser, so their target is
        the content URL itself.

        Args:
            content: The content being shared
            url: Canonical URL of the content

        Returns:
            List of ShareLink, one per SharePlatform
        """
        messages = generate_share_messages(content, url)

        share_urls = {
            SharePlatform.LINKEDIN: build_linkedin_share_url(url),
            SharePlatform.TWITTER: build_twitter_share_url(
                messages[SharePlatform.TWITTER]
            ),
            SharePlatform.FACEBOOK: build_facebook_share_url(url),
            SharePlatform.WHATSAPP: build_whatsapp_share_url(
                messages[SharePlatform.WHATSAPP]
            ),
            SharePlatform.EMAIL: build_email_share_url(messages[SharePlatform.EMAIL]),
            SharePlatform.COPY: url,
            SharePlatform.NATIVE: url,
        }

        return [
            ShareLink(
                platform=platform,
                name=PLATFORM_DISPLAY[platform].name,
                color=PLATFORM_DISPLAY[platform].color,
                aria_label=PLATFORM_DISPLAY[platform].aria_label,
                share_url=share_urls[platform],
            )
            for platform in SharePlatform
        ]
