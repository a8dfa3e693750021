"""Feed channel metadata and item accumulation."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, Field

from notesfeed.config import ItemOrder, SiteConfig
from notesfeed.errors import ContentCompilationError
from notesfeed.feeds.items import FeedItem, parse_publish_date
from notesfeed.posts.models import Post


class FeedAuthor(BaseModel):
    name: str = ""
    email: str = ""
    link: str = ""


class FeedChannel(BaseModel):
    """Channel-level feed metadata plus the accumulated items."""

    title: str
    description: str = ""
    id: str
    link: str
    language: str = "en"
    image: str = ""
    favicon: str = ""
    copyright: str = ""
    generator: str = ""
    feed_links: dict[str, str] = Field(default_factory=dict)
    author: FeedAuthor = Field(default_factory=FeedAuthor)
    items: list[FeedItem] = Field(default_factory=list)


def create_channel(config: SiteConfig) -> FeedChannel:
    """Build the channel metadata for the site's main feeds."""
    return FeedChannel(
        title=config.title,
        description=config.description,
        id=config.base_url,
        link=config.base_url,
        language=config.language,
        image=config.image_url,
        favicon=config.favicon_url,
        copyright=config.copyright,
        generator=config.generator,
        feed_links=config.feed_links,
        author=FeedAuthor(
            name=config.author.name,
            email=config.author.email,
            link=config.author_link,
        ),
    )


def add_item(channel: FeedChannel, item: FeedItem) -> FeedChannel:
    """Append an item to the channel, keeping insertion order."""
    channel.items.append(item)
    return channel


def _publish_date(post: Post):
    try:
        return parse_publish_date(post.metadata.published_at)
    except ContentCompilationError as exc:
        raise ContentCompilationError(str(exc), path=post.source_path) from exc


def order_posts(posts: Iterable[Post], order: ItemOrder | str) -> list[Post]:
    """Put posts in feed order.

    ``published-desc`` is newest first with the slug breaking ties;
    ``loader`` keeps the enumeration order as given.
    """
    posts = list(posts)
    if ItemOrder(order) == ItemOrder.LOADER:
        return posts
    by_slug = sorted(posts, key=lambda p: p.slug)
    return sorted(
        by_slug,
        key=_publish_date,
        reverse=True,
    )
