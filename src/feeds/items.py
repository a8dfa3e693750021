"""Map a post to a syndication item: render, absolutize, sanitize."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict

from notesfeed.config import SiteConfig
from notesfeed.errors import ContentCompilationError, RenderError
from notesfeed.feeds.links import absolutize_links
from notesfeed.feeds.sanitize import strip_non_content
from notesfeed.posts.models import Post
from notesfeed.render import MDX_COMPONENTS, Component, render_to_static_markup

logger = logging.getLogger(__name__)


class FeedItem(BaseModel):
    """One syndication entry. ``id`` and ``link`` are the canonical post URL."""

    model_config = ConfigDict(frozen=True)

    title: str
    id: str
    link: str
    description: str = ""
    date: date
    content: str = ""


def canonical_url(base_url: str, slug: str) -> str:
    return f"{base_url.rstrip('/')}/notes/{slug}"


def parse_publish_date(value: str | date) -> date:
    """Parse an ISO-8601 date or timestamp into a calendar date.

    Time of day and zone are dropped; only the written calendar date counts.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    try:
        return datetime.fromisoformat(value.strip()).date()
    except ValueError as exc:
        raise ContentCompilationError(f"invalid publish date {value!r}") from exc


def build_feed_item(
    post: Post,
    config: SiteConfig,
    components: Mapping[str, Component] = MDX_COMPONENTS,
) -> FeedItem:
    """Build the feed item for one post.

    Raises:
        RenderError: If rendering or sanitizing fails.
        ContentCompilationError: If the publish date cannot be parsed.
    """
    meta = post.metadata
    url = canonical_url(config.base_url, meta.slug)

    markup = render_to_static_markup(post.body, components, slug=meta.slug)
    markup = absolutize_links(markup, url, config.base_url)
    try:
        content = strip_non_content(markup)
    except Exception as exc:
        raise RenderError(f"sanitizing failed: {exc}", slug=meta.slug) from exc

    try:
        published = parse_publish_date(meta.published_at)
    except ContentCompilationError as exc:
        raise ContentCompilationError(str(exc), path=post.source_path) from exc

    logger.debug("Built feed item for %s", meta.slug)
    return FeedItem(
        title=meta.title,
        id=url,
        link=url,
        description=meta.summary,
        date=published,
        content=content,
    )
