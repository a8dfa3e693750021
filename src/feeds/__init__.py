"""Syndication feed pipeline: items, channel assembly, emission.

Each rendered post passes through link rewriting and sanitizing before it
becomes a feed item; the assembled channel is then written out as RSS 2.0,
Atom 1.0 and JSON Feed documents.
"""

from notesfeed.feeds.channel import (
    FeedAuthor,
    FeedChannel,
    add_item,
    create_channel,
    order_posts,
)
from notesfeed.feeds.discovery import discovery_links
from notesfeed.feeds.emit import (
    FEED_FILES,
    render_atom,
    render_feeds,
    render_json,
    render_rss,
    write_feeds,
)
from notesfeed.feeds.items import (
    FeedItem,
    build_feed_item,
    canonical_url,
    parse_publish_date,
)
from notesfeed.feeds.links import absolutize_links
from notesfeed.feeds.sanitize import strip_non_content

__all__ = [
    "FEED_FILES",
    "FeedAuthor",
    "FeedChannel",
    "FeedItem",
    "absolutize_links",
    "add_item",
    "build_feed_item",
    "canonical_url",
    "create_channel",
    "discovery_links",
    "order_posts",
    "parse_publish_date",
    "render_atom",
    "render_feeds",
    "render_json",
    "render_rss",
    "strip_non_content",
    "write_feeds",
]
