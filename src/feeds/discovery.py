"""Page-head ``<link rel="alternate">`` tags that let readers find the feeds."""

from __future__ import annotations

from html import escape

from notesfeed.config import SiteConfig
from notesfeed.feeds.emit import FEED_FILES, MIME_TYPES

_LABELS = {
    "rss2": "RSS",
    "atom": "Atom",
    "json": "JSON",
}


def discovery_links(config: SiteConfig) -> list[str]:
    """Return one alternate link tag per emitted feed, RSS first."""
    owner = config.author.name or config.title
    tags: list[str] = []
    for fmt, filename in FEED_FILES.items():
        title = escape(f"{owner} {_LABELS[fmt]} feed", quote=True)
        href = f"/{config.feeds_subdir}/{filename}"
        tags.append(
            f'<link rel="alternate" type="{MIME_TYPES[fmt]}" title="{title}" href="{href}">'
        )
    return tags
