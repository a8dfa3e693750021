"""Serialize an assembled channel to RSS 2.0, Atom 1.0 and JSON Feed 1.1.

Output is a pure function of the channel: feed-level timestamps come from
the newest item rather than the wall clock, so rebuilding unchanged posts
yields byte-identical files.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import UTC, date, datetime
from pathlib import Path

from feedgen.ext.base import BaseEntryExtension, BaseExtension
from feedgen.feed import FeedGenerator
from lxml import etree

from notesfeed.errors import FeedWriteError
from notesfeed.feeds.channel import FeedChannel

logger = logging.getLogger(__name__)

ATOM_NS = "http://www.w3.org/2005/Atom"
JSON_FEED_VERSION = "https://jsonfeed.org/version/1.1"

FEED_FILES: dict[str, str] = {
    "rss2": "feed.xml",
    "atom": "atom.xml",
    "json": "feed.json",
}

MIME_TYPES: dict[str, str] = {
    "rss2": "application/rss+xml",
    "atom": "application/atom+xml",
    "json": "application/feed+json",
}

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


class AlternateLinksExtension(BaseExtension):
    """Adds ``atom:link rel="alternate"`` elements to an RSS channel.

    feedgen only carries the self link into RSS output; this advertises the
    other feed formats as well.
    """

    def __init__(self) -> None:
        self._links: list[tuple[str, str]] = []

    def extend_ns(self) -> dict[str, str]:
        return {"atom": ATOM_NS}

    def links(self, links: list[tuple[str, str]] | None = None) -> list[tuple[str, str]]:
        """Get or set ``(href, mime_type)`` pairs."""
        if links is not None:
            self._links = list(links)
        return self._links

    def extend_rss(self, rss_feed: etree._Element) -> etree._Element:
        channel = rss_feed.find("channel")
        if channel is None:
            return rss_feed
        first_item = channel.find("item")
        position = channel.index(first_item) if first_item is not None else len(channel)
        for href, mime in self._links:
            link = etree.Element(f"{{{ATOM_NS}}}link", href=href, rel="alternate", type=mime)
            channel.insert(position, link)
            position += 1
        return rss_feed


class _NoEntryExtension(BaseEntryExtension):
    pass


def _as_datetime(value: date) -> datetime:
    return datetime(value.year, value.month, value.day, tzinfo=UTC)


def _last_updated(channel: FeedChannel) -> datetime:
    if not channel.items:
        return _EPOCH
    return _as_datetime(max(item.date for item in channel.items))


def _build_generator(channel: FeedChannel, self_format: str) -> FeedGenerator:
    fg = FeedGenerator()
    fg.id(channel.id)
    fg.title(channel.title)
    fg.description(channel.description or channel.title)
    fg.language(channel.language)
    fg.generator(channel.generator)
    if channel.author.name:
        author = {"name": channel.author.name}
        if channel.author.email:
            author["email"] = channel.author.email
        if channel.author.link:
            author["uri"] = channel.author.link
        fg.author(author)
        if channel.author.email:
            fg.managingEditor(f"{channel.author.email} ({channel.author.name})")
    if channel.image:
        fg.logo(channel.image)
    if channel.favicon:
        fg.icon(channel.favicon)
    if channel.copyright:
        fg.rights(channel.copyright)

    if self_format in channel.feed_links:
        fg.link(
            href=channel.feed_links[self_format],
            rel="self",
            type=MIME_TYPES[self_format],
        )
    for fmt, href in sorted(channel.feed_links.items()):
        if fmt != self_format:
            fg.link(href=href, rel="alternate", type=MIME_TYPES.get(fmt, ""))
    # RSS takes the last link added as its channel <link>
    fg.link(href=channel.link, rel="alternate", type="text/html")

    updated = _last_updated(channel)
    fg.updated(updated)
    fg.lastBuildDate(updated)

    for item in channel.items:
        published = _as_datetime(item.date)
        fe = fg.add_entry(order="append")
        fe.id(item.id)
        fe.guid(item.id, permalink=True)
        fe.title(item.title)
        fe.link(href=item.link, rel="alternate", type="text/html")
        if item.description:
            fe.summary(item.description)
        if item.content:
            fe.content(item.content, type="html")
        fe.published(published)
        fe.updated(published)

    return fg


def render_rss(channel: FeedChannel) -> str:
    """Render the channel as an RSS 2.0 document."""
    fg = _build_generator(channel, "rss2")
    fg.register_extension(
        "alternates", AlternateLinksExtension, _NoEntryExtension, atom=False, rss=True
    )
    fg.alternates.links(
        [
            (href, MIME_TYPES.get(fmt, ""))
            for fmt, href in sorted(channel.feed_links.items())
            if fmt != "rss2"
        ]
    )
    return fg.rss_str(pretty=True).decode("utf-8")


def render_atom(channel: FeedChannel) -> str:
    """Render the channel as an Atom 1.0 document."""
    fg = _build_generator(channel, "atom")
    return fg.atom_str(pretty=True).decode("utf-8")


def render_json(channel: FeedChannel) -> str:
    """Render the channel as a JSON Feed 1.1 document."""
    doc: dict[str, object] = {
        "version": JSON_FEED_VERSION,
        "title": channel.title,
        "home_page_url": channel.link,
    }
    if "json" in channel.feed_links:
        doc["feed_url"] = channel.feed_links["json"]
    if channel.description:
        doc["description"] = channel.description
    if channel.image:
        doc["icon"] = channel.image
    if channel.favicon:
        doc["favicon"] = channel.favicon
    doc["language"] = channel.language
    if channel.author.name:
        doc["authors"] = [{"name": channel.author.name, "url": channel.author.link}]
    alternates = {
        fmt: href for fmt, href in sorted(channel.feed_links.items()) if fmt != "json"
    }
    if alternates:
        doc["_feed_links"] = alternates

    items: list[dict[str, str]] = []
    for item in channel.items:
        entry = {
            "id": item.id,
            "url": item.link,
            "title": item.title,
        }
        if item.description:
            entry["summary"] = item.description
        entry["content_html"] = item.content
        entry["date_published"] = _as_datetime(item.date).isoformat()
        items.append(entry)
    doc["items"] = items

    return json.dumps(doc, indent=4, ensure_ascii=False) + "\n"


RENDERERS = {
    "rss2": render_rss,
    "atom": render_atom,
    "json": render_json,
}


def render_feeds(channel: FeedChannel) -> dict[str, str]:
    """Render every feed format, keyed like ``FEED_FILES``."""
    return {fmt: RENDERERS[fmt](channel) for fmt in FEED_FILES}


def _atomic_write(path: Path, content: str) -> None:
    """Write content via a temp file in the same directory and os.replace."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def write_feeds(channel: FeedChannel, feeds_dir: Path) -> list[Path]:
    """Render all three feeds, then write them under ``feeds_dir``.

    Rendering finishes before anything touches the filesystem. The directory
    is created with its parents if needed and existing files are overwritten.

    Raises:
        FeedWriteError: If the directory or a file cannot be written.
    """
    documents = render_feeds(channel)

    try:
        feeds_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FeedWriteError(f"could not create feeds directory: {exc}", path=feeds_dir) from exc

    written: list[Path] = []
    for fmt, filename in FEED_FILES.items():
        path = feeds_dir / filename
        try:
            _atomic_write(path, documents[fmt])
        except OSError as exc:
            raise FeedWriteError(f"could not write feed: {exc}", path=path) from exc
        logger.info("Wrote %s feed to %s", fmt, path)
        written.append(path)

    return written
