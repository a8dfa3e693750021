"""Strip non-content elements from rendered markup before syndication."""

from __future__ import annotations

from collections.abc import Iterable

from bs4 import BeautifulSoup

from notesfeed.render import serialize

NON_CONTENT_TAGS = ("script", "style")


def strip_non_content(html: str, tags: Iterable[str] = NON_CONTENT_TAGS) -> str:
    """Remove the given elements together with everything inside them."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup.find_all(list(tags)):
        # Nested matches go away with their ancestor
        if not tag.decomposed:
            tag.decompose()
    return serialize(soup)
