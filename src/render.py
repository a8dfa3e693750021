"""Static markup rendering of compiled post bodies.

A compiled body is an HTML fragment. Rendering parses it into a tree,
applies the site's component substitutions element by element and
serializes the result back to a markup string.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

from bs4 import BeautifulSoup, Tag
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from notesfeed.errors import RenderError
from notesfeed.posts.models import CompiledBody

logger = logging.getLogger(__name__)

Component = Callable[[Tag, BeautifulSoup], None]


class SourceOrderFormatter(HTMLFormatter):
    """HTML output that keeps attributes in document order.

    Void elements are written as ``<br>``, empty attributes as bare
    booleans, and characters with named entities as those entities.
    """

    def __init__(self) -> None:
        super().__init__(
            entity_substitution=EntitySubstitution.substitute_html,
            void_element_close_prefix=None,
            empty_attributes_are_booleans=True,
        )

    def attributes(self, tag: Tag):
        if tag.attrs is None:
            return []
        return [
            (key, None if self.empty_attributes_are_booleans and value == "" else value)
            for key, value in tag.attrs.items()
        ]


HTML_FORMATTER = SourceOrderFormatter()


def serialize(soup: BeautifulSoup) -> str:
    """Serialize a parsed fragment back to markup."""
    return soup.decode(formatter=HTML_FORMATTER)


def external_link(tag: Tag, soup: BeautifulSoup) -> None:
    """Open off-site links in a new tab."""
    href = tag.get("href", "")
    if isinstance(href, str) and href.startswith(("http://", "https://")):
        tag["target"] = "_blank"
        tag["rel"] = "noopener noreferrer"


def lazy_image(tag: Tag, soup: BeautifulSoup) -> None:
    if not tag.has_attr("loading"):
        tag["loading"] = "lazy"


def scrollable_table(tag: Tag, soup: BeautifulSoup) -> None:
    """Wrap tables so wide ones scroll instead of overflowing."""
    parent = tag.parent
    if isinstance(parent, Tag) and "table-wrapper" in (parent.get("class") or []):
        return
    tag.wrap(soup.new_tag("div", attrs={"class": "table-wrapper"}))


def code_block(tag: Tag, soup: BeautifulSoup) -> None:
    classes = list(tag.get("class") or [])
    if "code-block" not in classes:
        tag["class"] = [*classes, "code-block"]


MDX_COMPONENTS: Mapping[str, Component] = {
    "a": external_link,
    "img": lazy_image,
    "table": scrollable_table,
    "pre": code_block,
}


def render_to_static_markup(
    body: CompiledBody,
    components: Mapping[str, Component] = MDX_COMPONENTS,
    *,
    slug: str = "",
) -> str:
    """Render a compiled body to a static HTML string.

    Args:
        body: The compiled post body.
        components: Element name to substitution mapping.
        slug: Post slug, used only for error messages.

    Raises:
        RenderError: If a substitution fails.
    """
    soup = BeautifulSoup(body.html, "html.parser")

    if components:
        # Materialize first; substitutions may restructure the tree
        for tag in list(soup.find_all(list(components))):
            try:
                components[tag.name](tag, soup)
            except Exception as exc:
                raise RenderError(f"component for <{tag.name}> failed: {exc}", slug=slug) from exc

    return serialize(soup)
