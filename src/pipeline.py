"""Build entry point: posts in, three feed files out."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

from notesfeed.config import SiteConfig
from notesfeed.errors import BuildReport
from notesfeed.feeds.channel import add_item, create_channel, order_posts
from notesfeed.feeds.emit import write_feeds
from notesfeed.feeds.items import build_feed_item
from notesfeed.posts.loader import load_posts
from notesfeed.posts.models import Post
from notesfeed.render import MDX_COMPONENTS, Component

logger = logging.getLogger(__name__)


def generate_main_feeds(
    config: SiteConfig,
    posts: Sequence[Post] | None = None,
    *,
    components: Mapping[str, Component] = MDX_COMPONENTS,
    report: BuildReport | None = None,
) -> list[Path]:
    """Generate the RSS, Atom and JSON feeds for the site.

    Every item is built before any file is written, so a failing post leaves
    existing feed files untouched. Errors propagate to the caller.

    Args:
        config: Site configuration.
        posts: Pre-loaded posts. Loaded from ``config.content_dir / config.collection`` when None.
        components: Rendering substitutions applied to every post body.
        report: Optional report updated with counts, outputs and failures.

    Returns:
        Paths of the written feed files.
    """
    try:
        if posts is None:
            posts = load_posts(Path(config.content_dir), config.collection)

        channel = create_channel(config)
        for post in order_posts(posts, config.order):
            add_item(channel, build_feed_item(post, config, components))

        written = write_feeds(channel, config.feeds_dir)
    except Exception as exc:
        if report is not None:
            report.record_failure(exc)
            report.finish()
        raise

    logger.info("Generated %d feeds with %d items", len(written), len(channel.items))
    if report is not None:
        report.posts_processed = len(channel.items)
        report.outputs_written = [str(p) for p in written]
        report.finish()
    return written
