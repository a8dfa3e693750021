"""Tests for src/feeds/discovery.py — page-head feed discovery tags."""

from notesfeed.config import SiteConfig
from notesfeed.feeds.discovery import discovery_links


class TestDiscoveryLinks:
    def test_three_formats(self, site_config):
        tags = discovery_links(site_config)
        assert tags == [
            '<link rel="alternate" type="application/rss+xml" '
            'title="Ada Example RSS feed" href="/feeds/feed.xml">',
            '<link rel="alternate" type="application/atom+xml" '
            'title="Ada Example Atom feed" href="/feeds/atom.xml">',
            '<link rel="alternate" type="application/feed+json" '
            'title="Ada Example JSON feed" href="/feeds/feed.json">',
        ]

    def test_falls_back_to_site_title(self):
        tags = discovery_links(SiteConfig(title='Notes & "Things"'))
        assert 'title="Notes &amp; &quot;Things&quot; RSS feed"' in tags[0]
