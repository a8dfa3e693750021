"""Tests for src/config.py — SiteConfig, load_config, CLI overrides."""

from pathlib import Path

from notesfeed.config import (
    AuthorConfig,
    ItemOrder,
    SiteConfig,
    load_config,
    merge_cli_overrides,
)


class TestSiteConfig:
    def test_defaults(self):
        config = SiteConfig()
        assert config.language == "en"
        assert config.collection == "notes"
        assert config.order == ItemOrder.PUBLISHED_DESC
        assert config.feeds_dir == Path("public") / "feeds"

    def test_trailing_slash_stripped(self):
        config = SiteConfig(base_url="https://example.com/")
        assert config.base_url == "https://example.com"

    def test_derived_urls(self):
        config = SiteConfig(base_url="https://example.com")
        assert config.image_url == "https://example.com/og/image.png"
        assert config.favicon_url == "https://example.com/favicons/favicon.ico"
        assert config.feed_links == {
            "json": "https://example.com/feeds/feed.json",
            "atom": "https://example.com/feeds/atom.xml",
            "rss2": "https://example.com/feeds/feed.xml",
        }

    def test_author_link_defaults_to_base_url(self):
        config = SiteConfig(base_url="https://example.com")
        assert config.author_link == "https://example.com"

    def test_explicit_author_link(self):
        config = SiteConfig(author=AuthorConfig(name="A", link="https://a.dev"))
        assert config.author_link == "https://a.dev"


class TestLoadConfig:
    def test_load_from_explicit_path(self, tmp_path, monkeypatch):
        monkeypatch.delenv("NOTESFEED_BASE_URL", raising=False)
        toml = tmp_path / "site.toml"
        toml.write_text(
            'base_url = "https://blog.example.org/"\n'
            'title = "Blog"\n'
            'order = "loader"\n'
            "\n"
            "[author]\n"
            'name = "Sam"\n'
            'email = "sam@example.org"\n'
        )
        config = load_config(toml)
        assert config.base_url == "https://blog.example.org"
        assert config.title == "Blog"
        assert config.order == ItemOrder.LOADER
        assert config.author.name == "Sam"

    def test_missing_explicit_path_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.delenv("NOTESFEED_BASE_URL", raising=False)
        config = load_config(tmp_path / "nope.toml")
        assert config.base_url == SiteConfig().base_url

    def test_corrupt_toml_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.delenv("NOTESFEED_TITLE", raising=False)
        toml = tmp_path / "bad.toml"
        toml.write_text("title = [unterminated")
        config = load_config(toml)
        assert config.title == SiteConfig().title

    def test_cwd_config_discovered(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("NOTESFEED_TITLE", raising=False)
        (tmp_path / ".notesfeed.toml").write_text('title = "From CWD"\n')
        assert load_config().title == "From CWD"

    def test_env_overrides(self, tmp_path, monkeypatch):
        monkeypatch.setenv("NOTESFEED_BASE_URL", "https://env.example.com")
        monkeypatch.setenv("NOTESFEED_AUTHOR_NAME", "Env Author")
        config = load_config(tmp_path / "nope.toml")
        assert config.base_url == "https://env.example.com"
        assert config.author.name == "Env Author"


class TestMergeCliOverrides:
    def test_none_values_ignored(self):
        config = SiteConfig(base_url="https://a.example")
        merged = merge_cli_overrides(config, base_url=None, output_dir=None)
        assert merged.base_url == "https://a.example"

    def test_values_applied(self):
        config = SiteConfig()
        merged = merge_cli_overrides(
            config,
            base_url="https://b.example/",
            output_dir=Path("dist"),
            order=ItemOrder.LOADER,
        )
        assert merged.base_url == "https://b.example"
        assert merged.output_dir == "dist"
        assert merged.order == ItemOrder.LOADER

    def test_unknown_keys_ignored(self):
        merged = merge_cli_overrides(SiteConfig(), quiet=True)
        assert merged == SiteConfig()
