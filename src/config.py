"""Site configuration loaded from .notesfeed.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".notesfeed.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG_PATH = Path.home() / ".config" / "notesfeed" / "config.toml"


class ItemOrder(StrEnum):
    """How posts are ordered inside the emitted feeds."""

    PUBLISHED_DESC = "published-desc"
    LOADER = "loader"


class AuthorConfig(BaseModel):
    """[author] section."""

    name: str = ""
    email: str = ""
    link: str = ""


class SiteConfig(BaseModel):
    """Top-level configuration for a feed build."""

    base_url: str = "https://example.com"
    title: str = "Notes"
    description: str = ""
    language: str = "en"
    author: AuthorConfig = Field(default_factory=AuthorConfig)
    copyright: str = ""
    generator: str = "notesfeed + feedgen"
    collection: str = "notes"
    content_dir: str = "content"
    output_dir: str = "public"
    feeds_subdir: str = "feeds"
    order: ItemOrder = ItemOrder.PUBLISHED_DESC

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def author_link(self) -> str:
        return self.author.link or self.base_url

    @property
    def image_url(self) -> str:
        return f"{self.base_url}/og/image.png"

    @property
    def favicon_url(self) -> str:
        return f"{self.base_url}/favicons/favicon.ico"

    @property
    def feed_links(self) -> dict[str, str]:
        """Absolute URLs of the three emitted feed documents."""
        return {
            "json": f"{self.base_url}/{self.feeds_subdir}/feed.json",
            "atom": f"{self.base_url}/{self.feeds_subdir}/atom.xml",
            "rss2": f"{self.base_url}/{self.feeds_subdir}/feed.xml",
        }

    @property
    def feeds_dir(self) -> Path:
        return Path(self.output_dir) / self.feeds_subdir


def load_config(path: str | Path | None = None) -> SiteConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .notesfeed.toml in CWD
    3. ~/.config/notesfeed/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged SiteConfig.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG_PATH.exists():
            data = _load_toml(GLOBAL_CONFIG_PATH)
            logger.info("Loaded config from %s", GLOBAL_CONFIG_PATH)

    config = SiteConfig.model_validate(data) if data else SiteConfig()

    return _apply_env_vars(config)


def merge_cli_overrides(config: SiteConfig, **cli_kwargs: object) -> SiteConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).
    """
    data = config.model_dump()

    mapping: dict[str, str] = {
        "base_url": "base_url",
        "content_dir": "content_dir",
        "output_dir": "output_dir",
        "order": "order",
    }

    for key, value in cli_kwargs.items():
        if value is None or key not in mapping:
            continue
        data[mapping[key]] = str(value) if isinstance(value, Path) else value

    return SiteConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: SiteConfig) -> SiteConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, ...]] = {
        "NOTESFEED_BASE_URL": ("base_url",),
        "NOTESFEED_TITLE": ("title",),
        "NOTESFEED_AUTHOR_NAME": ("author", "name"),
        "NOTESFEED_AUTHOR_EMAIL": ("author", "email"),
        "NOTESFEED_CONTENT_DIR": ("content_dir",),
        "NOTESFEED_OUTPUT_DIR": ("output_dir",),
    }

    for env_var, keys in env_mapping.items():
        value = os.environ.get(env_var)
        if value is None:
            continue
        if len(keys) == 1:
            data[keys[0]] = value
        else:
            data[keys[0]][keys[1]] = value

    return SiteConfig.model_validate(data)
