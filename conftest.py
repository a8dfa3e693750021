"""Root conftest — runs before any test module imports."""

import os

import pytest

# CI sets FORCE_COLOR=1, which makes Rich inject ANSI escape codes into CLI
# output and breaks plain-text assertions on stdout.
os.environ.pop("FORCE_COLOR", None)
os.environ["NO_COLOR"] = "1"

BASE_URL = "https://notes.example.com"


@pytest.fixture
def site_config(tmp_path):
    """A SiteConfig pointing content and output at a temp directory."""
    from notesfeed.config import AuthorConfig, SiteConfig

    return SiteConfig(
        base_url=BASE_URL,
        title="Example Notes",
        description="Notes on software",
        author=AuthorConfig(name="Ada Example", email="ada@example.com"),
        copyright="All rights reserved 2022, Ada Example",
        content_dir=str(tmp_path / "content"),
        output_dir=str(tmp_path / "public"),
    )


@pytest.fixture
def make_post():
    """Factory for Post objects with a pre-compiled HTML body."""
    from notesfeed.posts.models import CompiledBody, Post, PostMetadata

    def _make(
        slug: str = "hello-world",
        title: str = "Hello",
        summary: str = "Hi",
        published_at: str = "2022-01-01",
        html: str = "<p>Hello</p>",
    ) -> Post:
        return Post(
            metadata=PostMetadata(
                slug=slug, title=title, summary=summary, published_at=published_at
            ),
            body=CompiledBody(html=html),
        )

    return _make


@pytest.fixture
def write_post(tmp_path):
    """Write a Markdown post with front-matter into content/notes/."""

    def _write(filename: str, front_matter: str, body: str = "Body text.\n"):
        notes_dir = tmp_path / "content" / "notes"
        notes_dir.mkdir(parents=True, exist_ok=True)
        path = notes_dir / filename
        path.write_text(f"---\n{front_matter.strip()}\n---\n\n{body}", encoding="utf-8")
        return path

    return _write
