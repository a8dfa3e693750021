"""Post loader: discovers content files, parses front-matter, compiles bodies.

Posts live as ``*.md`` / ``*.mdx`` files under ``<content_dir>/<collection>``.
Each file starts with a YAML front-matter block delimited by ``---`` lines.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

import markdown
import yaml
from pydantic import ValidationError

from notesfeed.errors import ContentCompilationError
from notesfeed.posts.models import CompiledBody, Post, PostMetadata

logger = logging.getLogger(__name__)

POST_SUFFIXES = (".md", ".mdx")

MARKDOWN_EXTENSIONS = [
    "fenced_code",
    "tables",
    "footnotes",
    "attr_list",
    "toc",
]

_FRONT_MATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)


def parse_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Split a document into its YAML front-matter and body.

    Returns ``({}, text)`` when the document has no front-matter block.

    Raises:
        ValueError: If the block is not valid YAML or not a mapping.
    """
    match = _FRONT_MATTER_RE.match(text)
    if match is None:
        return {}, text

    data = yaml.safe_load(match.group(1)) or {}
    if not isinstance(data, dict):
        raise ValueError("front-matter must be a mapping")
    return data, text[match.end():]


def compile_body(source: str) -> CompiledBody:
    """Compile Markdown source into an HTML fragment."""
    md = markdown.Markdown(extensions=MARKDOWN_EXTENSIONS, output_format="html")
    try:
        html = md.convert(source)
    except Exception as exc:
        raise ContentCompilationError(f"markdown compilation failed: {exc}") from exc
    return CompiledBody(source=source, html=html)


def load_post(path: Path) -> Post:
    """Load and compile a single post file.

    The slug falls back to the file stem when the front-matter omits it.

    Raises:
        ContentCompilationError: If the file cannot be read, its front-matter
            is invalid, required fields are missing, or compilation fails.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ContentCompilationError(f"could not read post: {exc}", path=path) from exc

    try:
        front_matter, body = parse_front_matter(text)
    except (yaml.YAMLError, ValueError) as exc:
        raise ContentCompilationError(f"invalid front-matter: {exc}", path=path) from exc

    front_matter.setdefault("slug", path.stem)
    try:
        metadata = PostMetadata.model_validate(front_matter)
    except ValidationError as exc:
        missing = ", ".join(str(err["loc"][0]) for err in exc.errors())
        raise ContentCompilationError(f"invalid metadata ({missing})", path=path) from exc

    try:
        compiled = compile_body(body)
    except ContentCompilationError as exc:
        raise ContentCompilationError(str(exc), path=path) from exc

    return Post(metadata=metadata, body=compiled, source_path=path)


def load_posts(content_dir: Path, collection: str = "notes") -> list[Post]:
    """Load every published post in a collection.

    Files are enumerated in sorted filename order so repeated builds see the
    same sequence. Drafts are skipped.

    Raises:
        ContentCompilationError: On the first post that fails to load, or
            when two posts share a slug.
    """
    collection_dir = content_dir / collection
    if not collection_dir.is_dir():
        logger.warning("No content directory at %s", collection_dir)
        return []

    paths = sorted(
        p for p in collection_dir.iterdir() if p.is_file() and p.suffix in POST_SUFFIXES
    )

    posts: list[Post] = []
    seen: dict[str, Path] = {}
    for path in paths:
        post = load_post(path)
        if post.metadata.draft:
            logger.info("Skipping draft %s", path.name)
            continue
        if post.slug in seen:
            raise ContentCompilationError(
                f"duplicate slug {post.slug!r} (also in {seen[post.slug].name})",
                path=path,
            )
        seen[post.slug] = path
        posts.append(post)

    logger.info("Loaded %d posts from %s", len(posts), collection_dir)
    return posts
