"""Post loading: front-matter parsing and Markdown compilation."""

from notesfeed.posts.loader import compile_body, load_post, load_posts, parse_front_matter
from notesfeed.posts.models import CompiledBody, Post, PostMetadata

__all__ = [
    "CompiledBody",
    "Post",
    "PostMetadata",
    "compile_body",
    "load_post",
    "load_posts",
    "parse_front_matter",
]
