"""Rewrite root-relative references in rendered markup to absolute URLs."""

from __future__ import annotations

import re

# href="/#section" style in-page anchors
_ANCHOR_RE = re.compile(r"""(?<![\w-])href=(["'])/#""")
# href="/path" or src="/path", but not protocol-relative "//host"
_ROOT_RELATIVE_RE = re.compile(r"""(?<![\w-])(href|src)=(["'])/(?!/)""")


def absolutize_links(html: str, canonical_url: str, base_url: str) -> str:
    """Make anchor, hyperlink, and embedded-resource references absolute.

    ``/#x`` anchors resolve against the post's canonical URL; every other
    root-relative ``href``/``src`` is prefixed with the site base URL.
    """
    base_url = base_url.rstrip("/")
    html = _ANCHOR_RE.sub(lambda m: f"href={m.group(1)}{canonical_url}#", html)
    return _ROOT_RELATIVE_RE.sub(
        lambda m: f"{m.group(1)}={m.group(2)}{base_url}/", html
    )
