"""notesfeed - syndication feeds for a personal notes blog.

Loads authored posts, renders them to static HTML and emits RSS 2.0,
Atom 1.0 and JSON Feed documents at build time.
"""

__version__ = "0.1.0"
