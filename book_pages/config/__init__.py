"""Load and validate ``book.yaml`` for book rendering.

This subpackage parses the book's ``book.yaml`` file, applies defaults, anchors
relative directories at the file's location, and produces a
:class:`BookConfig` that the summary parser and the renderer consume. The
primary entry point is :func:`load_book_config`.

Examples
--------
>>> from pathlib import Path
>>> from book_pages.config import load_book_config
>>> config = load_book_config(Path("book.yaml"))  # doctest: +SKIP
>>> config.dest_dir.name  # doctest: +SKIP
'book'
"""

from .loader import default_theme_dir, load_book_config
from .models import BookConfig, BookConfigError

__all__ = [
    "BookConfig",
    "BookConfigError",
    "default_theme_dir",
    "load_book_config",
]
