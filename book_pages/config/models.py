"""Typed dataclasses describing book configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path


class BookConfigError(ValueError):
    """Raised when the book configuration or summary is invalid or incomplete."""


@dc.dataclass(slots=True)
class BookConfig:
    """A fully resolved ``book.yaml`` with paths anchored at the book root.

    Attributes
    ----------
    root : Path
        Directory holding ``book.yaml``.
    title : str
        Book title; defaults to the root directory name.
    description : str
        Short description used in the page ``<meta>`` tag.
    language : str
        ``lang`` attribute of generated pages.
    src_dir : Path
        Directory holding ``SUMMARY.md`` and the chapter sources.
    dest_dir : Path
        Directory receiving the rendered site.
    theme_dir : Path or None
        Optional directory whose files override the packaged theme.
    pygments_style : str
        Pygments style used for server-side highlighting.
    livereload : str or None
        Optional livereload script URL injected into every page.
    build_full : bool
        Force re-extraction of bundled asset archives.
    """

    root: Path
    title: str
    description: str = ""
    language: str = "en"
    src_dir: Path = Path("src")
    dest_dir: Path = Path("book")
    theme_dir: Path | None = None
    pygments_style: str = "monokai"
    livereload: str | None = None
    build_full: bool = False


__all__ = ["BookConfig", "BookConfigError"]
