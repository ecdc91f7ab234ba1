"""Theme files shared by every rendered page.

A :class:`Theme` bundles the page template and the static files copied into the
destination root. Each file is taken from an optional override directory when
present there, otherwise from the defaults packaged in ``book_pages/default_theme``.
"""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from loguru import logger

DEFAULT_THEME_DIR = Path(__file__).resolve().parent / "default_theme"
ARCHIVES_DIRNAME = "archives"

# Theme attribute -> source filename inside a theme directory.
THEME_SOURCES = {
    "index": "index.jinja",
    "css": "book.css",
    "js": "book.js",
    "favicon": "favicon.png",
    "jquery": "jquery.js",
    "highlight_css": "highlight.css",
    "tomorrow_night_css": "tomorrow-night.css",
    "highlight_js": "highlight.js",
}


@dc.dataclass(frozen=True, slots=True)
class Theme:
    """Immutable bundle of theme file contents."""

    index: bytes
    css: bytes
    js: bytes
    favicon: bytes
    jquery: bytes
    highlight_css: bytes
    tomorrow_night_css: bytes
    highlight_js: bytes
    override_dir: Path | None = None


def load_theme(override_dir: Path | None = None) -> Theme:
    """Read every theme file, preferring ``override_dir`` over the defaults.

    Parameters
    ----------
    override_dir : Path, optional
        Directory holding replacement theme files. Files it lacks fall back to
        the packaged defaults.

    Returns
    -------
    Theme
        Loaded file contents.

    Raises
    ------
    OSError
        If a default theme file cannot be read.
    """
    contents: dict[str, bytes] = {}
    for attr, filename in THEME_SOURCES.items():
        source = DEFAULT_THEME_DIR / filename
        if override_dir is not None and (override_dir / filename).is_file():
            source = override_dir / filename
            logger.debug("Using theme override {}", source)
        contents[attr] = source.read_bytes()
    return Theme(**contents, override_dir=override_dir)


def bundled_archive_dir() -> Path:
    """Return the directory holding the packaged asset archives."""
    return DEFAULT_THEME_DIR / ARCHIVES_DIRNAME


__all__ = ["DEFAULT_THEME_DIR", "THEME_SOURCES", "Theme", "bundled_archive_dir", "load_theme"]
