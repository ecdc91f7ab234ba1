"""Cyclopts CLI entrypoint for rendering books to static HTML.

The ``book-pages`` console script defined here renders a book described by
``book.yaml`` and ``src/SUMMARY.md`` into a directory of HTML pages, and can
scaffold a new book. Typical usage involves running ``book-pages init`` once
and ``book-pages build`` locally or in CI after each edit.

Examples
--------
Build the book in the current directory:

>>> from book_pages.cli import main
>>> main()  # doctest: +SKIP

Rebuild into a custom directory, re-extracting bundled assets:

>>> from book_pages.cli import app
>>> app(["build", "--dest", "dist", "--full"])  # doctest: +SKIP
"""

from __future__ import annotations

import io
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter
from loguru import logger
from ruamel.yaml import YAML

from ._constants import SUMMARY_FILENAME
from .config import default_theme_dir, load_book_config
from .generator import BookRenderer, HtmlContentRenderer
from .summary_parser import load_book
from .theme import load_theme

DEFAULT_CONFIG = Path("book.yaml")
LOG_FORMAT = "<level>{level: <8}</level> {message}"

app = App(name="book-pages", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    """Send log records to stderr, at DEBUG when ``verbose`` is set."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO", format=LOG_FORMAT)


@app.command(help="Render the book into static HTML pages.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to book config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    dest: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_DEST"),
    ] = None,
    full: typ.Annotated[
        bool,
        Parameter(help="Re-extract bundled assets even when present"),
    ] = False,
    verbose: typ.Annotated[bool, Parameter(help="Log debug output")] = False,
) -> None:
    """Render every chapter, the index page, the print page, and assets.

    Parameters
    ----------
    config : Path, optional
        Path to ``book.yaml`` (overridable via ``INPUT_CONFIG``).
    dest : Path or None, optional
        Output directory overriding the configured ``dest``.
    full : bool, optional
        Force re-extraction of bundled asset archives.
    verbose : bool, optional
        Emit debug logging.

    Returns
    -------
    None
        Writes the rendered site and prints each generated page path.

    Raises
    ------
    RenderError
        If any chapter, template, or asset fails; nothing is reported as
        partially successful.
    """
    _configure_logging(verbose=verbose)
    book_config = load_book_config(config)
    if dest is not None:
        book_config.dest_dir = dest
    book = load_book(book_config, build_full=True if full else None)
    theme = load_theme(default_theme_dir(book_config))
    renderer = HtmlContentRenderer(book_config.pygments_style)
    written = BookRenderer(book, theme=theme, renderer=renderer).render()
    for path in written:
        print(f"wrote {_format_path(path)}")


@app.command(help="Create book.yaml and a starter SUMMARY.md.")
def init(
    *,
    root: typ.Annotated[Path, Parameter(help="Book root directory")] = Path(),
    title: typ.Annotated[str | None, Parameter(help="Book title")] = None,
) -> None:
    """Scaffold a book without overwriting existing files.

    Parameters
    ----------
    root : Path, optional
        Directory receiving ``book.yaml`` and ``src/``; defaults to the
        working directory.
    title : str or None, optional
        Title written to ``book.yaml``; defaults to the directory name.
    """
    resolved = root.resolve()
    book_title = title or resolved.name
    config_text = io.StringIO()
    YAML().dump(
        {"title": book_title, "description": "", "src": "src", "dest": "book"},
        config_text,
    )
    files = {
        resolved / DEFAULT_CONFIG: config_text.getvalue(),
        resolved / "src" / SUMMARY_FILENAME: (
            "# Summary\n\n- [Chapter 1](chapter_1.md)\n"
        ),
        resolved / "src" / "chapter_1.md": "# Chapter 1\n",
    }
    for path, content in files.items():
        if path.exists():
            print(f"kept {_format_path(path)}")
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        print(f"wrote {_format_path(path)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``book-pages`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
