"""Render a book of markdown chapters into a static HTML site.

This package exposes the CLI entry points used by the ``book-pages`` console
script to build a book described by ``book.yaml`` and ``SUMMARY.md``.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from book_pages import main
>>> main()  # doctest: +SKIP
>>> from book_pages import app
>>> app(["build", "--config", "book.yaml"])  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
