"""Typed dataclasses describing the structure of a book.

A :class:`Book` is an ordered, read-only sequence of :data:`BookItem` values
plus the metadata the renderer needs. Order is significant: it is both the
navigation order of the sidebar and the concatenation order of the print page.

Examples
--------
>>> from pathlib import Path
>>> from book_pages.book import Book, Chapter, ChapterData, Spacer
>>> book = Book(
...     items=(Chapter("1.", ChapterData("Intro", Path("intro.md"))), Spacer()),
...     title="Guide",
...     description="",
...     src_dir=Path("src"),
...     dest_dir=Path("book"),
... )
>>> [data.name for data in book.chapter_data()]
['Intro']
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
from pathlib import Path


@dc.dataclass(frozen=True, slots=True)
class ChapterData:
    """Name and source path of a chapter.

    Attributes
    ----------
    name : str
        Label shown in the navigation.
    path : Path
        Markdown file relative to the source directory. An empty path marks a
        navigation-only placeholder that produces no page.
    """

    name: str
    path: Path = Path()

    @property
    def is_placeholder(self) -> bool:
        """Return ``True`` when the entry has no backing markdown file."""
        return self.path == Path()


@dc.dataclass(frozen=True, slots=True)
class Chapter:
    """Numbered chapter such as ``1.`` or ``2.3.``."""

    section: str
    data: ChapterData


@dc.dataclass(frozen=True, slots=True)
class Affix:
    """Front or back matter without a section number."""

    data: ChapterData


@dc.dataclass(frozen=True, slots=True)
class Spacer:
    """Visual separator in the navigation."""


BookItem = Chapter | Affix | Spacer


@dc.dataclass(frozen=True, slots=True)
class Book:
    """A loaded book ready for rendering."""

    items: tuple[BookItem, ...]
    title: str
    description: str
    src_dir: Path
    dest_dir: Path
    language: str = "en"
    livereload: str | None = None
    build_full: bool = False

    def iter(self) -> cabc.Iterator[BookItem]:
        """Yield every item in navigation order."""
        yield from self.items

    def chapter_data(self) -> cabc.Iterator[ChapterData]:
        """Yield the chapter data of every chapter and affix, skipping spacers."""
        for item in self.items:
            match item:
                case Chapter(data=data) | Affix(data=data):
                    yield data
                case _:
                    continue


__all__ = ["Affix", "Book", "BookItem", "Chapter", "ChapterData", "Spacer"]
