r"""Parse ``SUMMARY.md`` into the ordered items of a book.

The summary lists the book's chapters as markdown links. Links outside the
bulleted list become affixes (front or back matter), list items become
numbered chapters nested by indentation, and ``---`` lines become spacers.

Example
-------
>>> from book_pages.summary_parser import parse_summary
>>> items = parse_summary("[Preface](preface.md)\n- [Intro](intro.md)\n")
>>> [type(item).__name__ for item in items]
['Affix', 'Chapter']
"""

from __future__ import annotations

import re
from pathlib import Path

from .book import Affix, Book, BookItem, Chapter, ChapterData, Spacer
from .config import BookConfig, BookConfigError
from ._constants import SUMMARY_FILENAME

AFFIX_PATTERN = re.compile(r"^\[(?P<name>[^\]]+)\]\((?P<path>[^)]*)\)\s*$")
ITEM_PATTERN = re.compile(
    r"^(?P<indent>[ \t]*)[-*+]\s+\[(?P<name>[^\]]+)\]\((?P<path>[^)]*)\)\s*$"
)
SPACER_PATTERN = re.compile(r"^\s*-{3,}\s*$")
INDENT_WIDTH = 4


def _chapter_data(name: str, target: str) -> ChapterData:
    """Build chapter data, mapping an empty link target to a placeholder."""
    target = target.strip()
    return ChapterData(name=name.strip(), path=Path(target) if target else Path())


def _indent_level(indent: str, line_number: int) -> int:
    width = len(indent.expandtabs(INDENT_WIDTH))
    if width % INDENT_WIDTH:
        msg = (
            f"{SUMMARY_FILENAME}:{line_number}: indentation must be a multiple "
            f"of {INDENT_WIDTH} spaces."
        )
        raise BookConfigError(msg)
    return width // INDENT_WIDTH


def _next_section(counters: list[int], level: int, line_number: int) -> str:
    """Advance the dotted section counters for an item at ``level``."""
    if level > len(counters):
        msg = (
            f"{SUMMARY_FILENAME}:{line_number}: list item is nested more than "
            "one level below its parent."
        )
        raise BookConfigError(msg)
    del counters[level + 1 :]
    if len(counters) == level:
        counters.append(0)
    counters[level] += 1
    return "".join(f"{number}." for number in counters)


def parse_summary(text: str) -> list[BookItem]:
    """Split summary markdown into ordered book items.

    Parameters
    ----------
    text : str
        Content of ``SUMMARY.md``.

    Returns
    -------
    list[BookItem]
        Affixes, numbered chapters and spacers in document order. Headings,
        blank lines and free text are ignored.

    Raises
    ------
    BookConfigError
        If a list item is indented inconsistently or skips a nesting level.
    """
    items: list[BookItem] = []
    counters: list[int] = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        if SPACER_PATTERN.match(line):
            items.append(Spacer())
            continue
        if match := ITEM_PATTERN.match(line):
            level = _indent_level(match.group("indent"), line_number)
            section = _next_section(counters, level, line_number)
            data = _chapter_data(match.group("name"), match.group("path"))
            items.append(Chapter(section=section, data=data))
            continue
        if match := AFFIX_PATTERN.match(line.strip()):
            items.append(Affix(_chapter_data(match.group("name"), match.group("path"))))
    return items


def load_book(config: BookConfig, *, build_full: bool | None = None) -> Book:
    """Read ``SUMMARY.md`` from the source directory and assemble a :class:`Book`.

    Parameters
    ----------
    config : BookConfig
        Resolved book configuration.
    build_full : bool, optional
        Override for ``config.build_full``.

    Raises
    ------
    FileNotFoundError
        If the source directory has no ``SUMMARY.md``.
    """
    summary_path = config.src_dir / SUMMARY_FILENAME
    if not summary_path.is_file():
        msg = f"Summary file '{summary_path}' not found."
        raise FileNotFoundError(msg)
    items = parse_summary(summary_path.read_text(encoding="utf-8"))
    return Book(
        items=tuple(items),
        title=config.title,
        description=config.description,
        src_dir=config.src_dir,
        dest_dir=config.dest_dir,
        language=config.language,
        livereload=config.livereload,
        build_full=config.build_full if build_full is None else build_full,
    )


__all__ = ["load_book", "parse_summary"]
