"""Assemble the template data for book pages.

The book-level context (title, navigation, metadata) is built once per render
and exposed read-only; every page then gets a fresh mapping that layers its
own ``path``, ``content`` and ``path_to_root`` on top. No page can observe
another page's fields.

Example
-------
>>> from pathlib import Path
>>> path_to_root(Path("guide/setup/install.md"))
'../../'
"""

from __future__ import annotations

import typing as typ
from pathlib import Path, PurePath
from types import MappingProxyType

from book_pages._constants import FAVICON_FILENAME, SPACER_MARKER
from book_pages.book import Affix, Book, Chapter, Spacer

from .models import ChapterEncodingError, PageContext


def path_to_str(path: PurePath) -> str:
    """Return ``path`` in POSIX form, failing when it is not valid UTF-8.

    Raises
    ------
    ChapterEncodingError
        If the path holds undecodable bytes (surrogate escapes).
    """
    text = path.as_posix()
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        msg = f"Could not convert path {text!r} to a UTF-8 string."
        raise ChapterEncodingError(msg) from exc
    return text


def path_to_root(path: PurePath | str) -> str:
    """Return the relative path climbing from ``path``'s directory to the root."""
    parent = PurePath(path).parent
    depth = len([part for part in parent.parts if part not in ("", ".")])
    return "../" * depth


def build_book_context(
    book: Book,
    *,
    pygments_css: str = "",
    archives: typ.Iterable[str] = (),
) -> typ.Mapping[str, typ.Any]:
    """Return the read-only book-level template data.

    Parameters
    ----------
    book : Book
        Book being rendered.
    pygments_css : str, optional
        Stylesheet for server-side highlighted code blocks.
    archives : Iterable[str], optional
        Names of the asset archives unpacked into the destination.

    Returns
    -------
    Mapping[str, Any]
        ``language``, ``title``, ``description``, ``favicon``, ``chapters``,
        ``pygments_css``, ``archives`` and, when configured, ``livereload``.

    Raises
    ------
    ChapterEncodingError
        If any chapter path cannot be represented as a string.
    """
    data: dict[str, typ.Any] = {
        "language": book.language,
        "title": book.title,
        "description": book.description,
        "favicon": FAVICON_FILENAME,
        "pygments_css": pygments_css,
        "archives": tuple(archives),
    }
    if book.livereload is not None:
        data["livereload"] = book.livereload

    chapters: list[dict[str, str]] = []
    for item in book.iter():
        match item:
            case Chapter(section=section, data=chapter):
                chapters.append(
                    {
                        "section": section,
                        "name": chapter.name,
                        "path": _nav_path(chapter.path),
                    }
                )
            case Affix(data=chapter):
                chapters.append(
                    {"name": chapter.name, "path": _nav_path(chapter.path)}
                )
            case Spacer():
                chapters.append({"spacer": SPACER_MARKER})
    data["chapters"] = tuple(chapters)
    return MappingProxyType(data)


def _nav_path(path: Path) -> str:
    """Return the navigation path string, empty for placeholders."""
    if path == Path():
        return ""
    return path_to_str(path)


def make_page(path: PurePath | str, content: str) -> PageContext:
    """Build the per-page fields for the page rendered from ``path``."""
    text = path if isinstance(path, str) else path_to_str(path)
    return PageContext(path=text, content=content, path_to_root=path_to_root(text))


def page_context(
    book_context: typ.Mapping[str, typ.Any], page: PageContext
) -> dict[str, typ.Any]:
    """Combine book-level data with one page's fields into a fresh mapping."""
    return {
        **book_context,
        "path": page.path,
        "content": page.content,
        "path_to_root": page.path_to_root,
    }


__all__ = [
    "build_book_context",
    "make_page",
    "page_context",
    "path_to_root",
    "path_to_str",
]
