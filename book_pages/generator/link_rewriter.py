"""Helpers for rewriting relative chapter links and images for rendered pages.

Every page carries ``<base href>`` pointing at the book root, so relative URLs
in a chapter resolve from the root rather than from the chapter's directory.
The treeprocessor here anchors relative ``a[href]`` and ``img[src]`` targets at
the chapter's directory and swaps ``.md`` link targets for ``.html``.
"""

from __future__ import annotations

import posixpath
import typing as typ
from urllib.parse import SplitResult, urlsplit, urlunsplit

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

MARKDOWN_SUFFIX = ".md"
HTML_SUFFIX = ".html"


class MarkdownLinkExtension(Extension):
    """Point links between chapters at the generated ``.html`` pages.

    Chapters link to each other by their source names (``./setup.md``,
    ``../guide/usage.md#flags``). Insert this extension into a
    ``markdown.Markdown`` instance so those links keep working once every
    chapter has been rendered next to its source path with an ``.html``
    extension. ``page_dir`` is the chapter's directory relative to the book
    root; relative targets are rebased onto it.
    """

    def __init__(self, **kwargs: typ.Any) -> None:
        self.config = {
            "page_dir": ["", "Directory of the rendered chapter, relative to the root"],
        }
        super().__init__(**kwargs)

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the markdown-link treeprocessor on the Markdown instance."""
        md.treeprocessors.register(
            MarkdownLinkTreeprocessor(md, page_dir=self.getConfig("page_dir")),
            "book_markdown_links",
            15,
        )


class MarkdownLinkTreeprocessor(Treeprocessor):
    """Rewrite relative anchors and images in the parsed markdown tree."""

    def __init__(self, md: Markdown | None = None, *, page_dir: str = "") -> None:
        super().__init__(md)
        self.page_dir = page_dir

    def run(self, root: Element) -> Element:
        """Rewrite relative chapter links and image sources in place."""
        for element in root.iter():
            if element.tag == "a":
                rewritten = rewrite_markdown_link(element.get("href"), self.page_dir)
                if rewritten:
                    element.set("href", rewritten)
            elif element.tag == "img":
                rebased = rebase_link(element.get("src"), self.page_dir)
                if rebased:
                    element.set("src", rebased)
        return root


def _relative_target(target: str | None) -> SplitResult | None:
    """Split ``target`` when it is a relative URL with a path component."""
    if not target or target.startswith(("#", "//")) or "://" in target:
        return None
    parsed = urlsplit(target)
    if parsed.scheme or parsed.netloc or not parsed.path:
        return None
    if parsed.path.startswith("/"):
        return None
    return parsed


def _anchor(path: str, page_dir: str) -> str:
    """Join ``path`` onto ``page_dir`` and normalise the result."""
    if page_dir in ("", "."):
        return path
    joined = posixpath.normpath(posixpath.join(page_dir, path))
    if path.endswith("/") and not joined.endswith("/"):
        joined += "/"
    return joined


def _resolve(target: str | None, page_dir: str, *, to_html: bool) -> str | None:
    parsed = _relative_target(target)
    if parsed is None:
        return None
    path = parsed.path
    if to_html:
        root, ext = posixpath.splitext(path)
        if ext.lower() == MARKDOWN_SUFFIX and root:
            path = root + HTML_SUFFIX
    path = _anchor(path, page_dir)
    rewritten = urlunsplit(("", "", path, parsed.query, parsed.fragment))
    return None if rewritten == target else rewritten


def rewrite_markdown_link(target: str | None, page_dir: str = "") -> str | None:
    """Return the root-relative form of a link target, or None when unchanged.

    ``.md`` paths become ``.html``; relative paths are anchored at ``page_dir``.

    Examples
    --------
    >>> rewrite_markdown_link("setup.md#install")
    'setup.html#install'
    >>> rewrite_markdown_link("../intro.md", "guide/setup")
    'guide/intro.html'
    >>> rewrite_markdown_link("https://example.com/README.md") is None
    True
    """
    return _resolve(target, page_dir, to_html=True)


def rebase_link(target: str | None, page_dir: str = "") -> str | None:
    """Return a relative asset URL anchored at ``page_dir``, or None when unchanged.

    Examples
    --------
    >>> rebase_link("pic.png", "guide")
    'guide/pic.png'
    """
    return _resolve(target, page_dir, to_html=False)


__all__ = [
    "MarkdownLinkExtension",
    "MarkdownLinkTreeprocessor",
    "rebase_link",
    "rewrite_markdown_link",
]
