"""High-level orchestration for rendering a book to static HTML.

This module walks a :class:`~book_pages.book.Book` in navigation order and, for
every chapter with a source file, expands shortcodes, converts the markdown,
renders the shared page template, and writes ``<path>.html`` below the
destination. The first rendered chapter is also published as ``index.html``
(minus any ``<base href=...>`` line), and all chapters are concatenated into a
single ``print.html`` rendered after the traversal. Theme files and bundled
assets are copied last.

Example
-------
>>> from pathlib import Path
>>> from book_pages.config import load_book_config
>>> from book_pages.summary_parser import load_book
>>> from book_pages.generator import BookRenderer
>>> book = load_book(load_book_config(Path("book.yaml")))  # doctest: +SKIP
>>> BookRenderer(book).render()  # doctest: +SKIP
[PosixPath('book/intro.html'), PosixPath('book/index.html'), ...]
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from jinja2 import DictLoader, Environment, TemplateError
from loguru import logger

from book_pages._constants import (
    BASE_TAG_MARKER,
    INDEX_FILENAME,
    PRINT_FILENAME,
    PRINT_PATH,
    TEMPLATE_NAME,
)
from book_pages.book import Book, ChapterData
from book_pages.theme import Theme, load_theme

from .assets import AssetBundler, bundled_archives
from .context import build_book_context, make_page, page_context, path_to_str
from .helpers import register_helpers
from .models import (
    ChapterEncodingError,
    ChapterIOError,
    PageContext,
    TemplateRenderError,
)
from .renderer import HtmlContentRenderer
from .shortcodes import render_shortcodes

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from jinja2 import Template


@dc.dataclass(frozen=True, slots=True)
class RenderState:
    """Accumulator threaded through the chapter traversal.

    Attributes
    ----------
    print_parts : tuple[str, ...]
        Converted HTML of every rendered chapter, in order.
    index_source : Path or None
        Page that was published as ``index.html``; ``None`` until the first
        chapter is rendered.
    written : tuple[Path, ...]
        Files written so far.
    """

    print_parts: tuple[str, ...] = ()
    index_source: Path | None = None
    written: tuple[Path, ...] = ()


class BookRenderer:
    """Render every chapter of a book into themed HTML files on disk."""

    def __init__(
        self,
        book: Book,
        *,
        theme: Theme | None = None,
        renderer: HtmlContentRenderer | None = None,
        archives: cabc.Mapping[str, Path] | None = None,
    ) -> None:
        """Initialize the renderer and register the page template.

        Parameters
        ----------
        book : Book
            Loaded book; read-only during rendering.
        theme : Theme, optional
            Theme files; defaults to the packaged theme.
        renderer : HtmlContentRenderer, optional
            Markdown converter; defaults to a ``monokai`` renderer.
        archives : Mapping[str, Path], optional
            Asset archives to unpack; defaults to the packaged archives.

        Raises
        ------
        TemplateRenderError
            If the theme template is not UTF-8 or fails to compile.
        """
        self.book = book
        self.theme = theme or load_theme()
        self.renderer = renderer or HtmlContentRenderer()
        self.archives = dict(bundled_archives() if archives is None else archives)
        self.template = self._register_template()

    def _register_template(self) -> Template:
        try:
            source = self.theme.index.decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = f"Theme template '{TEMPLATE_NAME}' is not valid UTF-8."
            raise TemplateRenderError(msg) from exc
        env = Environment(
            loader=DictLoader({TEMPLATE_NAME: source}),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        register_helpers(env)
        try:
            return env.get_template(TEMPLATE_NAME)
        except TemplateError as exc:
            msg = f"Could not register template '{TEMPLATE_NAME}': {exc}"
            raise TemplateRenderError(msg) from exc

    def render(self) -> list[Path]:
        """Render all pages and copy assets into the destination directory.

        Returns
        -------
        list[Path]
            Written pages in order: chapter pages (with ``index.html`` right
            after the first one) followed by ``print.html``.

        Raises
        ------
        RenderError
            Any failure aborts the whole render.
        """
        dest = self.book.dest_dir
        logger.debug("Rendering book '{}' into {}", self.book.title, dest)
        try:
            dest.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            msg = f"Could not create destination directory '{dest}': {exc}"
            raise ChapterIOError(msg) from exc

        book_context = build_book_context(
            self.book,
            pygments_css=self.renderer.stylesheet,
            archives=self.archives,
        )
        state = RenderState()
        for chapter in self.book.chapter_data():
            if chapter.is_placeholder:
                continue
            state = self._render_chapter(book_context, chapter, state)

        print_page = make_page(PRINT_PATH, "".join(state.print_parts))
        print_path = self._write_page(book_context, print_page, dest / PRINT_FILENAME)
        logger.info("Creating {}", print_path)

        AssetBundler(
            self.theme,
            dest,
            src=self.book.src_dir,
            build_full=self.book.build_full,
            archives=self.archives,
        ).run()
        return [*state.written, print_path]

    def _render_chapter(
        self,
        book_context: typ.Mapping[str, typ.Any],
        chapter: ChapterData,
        state: RenderState,
    ) -> RenderState:
        """Render one chapter and return the advanced traversal state."""
        source = self.book.src_dir / chapter.path
        content = self._read_chapter(source)
        content = render_shortcodes(content, source.parent)
        page_dir = path_to_str(chapter.path.parent)
        html = self.renderer.markdown(content, page_dir=page_dir)

        output = (self.book.dest_dir / chapter.path).with_suffix(".html")
        self._write_page(book_context, make_page(chapter.path, html), output)
        logger.info("Creating {}", output)
        written = (*state.written, output)

        index_source = state.index_source
        if index_source is None:
            index_path = self._write_index(output)
            written = (*written, index_path)
            index_source = output

        return RenderState(
            print_parts=(*state.print_parts, html),
            index_source=index_source,
            written=written,
        )

    @staticmethod
    def _read_chapter(source: Path) -> str:
        logger.debug("Opening chapter {}", source)
        try:
            return source.read_bytes().decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = f"Chapter '{source}' is not valid UTF-8."
            raise ChapterEncodingError(msg) from exc
        except OSError as exc:
            msg = f"Could not read chapter '{source}': {exc}"
            raise ChapterIOError(msg) from exc

    def _write_page(
        self,
        book_context: typ.Mapping[str, typ.Any],
        page: PageContext,
        output: Path,
    ) -> Path:
        """Render the template for ``page`` and write it to ``output``."""
        logger.debug("Rendering template for {}", page.path)
        try:
            rendered = self.template.render(page_context(book_context, page))
        except TemplateError as exc:
            msg = f"Could not render page '{page.path}': {exc}"
            raise TemplateRenderError(msg) from exc
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(rendered, encoding="utf-8")
        except OSError as exc:
            msg = f"Could not write '{output}': {exc}"
            raise ChapterIOError(msg) from exc
        return output

    def _write_index(self, chapter_output: Path) -> Path:
        """Publish ``chapter_output`` as the root index without base tags."""
        index_path = self.book.dest_dir / INDEX_FILENAME
        try:
            content = chapter_output.read_bytes().decode("utf-8")
            index_path.write_bytes(strip_base_tags(content).encode("utf-8"))
        except OSError as exc:
            msg = f"Could not create {INDEX_FILENAME} from '{chapter_output}': {exc}"
            raise ChapterIOError(msg) from exc
        logger.info("Creating {} from {}", INDEX_FILENAME, chapter_output)
        return index_path


def strip_base_tags(html: str) -> str:
    """Drop every line containing ``<base href=`` and rejoin with newlines."""
    return "\n".join(
        line for line in html.split("\n") if BASE_TAG_MARKER not in line
    )


__all__ = ["BookRenderer", "RenderState", "strip_base_tags"]
