"""Shared dataclasses and errors used by the book rendering pipeline."""

from __future__ import annotations

import dataclasses as dc
import enum


class RenderError(RuntimeError):
    """Raised when rendering a book fails; no partial output is reported."""


class ChapterIOError(RenderError):
    """A chapter could not be read or a destination file could not be written."""


class ChapterEncodingError(RenderError):
    """Chapter bytes or a chapter path are not representable as UTF-8."""


class TemplateRenderError(RenderError):
    """The page template failed to compile or render."""


class ArchiveError(RenderError):
    """A bundled asset archive is malformed or unreadable."""


class ShortcodeMode(enum.Enum):
    """How the first parameter of a shortcode is resolved."""

    INLINE = "inline"
    FILE = "file"


@dc.dataclass(frozen=True, slots=True)
class ShortcodeKind:
    """A supported ``{{#tag ...}}`` shortcode and its HTML wrapper.

    Attributes
    ----------
    tag : str
        Name following ``{{#``.
    mode : ShortcodeMode
        ``INLINE`` blocks embed their body; ``FILE`` blocks embed the content
        of the file named by their first parameter.
    template : str
        ``str.format`` template receiving ``body`` and ``editable``.
    """

    tag: str
    mode: ShortcodeMode
    template: str

    @property
    def opening(self) -> str:
        """Return the opening token, e.g. ``{{#mermaid``."""
        return "{{#" + self.tag


@dc.dataclass(frozen=True, slots=True)
class ShortcodeBlock:
    """One shortcode occurrence found in a chapter.

    Attributes
    ----------
    start_index : int
        Offset of ``{{#`` in the original text.
    end_index : int
        Offset just past the closing ``}}`` in the original text.
    body : str
        Block body with leading whitespace removed.
    editable : bool
        Second parameter contains ``editable``.
    escaped : bool
        The block is preceded by a backslash and must be emitted literally.
    """

    start_index: int
    end_index: int
    body: str
    editable: bool = False
    escaped: bool = False

    @property
    def reference(self) -> str:
        """Return the first whitespace-separated parameter of the block."""
        return self.body.split()[0]


@dc.dataclass(frozen=True, slots=True)
class PageContext:
    """Per-page template fields, rebuilt for every rendered page."""

    path: str
    content: str
    path_to_root: str


__all__ = [
    "ArchiveError",
    "ChapterEncodingError",
    "ChapterIOError",
    "PageContext",
    "RenderError",
    "ShortcodeBlock",
    "ShortcodeKind",
    "ShortcodeMode",
    "TemplateRenderError",
]
