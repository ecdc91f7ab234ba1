r"""Expand ``{{#tag ...}}`` shortcodes in chapter markdown.

Chapters may embed diagrams and scripts with shortcodes such as
``{{#mermaid graph TD; A-->B}}`` or include source files with
``{{#playpen example.rs editable}}``. This module scans chapter text for each
supported tag, producing :class:`ShortcodeBlock` records against offsets in the
original text, then assembles the output with a single cursor so replacements
of any length never shift later blocks.

A backslash before ``{{`` escapes a block: ``\{{#mermaid x}}`` renders as the
literal ``{{#mermaid x}}``. Blocks without a closing ``}}`` or with an empty
body are left untouched, as are file blocks whose file is missing.

Example
-------
>>> from book_pages.generator.shortcodes import MERMAID, substitute
>>> substitute("Some text with {{#mermaid part1}}...", MERMAID)
'Some text with \n<div class="mermaid">\npart1\n</div>\n...'
"""

from __future__ import annotations

import collections.abc as cabc
from pathlib import Path

from loguru import logger
from markupsafe import escape

from .models import ShortcodeBlock, ShortcodeKind, ShortcodeMode

CLOSING_TOKEN = "}}"
ESCAPE_CHAR = "\\"

PLAYPEN = ShortcodeKind(
    tag="playpen",
    mode=ShortcodeMode.FILE,
    template='<pre class="playpen"><code class="language-rust{editable}">{body}</code></pre>',
)
MERMAID = ShortcodeKind(
    tag="mermaid",
    mode=ShortcodeMode.INLINE,
    template='\n<div class="mermaid">\n{body}\n</div>\n',
)
NOMNOML = ShortcodeKind(
    tag="nomnoml",
    mode=ShortcodeMode.INLINE,
    template='\n<script class="nomnoml-text" type="text/plain">\n{body}\n</script>\n',
)
RAILROAD = ShortcodeKind(
    tag="railroad",
    mode=ShortcodeMode.INLINE,
    template='\n<script type="text/javascript">\n{body}\n</script>\n',
)
FUNCTIONPLOT = ShortcodeKind(
    tag="functionplot",
    mode=ShortcodeMode.INLINE,
    template="\n<script>\nfunctionPlot({body});\n</script>\n",
)
JSXGRAPH = ShortcodeKind(
    tag="jsxgraph",
    mode=ShortcodeMode.INLINE,
    template='\n<script type="text/javascript">\n{body}\n</script>\n',
)

# File inclusion first, then diagram kinds, then generic script kinds.
SHORTCODE_KINDS: tuple[ShortcodeKind, ...] = (
    PLAYPEN,
    MERMAID,
    NOMNOML,
    RAILROAD,
    FUNCTIONPLOT,
    JSXGRAPH,
)


def scan_blocks(text: str, tag: str) -> cabc.Iterator[ShortcodeBlock]:
    """Yield every well-formed ``{{#tag ...}}`` block in ``text``.

    Parameters
    ----------
    text : str
        Chapter markdown.
    tag : str
        Shortcode name to look for.

    Yields
    ------
    ShortcodeBlock
        Blocks in ascending ``start_index`` order. Candidates without a
        closing token, without whitespace after the tag, or with an empty
        body are not yielded.
    """
    opening = "{{#" + tag
    start = text.find(opening)
    while start != -1:
        block = _read_block(text, start, len(opening))
        if block is not None:
            yield block
        start = text.find(opening, start + len(opening))


def _read_block(text: str, start: int, opening_length: int) -> ShortcodeBlock | None:
    body_start = start + opening_length
    close = text.find(CLOSING_TOKEN, body_start)
    if close == -1:
        return None
    body = text[body_start:close]
    if not body.strip() or not body[0].isspace():
        return None
    content = body.lstrip()
    params = content.split()
    return ShortcodeBlock(
        start_index=start,
        end_index=close + len(CLOSING_TOKEN),
        body=content,
        editable=len(params) > 1 and "editable" in params[1],
        escaped=start > 0 and text[start - 1] == ESCAPE_CHAR,
    )


def substitute(
    text: str, kind: ShortcodeKind, base_dir: Path | None = None
) -> str:
    """Replace every ``kind`` block in ``text`` with its HTML.

    Parameters
    ----------
    text : str
        Chapter markdown.
    kind : ShortcodeKind
        Shortcode to expand.
    base_dir : Path, optional
        Directory that file references are resolved against; defaults to the
        working directory.

    Returns
    -------
    str
        The rewritten text. Text outside accepted blocks is copied verbatim and
        blocks appear in input order.
    """
    if kind.opening not in text:
        return text
    pieces: list[str] = []
    cursor = 0
    for block in scan_blocks(text, kind.tag):
        if block.start_index < cursor:
            continue
        if block.escaped:
            pieces.append(text[cursor : block.start_index - 1])
            pieces.append(text[block.start_index : block.end_index])
            cursor = block.end_index
            continue
        replacement = _render_block(kind, block, base_dir)
        if replacement is None:
            continue
        pieces.append(text[cursor : block.start_index])
        pieces.append(replacement)
        cursor = block.end_index
    pieces.append(text[cursor:])
    return "".join(pieces)


def _render_block(
    kind: ShortcodeKind, block: ShortcodeBlock, base_dir: Path | None
) -> str | None:
    """Return the replacement HTML for ``block`` or None when it cannot be resolved."""
    if kind.mode is ShortcodeMode.INLINE:
        body = block.body
    else:
        included = _read_reference(kind, block, base_dir or Path())
        if included is None:
            return None
        body = str(escape(included))
    editable = " editable" if block.editable else ""
    return kind.template.format(body=body, editable=editable)


def _read_reference(
    kind: ShortcodeKind, block: ShortcodeBlock, base_dir: Path
) -> str | None:
    path = base_dir / block.reference
    if not path.is_file():
        logger.warning("No file exists for {{{{#{}}}}}: {}", kind.tag, path)
        return None
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not read {{{{#{}}}}} file {}: {}", kind.tag, path, exc)
        return None


def render_shortcodes(
    text: str,
    base_dir: Path | None = None,
    kinds: cabc.Iterable[ShortcodeKind] = SHORTCODE_KINDS,
) -> str:
    """Expand every supported shortcode kind in its fixed order."""
    for kind in kinds:
        text = substitute(text, kind, base_dir)
    return text


__all__ = [
    "FUNCTIONPLOT",
    "JSXGRAPH",
    "MERMAID",
    "NOMNOML",
    "PLAYPEN",
    "RAILROAD",
    "SHORTCODE_KINDS",
    "render_shortcodes",
    "scan_blocks",
    "substitute",
]
