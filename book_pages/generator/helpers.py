"""Template helpers for chapter navigation.

The page template calls ``toc()``, ``previous()`` and ``next()``; each reads the
``chapters`` and ``path`` values of the page being rendered.

Example
-------
A minimal template using every helper::

    <nav>{{ toc() }}</nav>
    {% set prev = previous() %}
    {% if prev %}<a href="{{ prev.link }}">{{ prev.name }}</a>{% endif %}
"""

from __future__ import annotations

import posixpath
import typing as typ

from jinja2 import pass_context
from markupsafe import Markup, escape

if typ.TYPE_CHECKING:
    from jinja2 import Environment
    from jinja2.runtime import Context


def html_link(path: str) -> str:
    """Return the root-relative link of the page rendered from ``path``.

    Pages carry a ``<base href>`` pointing at the book root, so links stay
    root-relative regardless of the page depth.
    """
    root, _ext = posixpath.splitext(path)
    return f"{root}.html"


def _section_depth(section: str | None) -> int:
    if not section:
        return 1
    return max(section.count("."), 1)


@pass_context
def toc(context: Context) -> Markup:
    """Render the sidebar table of contents for the current page."""
    current = context.get("path")
    lines = ['<ul class="chapter">']
    depth = 1
    for entry in context.get("chapters", ()):
        if "spacer" in entry:
            lines.append('<li class="spacer"></li>')
            continue
        level = _section_depth(entry.get("section"))
        while level > depth:
            lines.append('<li><ul class="section">')
            depth += 1
        while level < depth:
            lines.append("</ul></li>")
            depth -= 1

        label = escape(entry["name"])
        if entry.get("section"):
            label = Markup("<strong>{}</strong> {}").format(entry["section"], label)
        path = entry.get("path")
        if path:
            active = ' class="active"' if path == current else ""
            href = escape(html_link(path))
            lines.append(f'<li><a href="{href}"{active}>{label}</a></li>')
        else:
            lines.append(f"<li>{label}</li>")
    lines.extend("</ul></li>" for _ in range(depth - 1))
    lines.append("</ul>")
    return Markup("\n".join(lines))


def _neighbour(context: Context, offset: int) -> dict[str, str] | None:
    """Return the chapter ``offset`` steps away from the current one."""
    current = context.get("path")
    pages = [entry for entry in context.get("chapters", ()) if entry.get("path")]
    for index, entry in enumerate(pages):
        if entry["path"] != current:
            continue
        target = index + offset
        if 0 <= target < len(pages):
            neighbour = pages[target]
            return {
                "name": neighbour["name"],
                "link": html_link(neighbour["path"]),
            }
        return None
    return None


@pass_context
def previous(context: Context) -> dict[str, str] | None:
    """Return the chapter before the current page, if any."""
    return _neighbour(context, -1)


@pass_context
def next_chapter(context: Context) -> dict[str, str] | None:
    """Return the chapter after the current page, if any."""
    return _neighbour(context, 1)


def register_helpers(env: Environment) -> None:
    """Expose the navigation helpers to templates rendered by ``env``."""
    env.globals.update(toc=toc, previous=previous, next=next_chapter)


__all__ = ["html_link", "next_chapter", "previous", "register_helpers", "toc"]
