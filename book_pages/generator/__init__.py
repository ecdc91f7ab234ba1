"""Utilities for expanding, rendering, and writing book pages."""

from .assets import AssetBundler
from .link_rewriter import MarkdownLinkExtension
from .models import RenderError, ShortcodeBlock, ShortcodeKind
from .page_generator import BookRenderer
from .renderer import HtmlContentRenderer
from .shortcodes import render_shortcodes, substitute

__all__ = [
    "AssetBundler",
    "BookRenderer",
    "HtmlContentRenderer",
    "MarkdownLinkExtension",
    "RenderError",
    "ShortcodeBlock",
    "ShortcodeKind",
    "render_shortcodes",
    "substitute",
]
