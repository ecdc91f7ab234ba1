"""Common literal values used across book_pages.

These constants keep output filenames and template keys centralized so the
renderer, the asset bundler, templates, and tests can import the same values
without drifting. Intended for internal use within the book_pages package.

Examples
--------
>>> from book_pages import _constants
>>> _constants.PRINT_PATH
'print.md'
>>> "favicon.png" in _constants.THEME_OUTPUTS.values()
True
"""

INDEX_FILENAME = "index.html"
PRINT_PATH = "print.md"
PRINT_FILENAME = "print.html"
SUMMARY_FILENAME = "SUMMARY.md"
TEMPLATE_NAME = "index.jinja"
BASE_TAG_MARKER = "<base href="
SPACER_MARKER = "_spacer_"
FAVICON_FILENAME = "favicon.png"
MARKDOWN_EXTENSIONS = ("md",)

# Theme attribute -> filename written to the destination root.
THEME_OUTPUTS = {
    "js": "book.js",
    "css": "book.css",
    "favicon": FAVICON_FILENAME,
    "jquery": "jquery.js",
    "highlight_css": "highlight.css",
    "tomorrow_night_css": "tomorrow-night.css",
    "highlight_js": "highlight.js",
}
