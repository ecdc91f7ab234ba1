"""Unit tests for shortcode expansion.

These tests cover :mod:`book_pages.generator.shortcodes`: scanning
``{{#tag ...}}`` blocks against offsets in the original text, escaping with a
leading backslash, leaving malformed and unresolvable blocks untouched, and
assembling output whose ordering matches the input regardless of replacement
lengths.

Usage
-----
Run ``pytest tests/test_shortcodes.py -v``. File-inclusion tests write their
fixtures into pytest's ``tmp_path``.
"""

from __future__ import annotations

import typing as typ

import pytest
from loguru import logger

from book_pages.generator.shortcodes import (
    JSXGRAPH,
    MERMAID,
    NOMNOML,
    PLAYPEN,
    SHORTCODE_KINDS,
    render_shortcodes,
    scan_blocks,
    substitute,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path


@pytest.fixture
def captured_warnings() -> cabc.Iterator[list[str]]:
    """Collect loguru warning messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]),
        level="WARNING",
    )
    yield messages
    logger.remove(handler_id)


def test_mermaid_oneline_replacement() -> None:
    result = substitute("Some text with {{#mermaid part1}}...", MERMAID)
    assert result == 'Some text with \n<div class="mermaid">\npart1\n</div>\n...'


def test_nomnoml_multiline_body_is_kept_verbatim() -> None:
    result = substitute("Some text with {{#nomnoml part1\npart2\n}}...", NOMNOML)
    assert result == (
        "Some text with \n"
        '<script class="nomnoml-text" type="text/plain">\n'
        "part1\npart2\n\n"
        "</script>\n..."
    )


@pytest.mark.parametrize("kind", SHORTCODE_KINDS, ids=lambda kind: kind.tag)
def test_text_without_blocks_is_unchanged(kind: typ.Any) -> None:
    text = "# Title\n\nPlain {{ jinja }} text with {{#other block}} and }} braces.\n"
    assert substitute(text, kind) == text


def test_escaped_block_drops_backslash_only() -> None:
    result = substitute(r"Literal \{{#mermaid graph}} here", MERMAID)
    assert result == "Literal {{#mermaid graph}} here"


@pytest.mark.parametrize(
    "text",
    [
        "before {{#mermaid}} after",
        "before {{#mermaid   }} after",
        "before {{#mermaid\n\t}} after",
        "before {{#mermaidgraph}} after",
        "unterminated {{#mermaid graph",
    ],
)
def test_malformed_blocks_are_left_untouched(text: str) -> None:
    assert substitute(text, MERMAID) == text


def test_multiple_blocks_keep_input_order() -> None:
    text = "a {{#mermaid x}} b {{#mermaid a-much-longer-diagram-body}} c {{#mermaid y}} d"
    result = substitute(text, MERMAID)
    assert result == (
        'a \n<div class="mermaid">\nx\n</div>\n b '
        '\n<div class="mermaid">\na-much-longer-diagram-body\n</div>\n c '
        '\n<div class="mermaid">\ny\n</div>\n d'
    )


def test_adjacent_blocks_are_substituted_independently() -> None:
    result = substitute("{{#mermaid a}}{{#mermaid b}}", MERMAID)
    assert result == (
        '\n<div class="mermaid">\na\n</div>\n\n<div class="mermaid">\nb\n</div>\n'
    )


def test_escaped_and_plain_blocks_mix() -> None:
    result = substitute(r"\{{#mermaid a}} {{#mermaid b}}", MERMAID)
    assert result == '{{#mermaid a}} \n<div class="mermaid">\nb\n</div>\n'


def test_scan_blocks_reports_source_offsets() -> None:
    text = "xx {{#playpen main.rs editable}} yy \\{{#playpen lib.rs}}"
    blocks = list(scan_blocks(text, "playpen"))
    assert [(b.start_index, b.end_index) for b in blocks] == [
        (3, 32),
        (text.index("{{#playpen lib"), len(text)),
    ]
    first, second = blocks
    assert first.reference == "main.rs"
    assert first.editable is True
    assert first.escaped is False
    assert second.editable is False
    assert second.escaped is True


def test_editable_flag_requires_second_parameter() -> None:
    (block,) = scan_blocks("{{#playpen editable.rs}}", "playpen")
    assert block.editable is False
    (block,) = scan_blocks("{{#playpen code.rs not-editable}}", "playpen")
    assert block.editable is True


def test_playpen_includes_file_content(tmp_path: Path) -> None:
    (tmp_path / "main.rs").write_text('fn main() { println!("hi"); }\n', encoding="utf-8")
    result = substitute("Run:\n{{#playpen main.rs}}\nDone", PLAYPEN, tmp_path)
    assert result == (
        "Run:\n"
        '<pre class="playpen"><code class="language-rust">'
        "fn main() { println!(&#34;hi&#34;); }\n"
        "</code></pre>\nDone"
    )


def test_playpen_marks_editable_blocks(tmp_path: Path) -> None:
    (tmp_path / "lib.rs").write_text("pub fn f() {}", encoding="utf-8")
    result = substitute("{{#playpen lib.rs editable}}", PLAYPEN, tmp_path)
    assert result == (
        '<pre class="playpen"><code class="language-rust editable">'
        "pub fn f() {}</code></pre>"
    )


def test_playpen_escapes_included_source(tmp_path: Path) -> None:
    (tmp_path / "vec.rs").write_text("let v: Vec<i32> = f(&x);", encoding="utf-8")
    result = substitute("{{#playpen vec.rs}}", PLAYPEN, tmp_path)
    assert result == (
        '<pre class="playpen"><code class="language-rust">'
        "let v: Vec&lt;i32&gt; = f(&amp;x);</code></pre>"
    )


def test_inline_bodies_are_not_escaped() -> None:
    result = substitute("{{#mermaid A-->B & C}}", MERMAID)
    assert "A-->B & C" in result


def test_missing_file_leaves_only_that_block(
    tmp_path: Path, captured_warnings: list[str]
) -> None:
    (tmp_path / "found.rs").write_text("ok", encoding="utf-8")
    text = "{{#playpen missing.rs}} | {{#playpen found.rs}}"
    result = substitute(text, PLAYPEN, tmp_path)
    assert result == (
        '{{#playpen missing.rs}} | <pre class="playpen"><code class="language-rust">'
        "ok</code></pre>"
    )
    assert any("missing.rs" in message for message in captured_warnings)


def test_directory_reference_is_not_included(tmp_path: Path) -> None:
    (tmp_path / "examples").mkdir()
    text = "{{#playpen examples}}"
    assert substitute(text, PLAYPEN, tmp_path) == text


def test_render_shortcodes_applies_every_kind(tmp_path: Path) -> None:
    (tmp_path / "a.rs").write_text("let x = 1;", encoding="utf-8")
    text = (
        "{{#playpen a.rs}}\n"
        "{{#mermaid graph TD}}\n"
        "{{#jsxgraph var board = 1;}}\n"
        "{{#functionplot data}}\n"
    )
    result = render_shortcodes(text, tmp_path)
    assert '<code class="language-rust">let x = 1;</code>' in result
    assert '<div class="mermaid">\ngraph TD\n</div>' in result
    assert '<script type="text/javascript">\nvar board = 1;\n</script>' in result
    assert "<script>\nfunctionPlot(data);\n</script>" in result


def test_jsxgraph_body_keeps_braces() -> None:
    result = substitute("{{#jsxgraph JXG.JSXGraph.initBoard('box', {axis:true});}}", JSXGRAPH)
    assert "JXG.JSXGraph.initBoard('box', {axis:true" in result
