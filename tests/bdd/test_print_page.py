"""Behaviour tests for the printable single-page book."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, scenarios, then, when

from book_pages.config import BookConfig
from book_pages.generator import BookRenderer
from book_pages.summary_parser import load_book

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "print_page.feature"
scenarios(FEATURE_FILE)

CHAPTERS = {
    "one.md": "# One\n\nFirst chapter.\n",
    "two.md": "# Two\n\n{{#mermaid graph TD; A-->B}}\n\n\\{{#mermaid literal}}\n",
    "three.md": "# Three\n\nLast chapter.\n",
}


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _soup(path: Path) -> BeautifulSoup:
    return BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")


@given("a book with three chapters and a diagram")
def given_book(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    """Write three chapters; the second holds a diagram and an escaped block."""
    src = tmp_path / "src"
    src.mkdir()
    (src / "SUMMARY.md").write_text(
        "- [One](one.md)\n- [Two](two.md)\n---\n- [Three](three.md)\n",
        encoding="utf-8",
    )
    for name, content in CHAPTERS.items():
        (src / name).write_text(content, encoding="utf-8")
    config = BookConfig(
        root=tmp_path, title="Print Book", src_dir=src, dest_dir=tmp_path / "out"
    )
    scenario_state["book"] = load_book(config)
    scenario_state["dest"] = config.dest_dir


@when("I render the book")
def when_render(scenario_state: dict[str, object]) -> None:
    """Render the scenario book without bundled archives."""
    book = scenario_state["book"]
    BookRenderer(book, archives={}).render()  # type: ignore[arg-type]


@then("print.html contains the chapter headings in summary order")
def then_headings(scenario_state: dict[str, object]) -> None:
    """Check chapter headings and the diagram appear in the print page."""
    dest = typ.cast("Path", scenario_state["dest"])
    soup = _soup(dest / "print.html")
    assert [h1.get_text() for h1 in soup.select("main h1")] == ["One", "Two", "Three"]
    assert soup.select_one("main div.mermaid") is not None


@then("print.html opens the print dialog")
def then_print_dialog(scenario_state: dict[str, object]) -> None:
    """Check the auto-print script is only emitted on the print page."""
    dest = typ.cast("Path", scenario_state["dest"])
    assert "window.print()" in (dest / "print.html").read_text(encoding="utf-8")
    assert "window.print()" not in (dest / "one.html").read_text(encoding="utf-8")


@then("the escaped shortcode is shown literally on its chapter page")
def then_escaped(scenario_state: dict[str, object]) -> None:
    """Check the escaped block renders as text rather than a diagram."""
    dest = typ.cast("Path", scenario_state["dest"])
    main = _soup(dest / "two.html").select_one("main")
    assert "{{#mermaid literal}}" in main.get_text()
    assert len(main.select("div.mermaid")) == 1
