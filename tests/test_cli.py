"""Tests for the ``book-pages`` command handlers."""

from __future__ import annotations

from pathlib import Path

import pytest

from book_pages import cli
from book_pages.config import load_book_config


@pytest.fixture
def scaffolded(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> Path:
    """Scaffold a book in ``tmp_path`` and make it the working directory."""
    monkeypatch.chdir(tmp_path)
    cli.init(title="Handbook")
    return tmp_path


def test_init_writes_starter_files(
    scaffolded: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "wrote book.yaml",
        "wrote src/SUMMARY.md",
        "wrote src/chapter_1.md",
    ]
    config = load_book_config(scaffolded / "book.yaml")
    assert config.title == "Handbook"
    assert config.dest_dir == scaffolded.resolve() / "book"


def test_init_keeps_existing_files(
    scaffolded: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    capsys.readouterr()
    summary = scaffolded / "src" / "SUMMARY.md"
    summary.write_text("- [Mine](mine.md)\n", encoding="utf-8")
    cli.init(title="Other")
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "kept book.yaml",
        "kept src/SUMMARY.md",
        "kept src/chapter_1.md",
    ]
    assert summary.read_text(encoding="utf-8") == "- [Mine](mine.md)\n"


def test_build_reports_written_pages(
    scaffolded: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    capsys.readouterr()
    cli.build()
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "wrote book/chapter_1.html",
        "wrote book/index.html",
        "wrote book/print.html",
    ]
    assert (scaffolded / "book" / "fontawesome" / "css" / "font-awesome.css").is_file()


def test_build_honours_dest_override(
    scaffolded: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    capsys.readouterr()
    cli.build(dest=scaffolded.resolve() / "site")
    out = capsys.readouterr().out.splitlines()
    assert "wrote site/index.html" in out
    assert not (scaffolded / "book").exists()


def test_build_uses_theme_override(scaffolded: Path) -> None:
    theme_dir = scaffolded / "src" / "theme"
    theme_dir.mkdir()
    (theme_dir / "book.css").write_text("body { color: red; }", encoding="utf-8")
    cli.build()
    assert (scaffolded / "book" / "book.css").read_text(encoding="utf-8") == (
        "body { color: red; }"
    )
    assert not (scaffolded / "book" / "theme").exists()


def test_build_requires_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError, match="book.yaml"):
        cli.build()
