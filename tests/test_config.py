"""Unit tests for ``book.yaml`` loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from book_pages.config import BookConfigError, default_theme_dir, load_book_config


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "book.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_are_applied(tmp_path: Path) -> None:
    config = load_book_config(_write(tmp_path, "description: Hello\n"))
    root = tmp_path.resolve()
    assert config.root == root
    assert config.title == root.name
    assert config.description == "Hello"
    assert config.language == "en"
    assert config.src_dir == root / "src"
    assert config.dest_dir == root / "book"
    assert config.theme_dir is None
    assert config.pygments_style == "monokai"
    assert config.livereload is None
    assert config.build_full is False


def test_explicit_values_override_defaults(tmp_path: Path) -> None:
    dest = tmp_path / "elsewhere"
    config = load_book_config(
        _write(
            tmp_path,
            f"""
title: Guide
language: fr
src: content
dest: {dest}
theme: custom-theme
pygments_style: friendly
livereload: http://localhost:35729/livereload.js
build_full: "yes"
""",
        )
    )
    root = tmp_path.resolve()
    assert config.title == "Guide"
    assert config.language == "fr"
    assert config.src_dir == root / "content"
    assert config.dest_dir == dest
    assert config.theme_dir == root / "content" / "custom-theme"
    assert config.pygments_style == "friendly"
    assert config.livereload == "http://localhost:35729/livereload.js"
    assert config.build_full is True


def test_empty_file_is_accepted(tmp_path: Path) -> None:
    config = load_book_config(_write(tmp_path, ""))
    assert config.title == tmp_path.resolve().name


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_book_config(tmp_path / "absent.yaml")


def test_non_mapping_raises(tmp_path: Path) -> None:
    with pytest.raises(TypeError):
        load_book_config(_write(tmp_path, "- one\n- two\n"))


def test_invalid_boolean_raises(tmp_path: Path) -> None:
    with pytest.raises(BookConfigError, match="build_full"):
        load_book_config(_write(tmp_path, "build_full: sometimes\n"))


def test_theme_dir_defaults_to_src_theme_when_present(tmp_path: Path) -> None:
    config = load_book_config(_write(tmp_path, "title: Guide\n"))
    assert default_theme_dir(config) is None
    (config.src_dir / "theme").mkdir(parents=True)
    assert default_theme_dir(config) == config.src_dir / "theme"
