"""Load ``book.yaml`` into a typed :class:`BookConfig`."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import _optional_str, _parse_bool, _resolve_dir
from .models import BookConfig


def load_book_config(path: Path) -> BookConfig:
    """Load the YAML configuration describing a book.

    Parameters
    ----------
    path : Path
        Filesystem path to the ``book.yaml`` file. Relative directories in the
        file are resolved against its parent directory.

    Returns
    -------
    BookConfig
        Parsed configuration with defaults applied.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    BookConfigError
        If a field holds a value of the wrong shape.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_book_config(Path("book.yaml"))  # doctest: +SKIP
    >>> config.src_dir.name  # doctest: +SKIP
    'src'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    root = path.resolve().parent

    src_dir = _resolve_dir(root, raw.get("src"), "src")
    theme_value = _optional_str(raw.get("theme"))
    theme_dir = src_dir / theme_value if theme_value else None

    return BookConfig(
        root=root,
        title=_optional_str(raw.get("title")) or root.name,
        description=_optional_str(raw.get("description")) or "",
        language=_optional_str(raw.get("language")) or "en",
        src_dir=src_dir,
        dest_dir=_resolve_dir(root, raw.get("dest"), "book"),
        theme_dir=theme_dir,
        pygments_style=_optional_str(raw.get("pygments_style")) or "monokai",
        livereload=_optional_str(raw.get("livereload")),
        build_full=_parse_bool("build_full", raw.get("build_full")),
    )


def default_theme_dir(config: BookConfig) -> Path | None:
    """Return the configured theme directory, or ``<src>/theme`` when it exists."""
    if config.theme_dir is not None:
        return config.theme_dir
    candidate = config.src_dir / "theme"
    if candidate.is_dir():
        return candidate
    return None


__all__ = ["default_theme_dir", "load_book_config"]
