"""Utility helpers shared by the book configuration loader."""

from __future__ import annotations

from pathlib import Path

from .models import BookConfigError

TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _resolve_dir(root: Path, value: object | None, default: str) -> Path:
    """Anchor a configured directory at ``root`` unless it is already absolute."""
    text = _optional_str(value) or default
    path = Path(text).expanduser()
    if path.is_absolute():
        return path
    return root / path


def _parse_bool(key: str, value: object | None) -> bool:
    """Interpret YAML booleans and their common string spellings."""
    match value:
        case None:
            return False
        case bool():
            return value
        case str() as text if text.strip().lower() in TRUE_VALUES:
            return True
        case str() as text if text.strip().lower() in FALSE_VALUES:
            return False
        case _:
            msg = f"'{key}' must be a boolean, got {value!r}."
            raise BookConfigError(msg)


__all__ = ["_optional_str", "_parse_bool", "_resolve_dir"]
