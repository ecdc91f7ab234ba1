"""Copy theme files and bundled static assets into the rendered book.

The bundler writes the theme's static files to fixed names at the destination
root, unpacks each packaged asset archive (icon fonts, diagram libraries) into
its own sub-directory, and mirrors every non-markdown file from the source
tree so images and downloads referenced by chapters resolve.

Example
-------
>>> from pathlib import Path
>>> should_extract(Path("/nonexistent"), "mermaid", build_full=False)
True
"""

from __future__ import annotations

import collections.abc as cabc
import shutil
import zipfile
import zlib
from pathlib import Path

from loguru import logger

from book_pages._constants import MARKDOWN_EXTENSIONS, THEME_OUTPUTS
from book_pages.theme import Theme, bundled_archive_dir

from .models import ArchiveError, ChapterIOError


def should_extract(dest: Path, name: str, *, build_full: bool) -> bool:
    """Return whether archive ``name`` must be unpacked into ``dest``."""
    return build_full or not (dest / name).exists()


def bundled_archives(archive_dir: Path | None = None) -> dict[str, Path]:
    """Return the ``*.zip`` archives in ``archive_dir`` keyed by file stem."""
    directory = archive_dir or bundled_archive_dir()
    if not directory.is_dir():
        return {}
    return {path.stem: path for path in sorted(directory.glob("*.zip"))}


def extract_archive(archive: Path, dest: Path) -> list[Path]:
    """Unpack every file entry of ``archive`` below ``dest``.

    Directory entries are skipped; parent directories are created for each
    file so nested entries extract correctly.

    Returns
    -------
    list[Path]
        Files written, in archive order.

    Raises
    ------
    ArchiveError
        If the archive is unreadable, malformed, or has entries that would
        land outside ``dest``.
    ChapterIOError
        If an extracted file cannot be written below ``dest``.
    """
    written: list[Path] = []
    root = dest.resolve()
    try:
        bundle = zipfile.ZipFile(archive)
    except (OSError, zipfile.BadZipFile) as exc:
        msg = f"Could not open asset archive '{archive}': {exc}"
        raise ArchiveError(msg) from exc
    with bundle:
        for entry in bundle.infolist():
            if entry.is_dir():
                continue
            target = (root / entry.filename).resolve()
            if not target.is_relative_to(root):
                msg = f"Archive entry '{entry.filename}' escapes {dest}."
                raise ArchiveError(msg)
            try:
                data = bundle.read(entry)
            except (OSError, zipfile.BadZipFile, zlib.error) as exc:
                msg = f"Could not read '{entry.filename}' from '{archive}': {exc}"
                raise ArchiveError(msg) from exc
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_bytes(data)
            except OSError as exc:
                msg = f"Could not write asset '{target}': {exc}"
                raise ChapterIOError(msg) from exc
            written.append(target)
    return written


def copy_files_except_ext(
    src: Path,
    dest: Path,
    excluded: cabc.Collection[str] = MARKDOWN_EXTENSIONS,
    *,
    skip_dirs: cabc.Iterable[Path] = (),
) -> list[Path]:
    """Mirror every file of ``src`` whose extension is not in ``excluded``.

    Parameters
    ----------
    src : Path
        Source tree.
    dest : Path
        Destination root; relative layout is preserved.
    excluded : Collection[str], optional
        Extensions, without the dot, that are not copied.
    skip_dirs : Iterable[Path], optional
        Directories not descended into. The destination is always skipped
        when it lives inside ``src``.
    """
    skipped = {path.resolve() for path in (*skip_dirs, dest)}
    suffixes = {f".{ext.lower()}" for ext in excluded}
    copied: list[Path] = []
    for path in sorted(src.rglob("*")):
        resolved = path.resolve()
        if any(resolved == skip or resolved.is_relative_to(skip) for skip in skipped):
            continue
        if not path.is_file() or path.suffix.lower() in suffixes:
            continue
        target = dest / path.relative_to(src)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(path, target)
        copied.append(target)
    return copied


class AssetBundler:
    """Write theme files, bundled archives, and source assets to ``dest``."""

    def __init__(
        self,
        theme: Theme,
        dest: Path,
        *,
        src: Path | None = None,
        build_full: bool = False,
        archives: cabc.Mapping[str, Path] | None = None,
    ) -> None:
        self.theme = theme
        self.dest = dest
        self.src = src
        self.build_full = build_full
        self.archives = dict(bundled_archives() if archives is None else archives)

    def run(self) -> list[Path]:
        """Copy every asset and return the written paths.

        Raises
        ------
        ChapterIOError
            If a destination file cannot be written or a source file copied.
        ArchiveError
            If a bundled archive cannot be extracted.
        """
        written: list[Path] = []
        try:
            written.extend(self.write_theme_files())
            for name, archive in self.archives.items():
                if not should_extract(self.dest, name, build_full=self.build_full):
                    logger.debug("Skipping {} static assets, already present", name)
                    continue
                logger.info("Writing {} static assets", name)
                written.extend(extract_archive(archive, self.dest))
            if self.src is not None:
                skip = [self.theme.override_dir] if self.theme.override_dir else []
                written.extend(
                    copy_files_except_ext(self.src, self.dest, skip_dirs=skip)
                )
        except OSError as exc:
            msg = f"Could not copy static assets into '{self.dest}': {exc}"
            raise ChapterIOError(msg) from exc
        return written

    def write_theme_files(self) -> list[Path]:
        """Write the theme's static files under their fixed names."""
        self.dest.mkdir(parents=True, exist_ok=True)
        written: list[Path] = []
        for attr, filename in THEME_OUTPUTS.items():
            target = self.dest / filename
            target.write_bytes(getattr(self.theme, attr))
            written.append(target)
        return written


__all__ = [
    "AssetBundler",
    "bundled_archives",
    "copy_files_except_ext",
    "extract_archive",
    "should_extract",
]
