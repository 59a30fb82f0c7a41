"""Project file explorer: a cached directory tree and per-extension file icons."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

ICON_FILE = "\uf016"
ICON_FILE_TEXT = "\uf0f6"
ICON_FILE_PDF = "\uf1c1"
ICON_FILE_WORD = "\uf1c2"
ICON_FILE_EXCEL = "\uf1c3"
ICON_FILE_POWERPOINT = "\uf1c4"
ICON_FILE_IMAGE = "\uf1c5"
ICON_FILE_ARCHIVE = "\uf1c6"
ICON_FILE_AUDIO = "\uf1c7"
ICON_FILE_VIDEO = "\uf1c8"
ICON_FILE_CODE = "\uf1c9"


def _group(icon: str, *extensions: str) -> dict[str, str]:
    return dict.fromkeys(extensions, icon)


FILE_EXTENSION_ICONS: dict[str, str] = {
    **_group(ICON_FILE_IMAGE, ".jpeg", ".png", ".bmp", ".jpg", ".gif", ".tiff"),
    **_group(ICON_FILE_VIDEO, ".mp4", ".avi", ".mov", ".mkv", ".wmv"),
    **_group(ICON_FILE_AUDIO, ".mp3", ".wav", ".flac", ".aac", ".ogg"),
    ".pdf": ICON_FILE_PDF,
    **_group(ICON_FILE_WORD, ".doc", ".docx"),
    **_group(ICON_FILE_EXCEL, ".xls", ".xlsx"),
    **_group(ICON_FILE_POWERPOINT, ".ppt", ".pptx"),
    ".txt": ICON_FILE_TEXT,
    **_group(
        ICON_FILE_CODE,
        ".cpp", ".h", ".hpp", ".py", ".js", ".html", ".css", ".java", ".cs", ".php",
    ),
    **_group(ICON_FILE_ARCHIVE, ".zip", ".rar", ".7z", ".tar", ".gz"),
}


@dataclass
class DirectoryEntry:
    """One file or directory in the explorer tree."""

    path: Path
    is_directory: bool
    is_open: bool = False
    children: list[DirectoryEntry] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.path.name

    def walk(self):
        """Yield this entry and every entry below it, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


def build_directory_cache(root: str | os.PathLike) -> list[DirectoryEntry]:
    """Read the whole tree under ``root``, sorted by name at every level."""
    entries = []
    with os.scandir(root) as scan:
        items = sorted(scan, key=lambda item: item.name)
    for item in items:
        is_dir = item.is_dir()
        entry = DirectoryEntry(Path(item.path), is_dir)
        if is_dir:
            entry.children = build_directory_cache(item.path)
        entries.append(entry)
    return entries


def icon_for(path: str | os.PathLike) -> str:
    """Return the icon glyph for a file, chosen by its last extension."""
    return FILE_EXTENSION_ICONS.get(Path(path).suffix, ICON_FILE)