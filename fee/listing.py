"""Directory listing for the browser.

Only immediate children are listed. Directories come first, then files, and
each group keeps the order the filesystem enumerated it in. Nothing is
sorted by name.
"""

from __future__ import annotations

import enum
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .errors import FilesystemError

logger = logging.getLogger(__name__)


class EntryKind(enum.Enum):
    DIRECTORY = "directory"
    FILE = "file"


@dataclass(frozen=True)
class Entry:
    """One listed child, identified by name within its parent."""

    name: str
    kind: EntryKind

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


@dataclass(frozen=True)
class Listing:
    """Partitioned directory contents: all directories precede all files."""

    entries: tuple[Entry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> Entry:
        return self.entries[index]

    def __iter__(self):
        return iter(self.entries)

    @property
    def directories(self) -> tuple[Entry, ...]:
        return tuple(entry for entry in self.entries if entry.is_dir)

    @property
    def files(self) -> tuple[Entry, ...]:
        return tuple(entry for entry in self.entries if not entry.is_dir)

    @classmethod
    def from_partitions(cls, directories: list[Entry], files: list[Entry]) -> Listing:
        return cls(entries=tuple(directories) + tuple(files))


def _checked_name(directory: Path, name: str) -> str:
    """Reject names that only survived decoding as surrogate escapes."""
    try:
        name.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise FilesystemError(directory, f"entry name is not valid text: {name!r}") from exc
    return name


def _entry_kind(child: os.DirEntry) -> EntryKind | None:
    # Symlinks are followed; broken links and special files report neither.
    if child.is_dir():
        return EntryKind.DIRECTORY
    if child.is_file():
        return EntryKind.FILE
    return None


def list_directory(directory: Path) -> Listing:
    """List ``directory`` as a :class:`Listing`.

    Entries that are neither a directory nor a regular file are skipped.
    Any ``OSError`` while scanning, or a child name that is not valid text,
    fails the whole listing with :class:`FilesystemError`.
    """
    directories: list[Entry] = []
    files: list[Entry] = []
    try:
        with os.scandir(directory) as children:
            for child in children:
                name = _checked_name(directory, child.name)
                kind = _entry_kind(child)
                if kind is None:
                    continue
                if kind is EntryKind.DIRECTORY:
                    directories.append(Entry(name, kind))
                else:
                    files.append(Entry(name, kind))
    except OSError as exc:
        raise FilesystemError(directory, exc.strerror or str(exc)) from exc

    logger.debug("listed %s: %d directories, %d files", directory, len(directories), len(files))
    return Listing.from_partitions(directories, files)
