"""Archive reader interface."""

from __future__ import annotations

from contextlib import closing
from dataclasses import dataclass
from pathlib import Path
import stat
from typing import Callable, Iterator, Protocol

from archive_sandbox.models.archive import ArchiveEntry


def filemode(mode: int) -> str:
    """Render a mode like ``ls -l``, showing untyped modes as regular files."""
    if not stat.S_IFMT(mode):
        mode |= stat.S_IFREG
    return stat.filemode(mode)


@dataclass(frozen=True)
class ArchiveMember:
    """An entry yielded while iterating an archive.

    ``read`` returns at most ``limit`` bytes of the entry's content, or all of
    it when ``limit`` is negative. It is only valid until the iteration moves
    on to the next member.
    """

    entry: ArchiveEntry
    reader: Callable[[int], bytes]

    def read(self, limit: int = -1) -> bytes:
        return self.reader(limit)


class ArchiveReader(Protocol):
    format_name: str
    suffix: str

    def iter_members(self, path: Path) -> Iterator[ArchiveMember]:
        ...

    def list_entries(self, path: Path) -> Iterator[ArchiveEntry]:
        with closing(self.iter_members(path)) as members:
            for member in members:
                yield member.entry

    def read_entry(self, path: Path, name: str, limit: int = -1) -> bytes:
        with closing(self.iter_members(path)) as members:
            for member in members:
                if member.entry.name == name:
                    return member.read(limit)
        raise KeyError(f"Entry not found in archive: {name}")
