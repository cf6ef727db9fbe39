"""Zip archive reader."""

from __future__ import annotations

from functools import partial
from pathlib import Path
import stat
from typing import Iterator
import zipfile
import zlib

from archive_sandbox.errors import MalformedArchiveError, OpenFailedError
from archive_sandbox.models.archive import ArchiveEntry
from archive_sandbox.providers.archive.base import ArchiveMember, ArchiveReader, filemode

_UNIX_CREATORS = frozenset({3, 19})  # unix, macOS
_MSDOS_CREATORS = frozenset({0, 11, 14})  # FAT, NTFS, VFAT
_MSDOS_READONLY = 0x01
_MSDOS_DIR = 0x10


class ZipReader(ArchiveReader):
    format_name = "zip"
    suffix = ".zip"

    def iter_members(self, path: Path) -> Iterator[ArchiveMember]:
        try:
            archive = zipfile.ZipFile(path)
        except (zipfile.BadZipFile, OSError, EOFError, ValueError) as exc:
            raise OpenFailedError(path, exc) from exc
        with archive:
            for info in archive.infolist():
                yield ArchiveMember(
                    entry=ArchiveEntry(
                        name=info.filename,
                        size=info.file_size,
                        permissions=filemode(zip_mode(info)),
                    ),
                    reader=partial(_read_member, archive, info, path),
                )


def zip_mode(info: zipfile.ZipInfo) -> int:
    mode = 0
    if info.create_system in _UNIX_CREATORS:
        mode = info.external_attr >> 16
    elif info.create_system in _MSDOS_CREATORS:
        attrs = info.external_attr & 0xFF
        if attrs & _MSDOS_DIR:
            mode = stat.S_IFDIR | 0o777
        else:
            mode = stat.S_IFREG | 0o666
        if attrs & _MSDOS_READONLY:
            mode &= ~0o222
    if info.filename.endswith("/"):
        mode = stat.S_IFDIR | stat.S_IMODE(mode)
    return mode


def _read_member(
    archive: zipfile.ZipFile, info: zipfile.ZipInfo, path: Path, limit: int
) -> bytes:
    try:
        with archive.open(info) as handle:
            return handle.read(limit)
    except (RuntimeError, NotImplementedError) as exc:
        # Encrypted entries and unsupported compression methods.
        raise OpenFailedError(path, exc) from exc
    except (zipfile.BadZipFile, OSError, EOFError, zlib.error) as exc:
        raise MalformedArchiveError(path, exc, name=info.filename) from exc
