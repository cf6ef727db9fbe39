"""Archive reader selection by file name suffix."""

from __future__ import annotations

from archive_sandbox.errors import UnsupportedFormatError
from archive_sandbox.providers.archive.base import ArchiveReader
from archive_sandbox.providers.archive.cpio import CpioReader
from archive_sandbox.providers.archive.tar import TarReader
from archive_sandbox.providers.archive.zip import ZipReader

# Checked in order; the first matching suffix wins.
READERS: tuple[ArchiveReader, ...] = (
    CpioReader(),
    TarReader(".tar.gz", "gz"),
    TarReader(".tar.bz2", "bz2"),
    TarReader(".tar.xz", "xz"),
    ZipReader(),
)


def supported_suffixes() -> tuple[str, ...]:
    return tuple(reader.suffix for reader in READERS)


def select_reader(path: str) -> ArchiveReader:
    for reader in READERS:
        if path.endswith(reader.suffix):
            return reader
    raise UnsupportedFormatError(path, supported_suffixes())
