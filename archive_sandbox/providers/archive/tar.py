"""Compressed tar archive reader."""

from __future__ import annotations

import bz2
from contextlib import ExitStack
from functools import partial
import gzip
import lzma
from pathlib import Path
import tarfile
from typing import IO, Callable, Iterator
import zlib

from archive_sandbox.errors import MalformedArchiveError, OpenFailedError
from archive_sandbox.models.archive import ArchiveEntry
from archive_sandbox.providers.archive.base import ArchiveMember, ArchiveReader, filemode

_READ_ERRORS = (tarfile.TarError, OSError, EOFError, zlib.error, lzma.LZMAError)

_DECOMPRESSORS: dict[str, Callable[..., IO[bytes]]] = {
    "gz": gzip.open,
    "bz2": bz2.open,
    "xz": lzma.open,
}

_DRAIN_SIZE = 64 * 1024


class _StrictTarInfo(tarfile.TarInfo):
    """TarInfo that refuses to end the archive on a damaged header.

    Past the first member tarfile returns None for a bad checksum or a short
    header, the same as for the end-of-archive marker. Only a zero block or a
    clean end of stream may end the archive here.
    """

    @classmethod
    def fromtarfile(cls, tarfile_: tarfile.TarFile) -> tarfile.TarInfo:
        try:
            return super().fromtarfile(tarfile_)
        except (tarfile.InvalidHeaderError, tarfile.TruncatedHeaderError) as exc:
            raise tarfile.ReadError(f"invalid header at offset {tarfile_.offset}: {exc}") from exc


class TarReader(ArchiveReader):
    """Streams a tar archive through a gzip, bzip2 or xz decompressor."""

    def __init__(self, suffix: str, compression: str) -> None:
        self.suffix = suffix
        self.format_name = f"tar.{compression}"
        self._decompress = _DECOMPRESSORS[compression]

    def iter_members(self, path: Path) -> Iterator[ArchiveMember]:
        with ExitStack() as stack:
            try:
                source = stack.enter_context(self._decompress(str(path), "rb"))
                archive = stack.enter_context(
                    tarfile.open(fileobj=source, mode="r|", tarinfo=_StrictTarInfo)
                )
            except _READ_ERRORS as exc:
                raise OpenFailedError(path, exc) from exc
            while True:
                try:
                    info = archive.next()
                except _READ_ERRORS as exc:
                    raise MalformedArchiveError(path, exc) from exc
                if info is None:
                    break
                yield ArchiveMember(
                    entry=_to_entry(info),
                    reader=partial(_read_member, archive, info, path),
                )
            _drain(source, path)


def _drain(source: IO[bytes], path: Path) -> None:
    # The compressed trailer is only verified once the stream is read to EOF.
    try:
        while source.read(_DRAIN_SIZE):
            pass
    except _READ_ERRORS as exc:
        raise MalformedArchiveError(path, exc) from exc


def _to_entry(info: tarfile.TarInfo) -> ArchiveEntry:
    name = info.name
    # tarfile drops the trailing slash the header carries for directories.
    if info.isdir() and not name.endswith("/"):
        name += "/"
    return ArchiveEntry(
        name=name,
        size=info.size,
        permissions=filemode(info.mode),
    )


def _read_member(
    archive: tarfile.TarFile, info: tarfile.TarInfo, path: Path, limit: int
) -> bytes:
    if not info.isfile():
        return b""
    try:
        handle = archive.extractfile(info)
        if handle is None:
            return b""
        with handle:
            return handle.read(limit)
    except _READ_ERRORS as exc:
        raise MalformedArchiveError(path, exc, name=info.name) from exc
