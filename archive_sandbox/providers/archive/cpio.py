"""cpio archive reader backed by libarchive."""

from __future__ import annotations

from contextlib import ExitStack
from functools import partial
import importlib
import importlib.util
from pathlib import Path
from types import ModuleType
from typing import Any, Iterator

from archive_sandbox.errors import MalformedArchiveError, OpenFailedError
from archive_sandbox.models.archive import ArchiveEntry
from archive_sandbox.providers.archive.base import ArchiveMember, ArchiveReader


def _load_libarchive() -> ModuleType:
    if importlib.util.find_spec("libarchive") is None:
        raise RuntimeError(
            "libarchive-c must be installed to read cpio archives: pip install 'archive-sandbox[cpio]'"
        )
    try:
        return importlib.import_module("libarchive")
    except (ImportError, OSError) as exc:
        # The Python bindings load the shared library at import time.
        raise RuntimeError(f"libarchive could not be loaded: {exc}") from exc


class CpioReader(ArchiveReader):
    format_name = "cpio"
    suffix = ".cpio"

    def iter_members(self, path: Path) -> Iterator[ArchiveMember]:
        libarchive = _load_libarchive()
        with ExitStack() as stack:
            try:
                archive = stack.enter_context(
                    libarchive.file_reader(str(path), format_name="cpio")
                )
            except (libarchive.ArchiveError, OSError) as exc:
                raise OpenFailedError(path, exc) from exc
            entries = iter(archive)
            while True:
                try:
                    entry = next(entries)
                except StopIteration:
                    return
                except libarchive.ArchiveError as exc:
                    raise MalformedArchiveError(path, exc) from exc
                yield ArchiveMember(
                    entry=ArchiveEntry(
                        name=entry.pathname,
                        size=entry.size or 0,
                        permissions=f"0{entry.mode:o}",
                    ),
                    reader=partial(_read_entry, libarchive, entry, path),
                )


def _read_entry(libarchive: ModuleType, entry: Any, path: Path, limit: int) -> bytes:
    chunks: list[bytes] = []
    total = 0
    try:
        for block in entry.get_blocks():
            chunks.append(bytes(block))
            total += len(block)
            if 0 <= limit < total:
                break
    except libarchive.ArchiveError as exc:
        raise MalformedArchiveError(path, exc, name=entry.pathname) from exc
    data = b"".join(chunks)
    return data if limit < 0 else data[:limit]
