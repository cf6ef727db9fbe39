"""Archive reader implementations and interfaces."""

from archive_sandbox.providers.archive.base import ArchiveMember, ArchiveReader
from archive_sandbox.providers.archive.cpio import CpioReader
from archive_sandbox.providers.archive.registry import (
    READERS,
    select_reader,
    supported_suffixes,
)
from archive_sandbox.providers.archive.tar import TarReader
from archive_sandbox.providers.archive.zip import ZipReader

__all__ = [
    "ArchiveMember",
    "ArchiveReader",
    "CpioReader",
    "READERS",
    "TarReader",
    "ZipReader",
    "select_reader",
    "supported_suffixes",
]
