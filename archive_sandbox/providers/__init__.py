"""Provider package for sandbox guards and archive readers."""

from archive_sandbox.providers.archive import ArchiveReader, select_reader
from archive_sandbox.providers.sandbox import LocalSandbox, SandboxGuard

__all__ = [
    "ArchiveReader",
    "LocalSandbox",
    "SandboxGuard",
    "select_reader",
]
