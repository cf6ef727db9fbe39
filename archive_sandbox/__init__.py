"""Sandboxed listing and extraction of cpio, tar and zip archives."""

from archive_sandbox.service import ArchiveService

__version__ = "0.1.0"

__all__ = ["ArchiveService", "__version__"]
