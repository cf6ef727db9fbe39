"""Shared data models for the archive-sandbox application."""

from archive_sandbox.models.archive import (
    ArchiveEntry,
    ExtractArchiveFilesArgs,
    ExtractedFile,
    ExtractionResult,
    ListArchiveFilesArgs,
    ListingResult,
)

__all__ = [
    "ArchiveEntry",
    "ExtractArchiveFilesArgs",
    "ExtractedFile",
    "ExtractionResult",
    "ListArchiveFilesArgs",
    "ListingResult",
]
