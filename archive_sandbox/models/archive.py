"""Data models for archive listings and extractions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ArchiveEntry:
    name: str
    size: int
    permissions: str


@dataclass(frozen=True)
class ExtractedFile:
    name: str
    size: int
    permissions: str
    content: str


@dataclass(frozen=True)
class ListingResult:
    total_files: int
    filtered_files: int
    displayed_files: int
    files: list[ArchiveEntry] = field(default_factory=list)


@dataclass(frozen=True)
class ExtractionResult:
    files: list[ExtractedFile] = field(default_factory=list)


@dataclass(frozen=True)
class ListArchiveFilesArgs:
    path: str
    depth: int = 0
    limit: int = 0
    include: Optional[str] = None
    exclude: Optional[str] = None


@dataclass(frozen=True)
class ExtractArchiveFilesArgs:
    path: str
    files: tuple[str, ...] = ()
