"""List and extract operations over sandboxed archives."""

from __future__ import annotations

from collections import Counter
from contextlib import closing
import logging
import os
from pathlib import Path
import re
from typing import Iterable, Optional

from archive_sandbox.config import DEFAULT_MAX_EXTRACT_SIZE, ArchiveSettings
from archive_sandbox.errors import FileTooLargeError, InvalidPatternError
from archive_sandbox.models.archive import (
    ArchiveEntry,
    ExtractArchiveFilesArgs,
    ExtractedFile,
    ExtractionResult,
    ListArchiveFilesArgs,
    ListingResult,
)
from archive_sandbox.providers.archive import ArchiveReader, select_reader
from archive_sandbox.providers.sandbox import LocalSandbox, SandboxGuard

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 100


class ArchiveService:
    """Archive tools bound to one working directory and one size limit.

    Both values are fixed at construction. Each call opens its own archive
    handles and releases them before returning, so one instance can serve
    concurrent calls.
    """

    def __init__(
        self,
        workdir: str | os.PathLike[str],
        max_extract_size: int = DEFAULT_MAX_EXTRACT_SIZE,
        guard: SandboxGuard | None = None,
    ) -> None:
        if max_extract_size < 0:
            raise ValueError(f"max_extract_size must not be negative: {max_extract_size}")
        self._guard = guard or LocalSandbox(workdir)
        self._max_extract_size = max_extract_size

    @classmethod
    def from_settings(cls, settings: ArchiveSettings) -> ArchiveService:
        return cls(settings.workdir, max_extract_size=settings.max_extract_size)

    @property
    def workdir(self) -> Path:
        return self._guard.root

    @property
    def max_extract_size(self) -> int:
        return self._max_extract_size

    def secure_path(self, path: str) -> Path:
        return self._guard.resolve_path(path)

    def list_archive_files(
        self, args: ListArchiveFilesArgs, session: Optional[str] = None
    ) -> ListingResult:
        logger.debug("tool call: list_archive_files session=%s params=%s", session, args)
        if args.limit < 0:
            raise ValueError(f"limit must not be negative: {args.limit}")
        secure_path, reader = self._open(args.path)
        include = _compile_pattern("include", args.include)
        exclude = _compile_pattern("exclude", args.exclude)

        entries = [
            entry
            for entry in reader.list_entries(secure_path)
            if _within_depth(entry.name, args.depth)
        ]
        filtered = [
            entry
            for entry in entries
            if (include is None or include.search(entry.name))
            and not (exclude is not None and exclude.search(entry.name))
        ]
        limit = args.limit or DEFAULT_LIST_LIMIT
        displayed = filtered[:limit]
        return ListingResult(
            total_files=len(entries),
            filtered_files=len(filtered),
            displayed_files=len(displayed),
            files=displayed,
        )

    def extract_archive_files(
        self, args: ExtractArchiveFilesArgs, session: Optional[str] = None
    ) -> ExtractionResult:
        logger.debug("tool call: extract_archive_files session=%s params=%s", session, args)
        secure_path, reader = self._open(args.path)
        return ExtractionResult(files=self._extract(reader, secure_path, args.files))

    def _open(self, path: str) -> tuple[Path, ArchiveReader]:
        secure_path = self.secure_path(path)
        return secure_path, select_reader(path)

    def _extract(
        self, reader: ArchiveReader, path: Path, names: Iterable[str]
    ) -> list[ExtractedFile]:
        wanted = Counter(names)
        extracted: list[ExtractedFile] = []
        if not wanted:
            return extracted
        with closing(reader.iter_members(path)) as members:
            for member in members:
                entry = member.entry
                copies = wanted.get(entry.name, 0)
                if not copies:
                    continue
                if entry.size > self._max_extract_size:
                    raise FileTooLargeError(entry.name, entry.size, self._max_extract_size)
                data = member.read(self._max_extract_size + 1)
                if len(data) > self._max_extract_size:
                    # The header understated the size.
                    raise FileTooLargeError(entry.name, len(data), self._max_extract_size)
                extracted.extend([_to_extracted(entry, data)] * copies)
        logger.debug("extracted %d file(s) from %s", len(extracted), path)
        return extracted


def _within_depth(name: str, depth: int) -> bool:
    if depth <= 0:
        return True
    return len(name.strip("/").split("/")) <= depth


def _compile_pattern(which: str, pattern: Optional[str]) -> Optional[re.Pattern[str]]:
    if not pattern:
        return None
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise InvalidPatternError(which, pattern, exc) from exc


def _to_extracted(entry: ArchiveEntry, data: bytes) -> ExtractedFile:
    return ExtractedFile(
        name=entry.name,
        size=entry.size,
        permissions=entry.permissions,
        content=data.decode("utf-8", errors="replace"),
    )
