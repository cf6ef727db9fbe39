"""Exceptions raised by archive tool calls.

Every error is terminal for the call that raised it and carries the context a
caller needs to explain the failure (offending path, pattern, entry name or
declared size). Library errors are chained as ``__cause__``.
"""

from __future__ import annotations

from pathlib import Path


class ArchiveSandboxError(Exception):
    """Base class for all archive tool errors."""

    kind = "archive_error"


class OutsideSandboxError(ArchiveSandboxError):
    kind = "outside_sandbox"

    def __init__(self, path: str) -> None:
        super().__init__(f"path {path} is outside of the working directory")
        self.path = path


class UnresolvablePathError(ArchiveSandboxError):
    kind = "unresolvable_path"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"failed to resolve path {path}: {reason}")
        self.path = path
        self.reason = reason


class UnsupportedFormatError(ArchiveSandboxError):
    kind = "unsupported_format"

    def __init__(self, path: str, supported: tuple[str, ...] = ()) -> None:
        message = f"unsupported archive format for {path}"
        if supported:
            message += f" (supported: {', '.join(supported)})"
        super().__init__(message)
        self.path = path
        self.supported = supported


class ArchiveReadError(ArchiveSandboxError):
    """Raised when an archive cannot be decoded."""

    def __init__(self, message: str, path: Path | str) -> None:
        super().__init__(message)
        self.path = str(path)


class OpenFailedError(ArchiveReadError):
    kind = "open_failed"

    def __init__(self, path: Path | str, reason: object) -> None:
        super().__init__(f"failed to open archive {path}: {reason}", path)


class MalformedArchiveError(ArchiveReadError):
    kind = "malformed_archive"

    def __init__(self, path: Path | str, reason: object, name: str | None = None) -> None:
        if name is None:
            message = f"malformed archive {path}: {reason}"
        else:
            message = f"could not read file {name} from archive {path}: {reason}"
        super().__init__(message, path)
        self.name = name


class InvalidPatternError(ArchiveSandboxError):
    kind = "invalid_pattern"

    def __init__(self, which: str, pattern: str, reason: object) -> None:
        super().__init__(f"invalid {which} pattern {pattern!r}: {reason}")
        self.which = which
        self.pattern = pattern


class FileTooLargeError(ArchiveSandboxError):
    kind = "file_too_large"

    def __init__(self, name: str, size: int, limit: int) -> None:
        super().__init__(
            f"file {name} is too large to extract: {size} bytes (limit {limit} bytes)"
        )
        self.name = name
        self.size = size
        self.limit = limit
