"""Runtime configuration for the archive tools."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Mapping

DEFAULT_MAX_EXTRACT_SIZE = 100 * 1024

WORKDIR_ENV = "ARCHIVE_SANDBOX_WORKDIR"
MAX_EXTRACT_SIZE_ENV = "ARCHIVE_SANDBOX_MAX_EXTRACT_SIZE"


@dataclass(frozen=True)
class ArchiveSettings:
    workdir: str = "."
    max_extract_size: int = DEFAULT_MAX_EXTRACT_SIZE

    def __post_init__(self) -> None:
        if self.max_extract_size < 0:
            raise ValueError(
                f"max_extract_size must not be negative: {self.max_extract_size}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ArchiveSettings:
        env = os.environ if environ is None else environ
        workdir = env.get(WORKDIR_ENV) or "."
        raw_size = env.get(MAX_EXTRACT_SIZE_ENV)
        if not raw_size:
            return cls(workdir=workdir)
        try:
            max_extract_size = int(raw_size)
        except ValueError as exc:
            raise ValueError(
                f"{MAX_EXTRACT_SIZE_ENV} must be an integer number of bytes: {raw_size!r}"
            ) from exc
        return cls(workdir=workdir, max_extract_size=max_extract_size)
