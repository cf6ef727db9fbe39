"""HTTP wiring for the archive tools."""

from __future__ import annotations

from dataclasses import asdict
import logging
from typing import Any, Optional

from fastapi import FastAPI, Header, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from archive_sandbox import __version__
from archive_sandbox.config import ArchiveSettings
from archive_sandbox.errors import (
    ArchiveReadError,
    ArchiveSandboxError,
    FileTooLargeError,
    InvalidPatternError,
    OutsideSandboxError,
    UnresolvablePathError,
    UnsupportedFormatError,
)
from archive_sandbox.models.archive import ExtractArchiveFilesArgs, ListArchiveFilesArgs
from archive_sandbox.service import ArchiveService

logger = logging.getLogger(__name__)

TOOLS = {
    "list_archive_files": "list the files in an archive",
    "extract_archive_files": "extract files from an archive",
}

_STATUS_BY_ERROR: tuple[tuple[type[ArchiveSandboxError], int], ...] = (
    (OutsideSandboxError, 403),
    (UnresolvablePathError, 404),
    (FileTooLargeError, 413),
    (UnsupportedFormatError, 415),
    (InvalidPatternError, 422),
    (ArchiveReadError, 422),
)


class ListArchiveFilesRequest(BaseModel):
    path: str = Field(description="the path to the archive")
    depth: int = Field(
        default=0,
        description="the depth of the directory tree to list. 0 means the complete directory tree",
    )
    limit: int = Field(
        default=0,
        ge=0,
        description="the maximum number of files to display. If not set, it will default to 100",
    )
    include: Optional[str] = Field(
        default=None, description="an optional regular expression to include files"
    )
    exclude: Optional[str] = Field(
        default=None, description="an optional regular expression to exclude files"
    )


class ExtractArchiveFilesRequest(BaseModel):
    path: str = Field(description="the path to the archive")
    files: list[str] = Field(description="the files to extract")


def _status_for(exc: ArchiveSandboxError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return 500


def create_app(service: ArchiveService | None = None) -> FastAPI:
    archiver = service or ArchiveService.from_settings(ArchiveSettings.from_env())
    app = FastAPI(title="archive-sandbox", version=__version__)
    app.state.archiver = archiver

    @app.exception_handler(ArchiveSandboxError)
    async def archive_error_handler(request: Request, exc: ArchiveSandboxError) -> JSONResponse:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=_status_for(exc),
            content={"error": exc.kind, "detail": str(exc)},
        )

    @app.get("/health")
    def health_check() -> dict:
        return {"status": "ok"}

    @app.get("/tools")
    def list_tools() -> dict:
        return {
            "tools": [
                {"name": name, "description": description}
                for name, description in TOOLS.items()
            ]
        }

    @app.post("/tools/list_archive_files")
    def list_archive_files(
        body: ListArchiveFilesRequest,
        x_session_id: Optional[str] = Header(default=None),
    ) -> dict[str, Any]:
        args = ListArchiveFilesArgs(
            path=body.path,
            depth=body.depth,
            limit=body.limit,
            include=body.include,
            exclude=body.exclude,
        )
        return asdict(archiver.list_archive_files(args, session=x_session_id))

    @app.post("/tools/extract_archive_files")
    def extract_archive_files(
        body: ExtractArchiveFilesRequest,
        x_session_id: Optional[str] = Header(default=None),
    ) -> dict[str, Any]:
        args = ExtractArchiveFilesArgs(path=body.path, files=tuple(body.files))
        return asdict(archiver.extract_archive_files(args, session=x_session_id))

    return app
