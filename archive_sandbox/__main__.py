"""Command-line entry point for the archive tools."""

from __future__ import annotations

import argparse
from dataclasses import asdict
import json
import logging
import sys
from typing import Sequence

from archive_sandbox.config import ArchiveSettings
from archive_sandbox.errors import ArchiveSandboxError
from archive_sandbox.models.archive import ExtractArchiveFilesArgs, ListArchiveFilesArgs
from archive_sandbox.providers.archive import supported_suffixes
from archive_sandbox.service import ArchiveService

logger = logging.getLogger("archive_sandbox")

DEFAULT_HTTP_ADDR = "127.0.0.1:8000"


def _parse_addr(addr: str) -> tuple[str, int]:
    host, sep, port = addr.rpartition(":")
    if not sep or not port.isdigit():
        raise argparse.ArgumentTypeError(f"expected HOST:PORT, got {addr!r}")
    return host or "127.0.0.1", int(port)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="archive-sandbox",
        description=(
            "List and extract files from archives inside a working directory "
            f"(formats: {', '.join(supported_suffixes())})."
        ),
    )
    parser.add_argument(
        "--workdir",
        help="the working directory for the archive tools (or set ARCHIVE_SANDBOX_WORKDIR)",
    )
    parser.add_argument(
        "--max-extract-size",
        type=int,
        help="largest file, in bytes, that may be extracted (or set ARCHIVE_SANDBOX_MAX_EXTRACT_SIZE)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="log level for messages written to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_p = subparsers.add_parser("serve", help="Serve the tools over HTTP")
    serve_p.add_argument(
        "--http",
        default=DEFAULT_HTTP_ADDR,
        type=_parse_addr,
        help=f"address to listen on (default: {DEFAULT_HTTP_ADDR})",
    )

    list_p = subparsers.add_parser("list", help="List the files in an archive")
    list_p.add_argument("path", help="the path to the archive")
    list_p.add_argument("--depth", type=int, default=0, help="directory depth to list (0 = unlimited)")
    list_p.add_argument("--limit", type=int, default=0, help="maximum number of files to display (default 100)")
    list_p.add_argument("--include", help="regular expression of names to include")
    list_p.add_argument("--exclude", help="regular expression of names to exclude")

    extract_p = subparsers.add_parser("extract", help="Extract files from an archive")
    extract_p.add_argument("path", help="the path to the archive")
    extract_p.add_argument("files", nargs="+", help="the files to extract")
    return parser


def _settings(args: argparse.Namespace) -> ArchiveSettings:
    settings = ArchiveSettings.from_env()
    return ArchiveSettings(
        workdir=args.workdir or settings.workdir,
        max_extract_size=(
            settings.max_extract_size if args.max_extract_size is None else args.max_extract_size
        ),
    )


def _serve(service: ArchiveService, addr: tuple[str, int]) -> int:
    import uvicorn

    from archive_sandbox.api.main import create_app

    host, port = addr
    logger.info("archive tools listening at %s:%d (workdir %s)", host, port, service.workdir)
    uvicorn.run(create_app(service), host=host, port=port)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        service = ArchiveService.from_settings(_settings(args))
    except (OSError, ValueError) as exc:
        print(f"Error: failed to create archive instance: {exc}", file=sys.stderr)
        return 1

    if args.command == "serve":
        return _serve(service, args.http)

    try:
        if args.command == "list":
            result = service.list_archive_files(
                ListArchiveFilesArgs(
                    path=args.path,
                    depth=args.depth,
                    limit=args.limit,
                    include=args.include,
                    exclude=args.exclude,
                )
            )
        else:
            result = service.extract_archive_files(
                ExtractArchiveFilesArgs(path=args.path, files=tuple(args.files))
            )
    except (ArchiveSandboxError, RuntimeError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    json.dump(asdict(result), sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
