"""Local filesystem sandbox guard."""

from __future__ import annotations

import os
from pathlib import Path

from archive_sandbox.errors import OutsideSandboxError, UnresolvablePathError
from archive_sandbox.providers.sandbox.base import SandboxGuard


class LocalSandbox(SandboxGuard):
    """Confines path access to one directory tree.

    The root is resolved through symlinks once, at construction. Candidates
    are resolved again on every call so that a symlink swapped in after an
    earlier check is still caught.
    """

    def __init__(self, root: str | os.PathLike[str]) -> None:
        resolved = Path(root).expanduser().resolve(strict=True)
        if not resolved.is_dir():
            raise NotADirectoryError(f"Sandbox root is not a directory: {root}")
        self._root = resolved

    @property
    def root(self) -> Path:
        return self._root

    def resolve_path(self, path: str) -> Path:
        if not path:
            raise UnresolvablePathError(path, "empty path")
        # An absolute candidate replaces the root here; containment is checked below.
        candidate = Path(os.path.normpath(self._root / path))
        try:
            resolved = candidate.resolve(strict=True)
        except (OSError, RuntimeError, ValueError) as exc:
            raise UnresolvablePathError(path, str(exc)) from exc
        if self._root != resolved and self._root not in resolved.parents:
            raise OutsideSandboxError(path)
        return resolved
