"""Sandbox guard interface."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class SandboxGuard(Protocol):
    @property
    def root(self) -> Path:
        ...

    def resolve_path(self, path: str) -> Path:
        ...
