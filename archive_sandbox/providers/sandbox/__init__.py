"""Sandbox guard implementations and interfaces."""

from archive_sandbox.providers.sandbox.base import SandboxGuard
from archive_sandbox.providers.sandbox.local import LocalSandbox

__all__ = ["LocalSandbox", "SandboxGuard"]
