"""Exception hierarchy for fee.

Every failure the browser can hit is fatal: these types only exist so the
CLI can print a useful diagnostic after the terminal has been restored.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class FeeError(Exception):
    """Base exception for fee errors."""


class ConfigError(FeeError):
    """Raised when the config file cannot be located, read, or parsed."""


class FilesystemError(FeeError):
    """Raised when a directory cannot be listed or a file cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class ProcessLaunchError(FeeError):
    """Raised when an editor command cannot be started."""

    def __init__(self, command: Sequence[str], reason: str) -> None:
        self.command = list(command)
        self.reason = reason
        executable = self.command[0] if self.command else "<empty>"
        super().__init__(f"failed to launch {executable}: {reason}")
