"""
Relocation errors.

A missing source file is never an error; the engine skips it so that
re-running a direction after an interrupted build is safe.
"""

from pathlib import Path
from typing import Optional, Union


class RelocationError(Exception):
    """Base exception for relocation errors."""
    pass


class ManifestParseError(RelocationError):
    """Packaging metadata is unreadable, malformed, or names an unsafe path."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        self.path = str(path) if path is not None else None
        if self.path:
            message = f"{message} ({self.path})"
        super().__init__(message)


class RelocationIOError(RelocationError):
    """A single move or delete failed; remaining work in the phase is aborted."""

    def __init__(
        self,
        message: str,
        path: Union[str, Path],
        entry=None
    ):
        self.path = str(path)
        self.entry = entry
        detail = f"{message}: {self.path}"
        if entry is not None:
            detail += f" (entry {entry.source_build_path} -> {entry.destination_sub_path})"
        super().__init__(detail)
