"""Errors raised by the gist Virtual File System.

Every error derives from GistFSError. Where a builtin exception already
names the condition (FileNotFoundError, IsADirectoryError, ...) the VFS
error also inherits from it, so generic consumers that only know the
builtin hierarchy still catch them.
"""

import builtins
from typing import Optional


class GistFSError(Exception):
    """Base class for all gistfs errors."""
    pass


class InvalidError(GistFSError, ValueError):
    """Operation on an absent or otherwise invalid handle."""

    def __init__(self, message: str = "invalid argument"):
        super().__init__(message)


class NotLoadedError(InvalidError):
    """The filesystem was used before a successful load()."""

    def __init__(self, message: str = "gist not loaded: invalid argument"):
        super().__init__(message)


class ClosedError(GistFSError, ValueError):
    """Operation on a handle after close()."""

    def __init__(self, message: str = "file already closed"):
        super().__init__(message)


class PathError(GistFSError, OSError):
    """An error tied to a path and the operation that failed on it.

    Attributes:
        op: Operation that failed (e.g. "open", "read", "readdir")
        path: Path the operation was called with
    """

    reason = "path error"

    def __init__(self, op: str, path: str, reason: Optional[str] = None):
        self.op = op
        self.path = path
        if reason is not None:
            self.reason = reason
        super().__init__(f"{op} {path}: {self.reason}")


class NotFoundError(PathError, FileNotFoundError):
    """Path does not name a file in the gist."""

    reason = "file does not exist"


class NotADirectoryError(PathError, builtins.NotADirectoryError):
    """Directory listing attempted on a file."""

    reason = "is not a directory"


class IsADirectoryError(PathError, builtins.IsADirectoryError):
    """Byte read attempted on the root directory."""

    reason = "is a directory"
