"""Base classes for the gist Virtual File System.

The VFS maps a loaded gist to a filesystem-like structure with a single
root directory holding one file per gist file.

Architecture:
    - BlobRecord: Immutable name/content/mtime value loaded from the gist
    - FileInfo: Metadata returned by stat()
    - Node: Base class for open handles (files and the root directory)
"""

import stat as stat_module
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


ROOT_NAME = "."
ROOT_PATHS = (".", "/")

FILE_MODE = stat_module.S_IFREG | 0o444
DIR_MODE = stat_module.S_IFDIR | 0o444


def is_root(path: str) -> bool:
    """Check if a path is one of the literals naming the root directory."""
    return path in ROOT_PATHS


class NodeType(Enum):
    """Type of VFS node."""
    DIRECTORY = "directory"
    FILE = "file"


@dataclass(frozen=True)
class BlobRecord:
    """One file of a loaded gist.

    Attributes:
        name: File name, unique within a load
        content: Raw file bytes
        mod_time: Gist-level last modification time
    """
    name: str
    content: bytes
    mod_time: datetime

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class FileInfo:
    """Metadata describing a file or the root directory.

    Attributes:
        name: Base name ("." for the root)
        size: Length in bytes (0 for the root)
        mode: st_mode style bits, file type included
        mod_time: Last modification time of the gist
        is_dir: True only for the root directory
        sys: The handle the info was taken from
    """
    name: str
    size: int
    mode: int
    mod_time: datetime
    is_dir: bool
    sys: Any = None

    @property
    def type(self) -> int:
        """File type bits of mode."""
        return stat_module.S_IFMT(self.mode)

    @property
    def permissions(self) -> int:
        return stat_module.S_IMODE(self.mode)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "size": self.size,
            "mode": stat_module.filemode(self.mode),
            "modified": self.mod_time.isoformat(),
            "is_dir": self.is_dir,
        }


class Node(ABC):
    """Base class for open VFS handles.

    A Node is what GistFS.open() returns. Both variants expose the full
    handle contract (readinto, read, close, stat, read_dir); the file
    variant refuses read_dir and the directory variant refuses byte reads.

    Nodes also act as directory entries: the root directory's read_dir()
    returns file nodes, and their name/is_dir/type/info accessors describe
    the entry without reading it.

    Attributes:
        name: Name of this node
        node_type: Type of node (file or directory)
    """

    def __init__(self, name: str, node_type: NodeType = NodeType.FILE):
        self.name = name
        self.node_type = node_type

    @abstractmethod
    def readinto(self, buffer) -> int:
        """Read bytes into a pre-allocated, writable buffer.

        Args:
            buffer: bytearray, memoryview or other writable buffer

        Returns:
            Number of bytes read, 0 once the content is exhausted
        """
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    @abstractmethod
    def stat(self) -> FileInfo:
        """Get metadata about this node."""
        pass

    @abstractmethod
    def read_dir(self, n: int = -1) -> List['Node']:
        """List directory entries.

        Args:
            n: Maximum number of entries; n <= 0 means all remaining

        Returns:
            List of entries, empty once the listing is exhausted
        """
        pass

    def read(self, size: Optional[int] = -1) -> bytes:
        """Read up to size bytes, or everything left when size is negative.

        Returns:
            Bytes read, b"" once the content is exhausted
        """
        if size is not None and size >= 0:
            buffer = bytearray(size)
            count = self.readinto(buffer)
            return bytes(buffer[:count])

        chunks = []
        buffer = bytearray(8192)
        while True:
            count = self.readinto(buffer)
            if count == 0:
                break
            chunks.append(bytes(buffer[:count]))
        return b"".join(chunks)

    def is_dir(self) -> bool:
        return self.node_type == NodeType.DIRECTORY

    def type(self) -> int:
        """File type bits, as in FileInfo.type."""
        return stat_module.S_IFDIR if self.is_dir() else stat_module.S_IFREG

    def info(self) -> FileInfo:
        """Directory-entry accessor for the full metadata."""
        return self.stat()

    def get_path(self) -> str:
        """Get absolute path to this node.

        Returns:
            Path like /notes.md, or / for the root
        """
        if self.is_dir():
            return "/"
        return "/" + self.name

    def get_info(self) -> Dict[str, Any]:
        """Get metadata about this node for display.

        Returns:
            Dict with keys like: name, size, mode, modified, is_dir, path
        """
        info = self.stat().to_dict()
        info["type"] = self.node_type.value
        info["path"] = self.get_path()
        return info

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}', path='{self.get_path()}')"
