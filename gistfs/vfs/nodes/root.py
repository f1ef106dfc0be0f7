"""Root VFS node: the single directory of a gist."""

import threading
from datetime import datetime
from typing import Iterable, List

from gistfs.vfs.base import DIR_MODE, ROOT_NAME, FileInfo, Node, NodeType
from gistfs.vfs.errors import IsADirectoryError
from gistfs.vfs.nodes.files import GistFileNode


class RootDirectoryNode(Node):
    """Root directory (. or /) of the VFS.

    Holds a snapshot of every file in the gist, taken when the directory
    was opened. read_dir() pages through that snapshot with an offset
    that only moves forward, so a later load never disturbs a listing in
    progress.
    """

    def __init__(self, entries: Iterable[GistFileNode], mod_time: datetime):
        """Initialize root node.

        Args:
            entries: File nodes to list, in listing order
            mod_time: Gist-level modification time
        """
        super().__init__(name=ROOT_NAME, node_type=NodeType.DIRECTORY)
        self._entries = tuple(entries)
        self._offset = 0
        self._mod_time = mod_time
        self._lock = threading.Lock()

    @property
    def offset(self) -> int:
        return self._offset

    def __len__(self) -> int:
        return len(self._entries)

    def read_dir(self, n: int = -1) -> List[Node]:
        """List the next entries of the directory.

        Args:
            n: Maximum number of entries; n <= 0 returns all remaining

        Returns:
            Entries following the previous call's, or [] once exhausted
        """
        with self._lock:
            remaining = len(self._entries) - self._offset
            if n > 0:
                remaining = min(remaining, n)

            batch = list(self._entries[self._offset:self._offset + remaining])
            self._offset += remaining
            return batch

    def readinto(self, buffer) -> int:
        raise IsADirectoryError("read", self.name)

    def close(self) -> None:
        pass

    def stat(self) -> FileInfo:
        return FileInfo(
            name=self.name,
            size=0,
            mode=DIR_MODE,
            mod_time=self._mod_time,
            is_dir=True,
            sys=None,
        )

    def get_info(self):
        info = super().get_info()
        info["children_count"] = len(self._entries)
        return info
