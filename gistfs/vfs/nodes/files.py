"""File node: an open handle on one gist file."""

import threading
from typing import List, Optional

from gistfs.vfs.base import FILE_MODE, BlobRecord, FileInfo, Node, NodeType
from gistfs.vfs.errors import ClosedError, InvalidError, NotADirectoryError


class GistFileNode(Node):
    """An open gist file with its own read cursor.

    Each call to GistFS.open() returns a fresh node, so cursors are never
    shared between callers. Calls on the same node are serialized by a
    per-node lock.

    A node built without a record is an absent handle: every operation on
    it raises InvalidError. GistFS never hands one out.
    """

    def __init__(self, record: Optional[BlobRecord]):
        """Initialize a file node.

        Args:
            record: The gist file to expose, or None for an absent handle
        """
        super().__init__(record.name if record is not None else "", NodeType.FILE)
        self._record = record
        self._mod_time = record.mod_time if record is not None else None
        self._size = record.size if record is not None else 0
        self._cursor = 0
        self._closed = False
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def record(self) -> Optional[BlobRecord]:
        return self._record

    def _check_open(self) -> None:
        if self._closed:
            raise ClosedError()
        if self._record is None:
            raise InvalidError()

    def readinto(self, buffer) -> int:
        """Copy the next bytes of the file into buffer.

        Returns:
            Number of bytes copied; 0 at end of file, on every later call too

        Raises:
            InvalidError: absent handle
            ClosedError: the node was closed
        """
        with self._lock:
            self._check_open()

            view = memoryview(buffer).cast("B")
            content = self._record.content
            count = min(len(view), len(content) - self._cursor)
            if count <= 0:
                return 0

            view[:count] = content[self._cursor:self._cursor + count]
            self._cursor += count
            return count

    def read(self, size: Optional[int] = -1) -> bytes:
        with self._lock:
            self._check_open()

            content = self._record.content
            if size is None or size < 0:
                end = len(content)
            else:
                end = min(len(content), self._cursor + size)

            data = content[self._cursor:end]
            self._cursor = max(self._cursor, end)
            return data

    def close(self) -> None:
        """Close the node and drop its content. Closing twice is fine.

        Raises:
            InvalidError: absent handle
        """
        with self._lock:
            if self._closed:
                return
            if self._record is None:
                raise InvalidError()
            self._closed = True
            self._record = None

    def stat(self) -> FileInfo:
        """Get file metadata.

        Raises:
            InvalidError: absent handle
            ClosedError: the node was closed
        """
        with self._lock:
            self._check_open()
            return FileInfo(
                name=self.name,
                size=self._size,
                mode=FILE_MODE,
                mod_time=self._mod_time,
                is_dir=False,
                sys=self,
            )

    def info(self) -> FileInfo:
        """Entry metadata; unlike stat() it stays available after close."""
        if self._mod_time is None:
            raise InvalidError()
        return FileInfo(
            name=self.name,
            size=self._size,
            mode=FILE_MODE,
            mod_time=self._mod_time,
            is_dir=False,
            sys=self,
        )

    def get_info(self):
        info = self.info().to_dict()
        info["type"] = self.node_type.value
        info["path"] = self.get_path()
        return info

    def read_dir(self, n: int = -1) -> List[Node]:
        """Files have no entries.

        Raises:
            NotADirectoryError: always
        """
        raise NotADirectoryError("readdir", self.name)
