"""Main GistFS class - entry point for VFS access."""

import logging
from datetime import datetime
from types import MappingProxyType
from typing import List, Mapping, Optional

from gistfs.client import GistClient, GistFetcher
from gistfs.vfs.base import BlobRecord, Node, is_root
from gistfs.vfs.errors import IsADirectoryError, NotADirectoryError, NotFoundError, NotLoadedError
from gistfs.vfs.lock import ReadWriteLock
from gistfs.vfs.nodes import GistFileNode, RootDirectoryNode

logger = logging.getLogger(__name__)


class GistFS:
    """Virtual File System for a GitHub gist.

    The filesystem is empty until load() fetches the gist; after that
    every file of the gist can be opened by its exact name, and "." or
    "/" opens the root directory listing them all.

    Usage:
        >>> fs = GistFS("ded2f6727d98e6b0095e62a7813aa7cf")
        >>> fs.load()
        >>>
        >>> # Read a whole file
        >>> data = fs.read_file("test1.txt")
        >>>
        >>> # Or through a handle
        >>> with fs.open("test1.txt") as f:
        >>>     print(f.read().decode())
        >>>
        >>> # List the gist
        >>> for entry in fs.read_dir("."):
        >>>     print(entry.name, entry.info().size)
    """

    def __init__(self, gist_id: str, fetcher: Optional[GistFetcher] = None):
        """Initialize VFS for a gist.

        Args:
            gist_id: Gist identifier
            fetcher: Object fetching the gist (defaults to an anonymous GistClient)
        """
        self._gist_id = gist_id
        self.fetcher = fetcher if fetcher is not None else GistClient()
        self._records: Optional[Mapping[str, BlobRecord]] = None
        self._mod_time: Optional[datetime] = None
        self._lock = ReadWriteLock()

    @classmethod
    def with_client(cls, fetcher: GistFetcher, gist_id: str) -> "GistFS":
        """Create a VFS that fetches through the given client."""
        return cls(gist_id, fetcher=fetcher)

    @property
    def gist_id(self) -> str:
        return self._gist_id

    def get_id(self) -> str:
        """Get the gist id the filesystem was created with."""
        return self._gist_id

    @property
    def loaded(self) -> bool:
        with self._lock.read_locked():
            return self._records is not None

    @property
    def mod_time(self) -> Optional[datetime]:
        with self._lock.read_locked():
            return self._mod_time

    def load(self, timeout: Optional[float] = None) -> None:
        """Fetch the gist, making the filesystem ready for use.

        Each call replaces the previous content as a whole. If the fetch
        fails, the previous content stays in place and the fetcher's
        exception is raised unchanged.

        Args:
            timeout: Passed through to the fetcher
        """
        with self._lock.write_locked():
            logger.debug(f"Loading gist {self._gist_id}")
            try:
                snapshot = self.fetcher.fetch(self._gist_id, timeout=timeout)
            except Exception as e:
                logger.warning(f"Failed to load gist {self._gist_id}: {e}")
                raise

            records = {
                name: BlobRecord(name=name, content=bytes(content), mod_time=snapshot.updated_at)
                for name, content in sorted(snapshot.files.items())
            }

            self._records = MappingProxyType(records)
            self._mod_time = snapshot.updated_at

        logger.info(f"Loaded gist {self._gist_id} ({len(records)} files)")

    def open(self, path: str) -> Node:
        """Open a file by name, or the root directory with "." or "/".

        Args:
            path: Exact file name or a root literal

        Returns:
            A new GistFileNode or RootDirectoryNode

        Raises:
            NotLoadedError: load() has not succeeded yet
            NotFoundError: no file has that name
        """
        with self._lock.read_locked():
            records = self._require_loaded()

            if is_root(path):
                return self._open_root(records)

            record = records.get(path)
            if record is None:
                raise NotFoundError("open", path)

        return GistFileNode(record)

    def read_file(self, path: str) -> bytes:
        """Read the whole content of a file without opening a handle.

        Raises:
            NotLoadedError: load() has not succeeded yet
            NotFoundError: no file has that name
            IsADirectoryError: path is the root directory
        """
        with self._lock.read_locked():
            records = self._require_loaded()

            if is_root(path):
                raise IsADirectoryError("read", path)

            record = records.get(path)
            if record is None:
                raise NotFoundError("read", path)

        return record.content

    def read_dir(self, path: str = ".") -> List[Node]:
        """List every file of the gist.

        The entries come in the same order a freshly opened root directory
        would return them.

        Raises:
            NotLoadedError: load() has not succeeded yet
            NotADirectoryError: path names a file
            NotFoundError: path names nothing
        """
        with self._lock.read_locked():
            records = self._require_loaded()

            if not is_root(path):
                if path in records:
                    raise NotADirectoryError("readdir", path)
                raise NotFoundError("readdir", path)

            root = self._open_root(records)

        return root.read_dir(-1)

    def stat(self, path: str):
        """Stat a path without keeping a handle open."""
        with self.open(path) as node:
            return node.stat()

    def _require_loaded(self) -> Mapping[str, BlobRecord]:
        # Caller holds the read lock.
        if self._records is None:
            raise NotLoadedError()
        return self._records

    def _open_root(self, records: Mapping[str, BlobRecord]) -> RootDirectoryNode:
        return RootDirectoryNode(
            entries=[GistFileNode(record) for record in records.values()],
            mod_time=self._mod_time,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(gist_id='{self._gist_id}', loaded={self._records is not None})"
