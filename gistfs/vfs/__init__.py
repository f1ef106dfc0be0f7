"""Virtual File System presenting a GitHub gist as a read-only directory.

The VFS provides a filesystem-like interface over the files of one gist:
open a file by name, read its bytes, stat it, and list the directory.

Architecture:

    ```
    .  (or /)                   # Root (RootDirectoryNode)
    ├── notes.md                # Gist file (GistFileNode)
    ├── script.py
    └── data.csv
    ```

There are no subdirectories: gist file names are matched exactly, and
the only directory is the synthetic root.

Node Types:

    - Node: Base class for open handles
    - GistFileNode: One gist file with its own read cursor
    - RootDirectoryNode: The root listing, paged with read_dir(n)

Concurrency:

    GistFS guards its loaded snapshot with a ReadWriteLock: load() takes
    the write side, open/read_file/read_dir the read side. Each node has
    its own lock, so two callers never share a cursor or block each other
    on different nodes.

Usage Example:

    ```python
    from gistfs.vfs import GistFS

    fs = GistFS("ded2f6727d98e6b0095e62a7813aa7cf")
    fs.load()

    # List the root, two entries at a time
    root = fs.open(".")
    while True:
        batch = root.read_dir(2)
        if not batch:
            break
        for entry in batch:
            print(entry.name, entry.info().size)

    # Read file content
    with fs.open("test1.txt") as f:
        print(f.read().decode())
    ```
"""

from gistfs.vfs.base import (
    BlobRecord,
    FileInfo,
    Node,
    NodeType,
    DIR_MODE,
    FILE_MODE,
    ROOT_NAME,
)
from gistfs.vfs.errors import (
    GistFSError,
    InvalidError,
    NotLoadedError,
    ClosedError,
    PathError,
    NotFoundError,
    NotADirectoryError,
    IsADirectoryError,
)
from gistfs.vfs.lock import ReadWriteLock
from gistfs.vfs.nodes import GistFileNode, RootDirectoryNode
from gistfs.vfs.gist_vfs import GistFS

__all__ = [
    # Main entry point
    "GistFS",
    # Core classes
    "Node",
    "GistFileNode",
    "RootDirectoryNode",
    "BlobRecord",
    "FileInfo",
    "NodeType",
    "DIR_MODE",
    "FILE_MODE",
    "ROOT_NAME",
    "ReadWriteLock",
    # Errors
    "GistFSError",
    "InvalidError",
    "NotLoadedError",
    "ClosedError",
    "PathError",
    "NotFoundError",
    "NotADirectoryError",
    "IsADirectoryError",
]
