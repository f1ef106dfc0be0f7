"""VFS node implementations.

This package contains the two concrete node types:

- files: GistFileNode, an open handle on one gist file
- root: RootDirectoryNode, the single directory listing every file
"""

from gistfs.vfs.nodes.files import GistFileNode
from gistfs.vfs.nodes.root import RootDirectoryNode

__all__ = [
    "GistFileNode",
    "RootDirectoryNode",
]
