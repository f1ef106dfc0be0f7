"""
gistfs - A read-only filesystem view of GitHub gists.

Main API:
    from gistfs import GistFS

    # Bind to a gist and fetch it once
    fs = GistFS("ded2f6727d98e6b0095e62a7813aa7cf")
    fs.load()

    # Read a file
    content = fs.read_file("test1.txt")

    # List files
    for entry in fs.read_dir("."):
        print(entry.name, entry.info().size)

    # Authenticated client
    from gistfs import GistClient
    fs = GistFS.with_client(GistClient(token="ghp_..."), "ded2f6727d98e6b0095e62a7813aa7cf")
"""

__version__ = "0.1.0"

from .client import GistClient, GistFetchError, GistNotFoundError, GistSnapshot
from .vfs import GistFS, NotLoadedError

__all__ = [
    "GistFS",
    "GistClient",
    "GistSnapshot",
    "GistFetchError",
    "GistNotFoundError",
    "NotLoadedError",
]
