"""Shared fixtures: an in-memory fetcher standing in for the GitHub API."""

import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest

from gistfs.client import GistFetchError, GistSnapshot
from gistfs.vfs import GistFS


GIST_ID = "ded2f6727d98e6b0095e62a7813aa7cf"
UPDATED_AT = datetime(2020, 1, 2, 10, 30, tzinfo=timezone.utc)


class FakeFetcher:
    """Serves fixed gist contents and records every call."""

    def __init__(self, files: Optional[Dict[str, bytes]] = None, updated_at: datetime = UPDATED_AT):
        self.files = dict(files or {})
        self.updated_at = updated_at
        self.calls: List[tuple] = []
        self.error: Optional[Exception] = None
        self.gate: Optional[threading.Event] = None

    def fetch(self, gist_id: str, timeout: Optional[float] = None) -> GistSnapshot:
        self.calls.append((gist_id, timeout))
        if self.gate is not None:
            self.gate.wait(5)
        if self.error is not None:
            raise self.error
        return GistSnapshot(files=dict(self.files), updated_at=self.updated_at)


@pytest.fixture
def fetcher():
    """Fetcher with the two-file example gist."""
    return FakeFetcher({"a.txt": b"hi", "b.txt": b"bye"})


@pytest.fixture
def gist_fs(fetcher):
    """Unloaded filesystem bound to the example gist."""
    return GistFS.with_client(fetcher, GIST_ID)


@pytest.fixture
def loaded_fs(gist_fs):
    """Loaded filesystem with a.txt and b.txt."""
    gist_fs.load()
    return gist_fs


@pytest.fixture
def failing_fetcher():
    fetcher = FakeFetcher()
    fetcher.error = GistFetchError("GitHub returned 500 for gist", GIST_ID, 500)
    return fetcher
