"""
Tests for GistClient against a mocked GitHub API.

Uses httpx.MockTransport so no network access is needed.
"""

import json
from datetime import datetime, timezone

import httpx
import pytest

from gistfs.client import GistClient, GistFetchError, GistNotFoundError, GistSnapshot
from gistfs.vfs import GistFS


GIST_ID = "ded2f6727d98e6b0095e62a7813aa7cf"


def gist_payload(files=None, updated_at="2020-01-02T10:30:00Z"):
    if files is None:
        files = {
            "test1.txt": {"filename": "test1.txt", "size": 13, "truncated": False,
                          "content": "foobar\nbarfoo", "raw_url": "https://gist.example/raw/test1.txt"},
            "test2.txt": {"filename": "test2.txt", "size": 17, "truncated": False,
                          "content": "olala\n12345\nabcde", "raw_url": "https://gist.example/raw/test2.txt"},
        }
    return {"id": GIST_ID, "description": "reference gist", "updated_at": updated_at, "files": files}


def make_client(handler, **kwargs) -> GistClient:
    return GistClient(transport=httpx.MockTransport(handler), **kwargs)


class TestFetch:
    """Tests for GistClient.fetch()."""

    def test_fetch_files(self):
        def handler(request):
            assert request.url.path == f"/gists/{GIST_ID}"
            return httpx.Response(200, json=gist_payload())

        with make_client(handler) as client:
            snapshot = client.fetch(GIST_ID)

        assert isinstance(snapshot, GistSnapshot)
        assert snapshot.files == {"test1.txt": b"foobar\nbarfoo", "test2.txt": b"olala\n12345\nabcde"}
        assert snapshot.updated_at == datetime(2020, 1, 2, 10, 30, tzinfo=timezone.utc)
        assert snapshot.description == "reference gist"

    def test_sends_headers(self):
        seen = {}

        def handler(request):
            seen.update(request.headers)
            return httpx.Response(200, json=gist_payload())

        with make_client(handler, token="secret-token") as client:
            client.fetch(GIST_ID)

        assert seen["authorization"] == "Bearer secret-token"
        assert seen["accept"] == "application/vnd.github+json"
        assert seen["user-agent"].startswith("gistfs/")

    def test_no_token_no_authorization(self):
        seen = {}

        def handler(request):
            seen.update(request.headers)
            return httpx.Response(200, json=gist_payload())

        with make_client(handler) as client:
            client.fetch(GIST_ID)

        assert "authorization" not in seen

    def test_custom_api_url(self):
        def handler(request):
            assert request.url.host == "github.example.com"
            assert request.url.path == f"/api/v3/gists/{GIST_ID}"
            return httpx.Response(200, json=gist_payload())

        with make_client(handler, api_url="https://github.example.com/api/v3/") as client:
            client.fetch(GIST_ID)

    def test_truncated_file_fetched_from_raw_url(self):
        big = "x" * 2048
        files = {
            "big.txt": {"filename": "big.txt", "size": 2048, "truncated": True,
                        "content": big[:10], "raw_url": "https://gist.example/raw/big.txt"},
        }

        def handler(request):
            if request.url.host == "gist.example":
                return httpx.Response(200, content=big.encode())
            return httpx.Response(200, json=gist_payload(files))

        with make_client(handler) as client:
            snapshot = client.fetch(GIST_ID)

        assert snapshot.files["big.txt"] == big.encode()

    def test_unicode_content_encoded_utf8(self):
        files = {"u.txt": {"filename": "u.txt", "content": "héllo ✓"}}

        with make_client(lambda request: httpx.Response(200, json=gist_payload(files))) as client:
            snapshot = client.fetch(GIST_ID)

        assert snapshot.files["u.txt"] == "héllo ✓".encode("utf-8")


class TestErrors:
    """HTTP and payload failures become GistFetchError."""

    def test_not_found(self):
        with make_client(lambda request: httpx.Response(404, json={"message": "Not Found"})) as client:
            with pytest.raises(GistNotFoundError) as exc_info:
                client.fetch(GIST_ID)

        assert exc_info.value.gist_id == GIST_ID
        assert exc_info.value.status_code == 404

    def test_server_error(self):
        with make_client(lambda request: httpx.Response(500)) as client:
            with pytest.raises(GistFetchError) as exc_info:
                client.fetch(GIST_ID)

        assert exc_info.value.status_code == 500
        assert not isinstance(exc_info.value, GistNotFoundError)
        assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with make_client(handler) as client:
            with pytest.raises(GistFetchError) as exc_info:
                client.fetch(GIST_ID)

        assert exc_info.value.status_code is None

    def test_invalid_json(self):
        with make_client(lambda request: httpx.Response(200, content=b"not json")) as client:
            with pytest.raises(GistFetchError):
                client.fetch(GIST_ID)

    def test_malformed_payload(self):
        payload = {"id": GIST_ID, "files": {}}

        with make_client(lambda request: httpx.Response(200, content=json.dumps(payload))) as client:
            with pytest.raises(GistFetchError, match="Malformed"):
                client.fetch(GIST_ID)


class TestWithGistFS:
    """GistClient plugged into GistFS."""

    def test_load_and_read(self):
        client = make_client(lambda request: httpx.Response(200, json=gist_payload()))
        fs = GistFS.with_client(client, GIST_ID)
        fs.load()

        assert fs.read_file("test1.txt") == b"foobar\nbarfoo"
        assert [e.name for e in fs.read_dir(".")] == ["test1.txt", "test2.txt"]
        assert fs.open("test2.txt").stat().size == len("olala\n12345\nabcde")
        client.close()

    def test_load_propagates_fetch_error(self):
        client = make_client(lambda request: httpx.Response(404))
        fs = GistFS.with_client(client, GIST_ID)

        with pytest.raises(GistNotFoundError):
            fs.load()

        assert fs.loaded is False
        client.close()

    def test_load_timeout_reaches_request(self):
        seen = []

        def handler(request):
            seen.append(request.extensions.get("timeout"))
            return httpx.Response(200, json=gist_payload())

        client = make_client(handler)
        GistFS.with_client(client, GIST_ID).load(timeout=1.5)

        assert seen[0]["read"] == 1.5
        client.close()
