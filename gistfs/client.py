"""
GitHub Gist client for gistfs.

Fetches a gist through the GitHub REST API and hands its files to the
VFS as a GistSnapshot. Anything implementing the GistFetcher protocol
can stand in for GistClient (tests use an in-memory fetcher).
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional, Protocol

import httpx
from pydantic import BaseModel, Field, ValidationError

from gistfs import __version__

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30.0


class GistFetchError(Exception):
    """Fetching a gist failed.

    Attributes:
        gist_id: Gist that was requested
        status_code: HTTP status, when the server answered
    """

    def __init__(self, message: str, gist_id: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.gist_id = gist_id
        self.status_code = status_code


class GistNotFoundError(GistFetchError):
    """The gist does not exist or is not visible with the current token."""
    pass


@dataclass(frozen=True)
class GistSnapshot:
    """Contents of a gist at fetch time."""
    files: Dict[str, bytes]
    updated_at: datetime
    description: Optional[str] = None


class GistFetcher(Protocol):
    """Anything that can fetch a gist by id."""

    def fetch(self, gist_id: str, timeout: Optional[float] = None) -> GistSnapshot:
        ...


class GistFilePayload(BaseModel):
    """One entry of the "files" object in the gist API response."""
    filename: str
    type: Optional[str] = None
    language: Optional[str] = None
    raw_url: Optional[str] = None
    size: int = 0
    truncated: bool = False
    content: str = ""


class GistPayload(BaseModel):
    """The parts of GET /gists/{id} that gistfs uses."""
    id: str
    description: Optional[str] = None
    updated_at: datetime
    files: Dict[str, GistFilePayload] = Field(default_factory=dict)


class GistClient:
    """
    Fetch gists from the GitHub REST API.

    Usage:
        >>> with GistClient(token="ghp_...") as client:
        ...     snapshot = client.fetch("ded2f6727d98e6b0095e62a7813aa7cf")
        ...     print(sorted(snapshot.files))
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        token: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Args:
            api_url: Base URL of the GitHub API
            token: Optional personal access token
            timeout: Default request timeout in seconds
            user_agent: User-Agent header (GitHub rejects requests without one)
            transport: Custom httpx transport, mainly for testing
        """
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout

        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": user_agent or f"gistfs/{__version__}",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self.client = httpx.Client(
            base_url=self.api_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
            follow_redirects=True,
        )

    def fetch(self, gist_id: str, timeout: Optional[float] = None) -> GistSnapshot:
        """
        Fetch a gist and the full content of each of its files.

        Args:
            gist_id: Gist identifier
            timeout: Per-call timeout in seconds, overriding the client default

        Returns:
            GistSnapshot with file contents encoded as UTF-8

        Raises:
            GistNotFoundError: GitHub answered 404
            GistFetchError: Any other HTTP, transport or payload error
        """
        request_timeout = timeout if timeout is not None else self.timeout
        logger.debug(f"Fetching gist {gist_id} from {self.api_url}")

        data = self._get_json(f"/gists/{gist_id}", gist_id, request_timeout)

        try:
            payload = GistPayload.model_validate(data)
        except ValidationError as e:
            raise GistFetchError(f"Malformed gist payload for {gist_id}: {e}", gist_id) from e

        files: Dict[str, bytes] = {}
        for name, gist_file in payload.files.items():
            if gist_file.truncated and gist_file.raw_url:
                logger.debug(f"File {name} is truncated, fetching {gist_file.raw_url}")
                files[name] = self._get_raw(gist_file.raw_url, gist_id, request_timeout)
            else:
                files[name] = gist_file.content.encode("utf-8")

        return GistSnapshot(
            files=files,
            updated_at=payload.updated_at,
            description=payload.description,
        )

    def _get(self, url: str, gist_id: str, timeout: float) -> httpx.Response:
        try:
            response = self.client.get(url, timeout=timeout)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 404:
                raise GistNotFoundError(f"Gist {gist_id} not found", gist_id, status) from e
            raise GistFetchError(
                f"GitHub returned {status} for gist {gist_id}", gist_id, status
            ) from e
        except httpx.HTTPError as e:
            raise GistFetchError(f"Failed to fetch gist {gist_id}: {e}", gist_id) from e
        return response

    def _get_json(self, url: str, gist_id: str, timeout: float) -> Dict:
        response = self._get(url, gist_id, timeout)
        try:
            return response.json()
        except ValueError as e:
            raise GistFetchError(f"Invalid JSON for gist {gist_id}", gist_id, response.status_code) from e

    def _get_raw(self, url: str, gist_id: str, timeout: float) -> bytes:
        return self._get(url, gist_id, timeout).content

    def close(self) -> None:
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False
