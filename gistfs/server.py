"""
FastAPI server exposing a GistFS as static content.

Routes:
    GET  /                 JSON listing of the root directory
    GET  /files/{name}     Raw bytes of one file
    GET  /stat             Metadata of the root directory
    GET  /stat/{name}      Metadata of one file
    POST /reload           Fetch the gist again
"""

import logging
import mimetypes
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel

from gistfs import __version__
from gistfs.client import GistFetchError
from gistfs.vfs import FileInfo, GistFS, NotFoundError, NotLoadedError
from gistfs.vfs.errors import IsADirectoryError

logger = logging.getLogger(__name__)


class EntryResponse(BaseModel):
    name: str
    size: int
    mode: str
    modified: datetime
    is_dir: bool


class ListingResponse(BaseModel):
    gist_id: str
    modified: Optional[datetime] = None
    entries: List[EntryResponse]


class ReloadResponse(BaseModel):
    gist_id: str
    files: int


# Global filesystem instance
_fs: Optional[GistFS] = None


def get_fs() -> GistFS:
    """Get the current filesystem instance."""
    if _fs is None:
        raise HTTPException(status_code=500, detail="Filesystem not initialized")
    return _fs


def set_fs(fs: GistFS):
    """Set the filesystem instance directly (for testing)."""
    global _fs
    _fs = fs


def create_app(fs: GistFS) -> FastAPI:
    """Create FastAPI application serving the given filesystem."""
    set_fs(fs)
    return app


def _entry(info: FileInfo) -> EntryResponse:
    data = info.to_dict()
    return EntryResponse(
        name=data["name"],
        size=data["size"],
        mode=data["mode"],
        modified=info.mod_time,
        is_dir=data["is_dir"],
    )


def _http_date(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


def _raise_http(e: Exception):
    if isinstance(e, NotFoundError):
        raise HTTPException(status_code=404, detail=f"File not found: {e.path}")
    if isinstance(e, NotLoadedError):
        raise HTTPException(status_code=503, detail="Gist not loaded")
    if isinstance(e, IsADirectoryError):
        raise HTTPException(status_code=400, detail=str(e))
    raise e


app = FastAPI(
    title="gistfs",
    description="Read-only view of a GitHub gist",
    version=__version__,
)


@app.get("/", response_model=ListingResponse)
def list_files():
    fs = get_fs()
    try:
        entries = fs.read_dir(".")
    except NotLoadedError as e:
        _raise_http(e)

    return ListingResponse(
        gist_id=fs.gist_id,
        modified=fs.mod_time,
        entries=[_entry(entry.info()) for entry in entries],
    )


@app.get("/files/{name}")
def get_file(name: str):
    fs = get_fs()
    try:
        with fs.open(name) as f:
            info = f.stat()
            content = f.read()
    except (NotFoundError, NotLoadedError, IsADirectoryError) as e:
        _raise_http(e)

    media_type, _ = mimetypes.guess_type(name)
    return Response(
        content=content,
        media_type=media_type or "text/plain",
        headers={"Last-Modified": _http_date(info.mod_time)},
    )


@app.get("/stat", response_model=EntryResponse)
def stat_root():
    try:
        return _entry(get_fs().stat("."))
    except NotLoadedError as e:
        _raise_http(e)


@app.get("/stat/{name}", response_model=EntryResponse)
def stat_file(name: str):
    try:
        return _entry(get_fs().stat(name))
    except (NotFoundError, NotLoadedError) as e:
        _raise_http(e)


@app.post("/reload", response_model=ReloadResponse)
def reload():
    fs = get_fs()
    try:
        fs.load()
    except GistFetchError as e:
        logger.error(f"Reload of gist {fs.gist_id} failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    return ReloadResponse(gist_id=fs.gist_id, files=len(fs.read_dir(".")))
