"""File Data Transfer Objects."""

from datetime import datetime

from pydantic import BaseModel


class FileResponse(BaseModel):
    id: int
    short_id: str
    name: str
    size: int
    mime: str
    streamable: bool
    created_at: datetime
    storage_key: str


class FileMetaResponse(BaseModel):
    ok: bool = True
    file: FileResponse
