"""Upload Data Transfer Objects."""

from pydantic import BaseModel


class UploadResponse(BaseModel):
    ok: bool = True
    id: int
    short_id: str
