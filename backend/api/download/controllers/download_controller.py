"""Download controller — full and byte-range downloads."""

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse

from api.download.services import download_service

router = APIRouter(tags=["Download"])


@router.get("/d/{short_id}")
async def download_file(request: Request, short_id: str):
    """Stream a file, or the single byte range named by the Range header."""
    download = await download_service.open_download(
        short_id, request.headers.get("range")
    )
    return StreamingResponse(
        download.body,
        status_code=download.status_code,
        headers=download.headers,
    )
