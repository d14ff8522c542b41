"""Upload controller — handles multipart file uploads."""

from collections.abc import AsyncIterator

from fastapi import APIRouter, Request
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from errors import InvalidInput
from api.upload.dto.upload import UploadResponse
from api.upload.services import upload_service
from storage.base import CHUNK_SIZE

router = APIRouter(tags=["Upload"])


async def _iter_upload(file: UploadFile) -> AsyncIterator[bytes]:
    while chunk := await file.read(CHUNK_SIZE):
        yield chunk


@router.post("/api/upload", response_model=UploadResponse)
async def upload_file(request: Request):
    """Accept one ``file`` part plus an optional ``streamable`` flag."""
    content_type = request.headers.get("content-type", "")
    if not content_type.startswith("multipart/form-data"):
        raise InvalidInput("Expected multipart/form-data")

    try:
        form = await request.form()
    except StarletteHTTPException as exc:
        raise InvalidInput(str(exc.detail)) from exc
    except MultiPartException as exc:
        raise InvalidInput(exc.message) from exc

    try:
        files = form.getlist("file")
        if not files or not isinstance(files[0], UploadFile):
            raise InvalidInput("Missing file")
        if len(files) > 1:
            raise InvalidInput("Expected exactly one file")
        file = files[0]

        return await upload_service.save_upload(
            _iter_upload(file),
            name=file.filename,
            size=file.size,
            mime=file.content_type,
            streamable=upload_service.parse_streamable(form.get("streamable")),
        )
    finally:
        await form.close()
