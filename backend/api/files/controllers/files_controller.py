"""Files controller — JSON metadata route."""

from fastapi import APIRouter

from api.files.dto.file import FileMetaResponse
from api.files.services import files_service

router = APIRouter(tags=["Files"])


@router.get("/meta/{short_id}", response_model=FileMetaResponse)
async def get_file_meta(short_id: str):
    return FileMetaResponse(file=files_service.lookup(short_id))
