"""Upload service — reserve, store, finalize.

There is no transaction spanning the metadata database and the blob store,
so an upload walks three steps in order:

1. reserve:  insert a record with a random placeholder short id and the
             ``pending`` storage key, which yields the numeric id.
2. store:    write the bytes to ``files/<id>``.
3. finalize: set ``short_id = encode(id)`` and the real storage key.

A record only becomes reachable after step 3. A failure in step 2 or 3
leaves an orphan (an unreachable record, possibly with its blob); orphans
are logged and left in place.
"""

import logging
from collections.abc import AsyncIterable

from sqlalchemy.exc import SQLAlchemyError

from errors import StorageUnavailable
from storage import BlobStoreError, get_blob_store
from api.files.repositories import files_repository
from api.files.services import short_ids
from api.upload.dto.upload import UploadResponse

logger = logging.getLogger(__name__)

DEFAULT_NAME = "untitled"
DEFAULT_MIME = "application/octet-stream"
TRUTHY_FLAGS = {"1", "on", "true"}


def parse_streamable(value) -> bool:
    """Map the form's streamable field to a flag. Only exact truthy strings count."""
    return isinstance(value, str) and value in TRUTHY_FLAGS


async def save_upload(
    chunks: AsyncIterable[bytes],
    name: str | None,
    size: int | None,
    mime: str | None,
    streamable: bool = False,
) -> UploadResponse:
    name = name or DEFAULT_NAME
    mime = mime or DEFAULT_MIME
    size = size or 0

    try:
        file_id = files_repository.insert(
            name=name,
            size=size,
            mime=mime,
            streamable=streamable,
            placeholder_short_id=short_ids.placeholder(),
        )
    except SQLAlchemyError as exc:
        logger.error("Upload reserve failed for %r", name, exc_info=exc)
        raise StorageUnavailable("Could not reserve file record", phase="reserve") from exc
    logger.info("Reserved file record %d for %r (%d bytes)", file_id, name, size)

    storage_key = short_ids.derive_storage_key(file_id)
    try:
        await get_blob_store().put(storage_key, chunks, content_type=mime)
    except BlobStoreError as exc:
        logger.warning(
            "Blob write failed, record %d left pending", file_id, exc_info=exc
        )
        raise StorageUnavailable("Could not store file contents", phase="store") from exc

    short_id = short_ids.encode(file_id)
    try:
        finalized = files_repository.update_short_id_and_key(file_id, short_id, storage_key)
    except SQLAlchemyError as exc:
        logger.warning(
            "Finalize failed, blob %s stored but record %d unreachable",
            storage_key, file_id, exc_info=exc,
        )
        raise StorageUnavailable("Could not finalize file record", phase="finalize") from exc
    if not finalized:
        logger.warning("Finalize matched no row for record %d", file_id)
        raise StorageUnavailable("Could not finalize file record", phase="finalize")

    logger.info("Finalized record %d as %s", file_id, short_id)
    return UploadResponse(id=file_id, short_id=short_id)
