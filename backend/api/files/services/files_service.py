"""Files service — short id lookup and metadata."""

import logging

from sqlalchemy.exc import SQLAlchemyError

from errors import NotFound, StorageUnavailable
from api.files.dto.file import FileResponse
from api.files.repositories import files_repository
from api.files.services import short_ids

logger = logging.getLogger(__name__)


def lookup(short_id: str) -> FileResponse:
    """Return the finalized record for ``short_id`` or raise NotFound."""
    if not short_ids.is_short_id(short_id):
        raise NotFound("File not found")
    try:
        record = files_repository.find_by_short_id(short_id)
    except SQLAlchemyError as exc:
        logger.error("Metadata lookup failed for %s", short_id, exc_info=exc)
        raise StorageUnavailable("Metadata store unavailable", phase="lookup") from exc
    if record is None:
        raise NotFound("File not found")
    return record
