"""Download service — resolves a short id to a full or partial byte stream."""

import logging
import re
from collections.abc import AsyncIterator
from dataclasses import dataclass, field

from errors import NotFound, StorageUnavailable
from storage import BlobStoreError, get_blob_store
from api.download.services.byte_ranges import parse_range
from api.files.services import files_service

logger = logging.getLogger(__name__)

# Anything that could break out of a quoted header value, plus non-ASCII,
# which HTTP/1.1 headers cannot carry as-is.
_UNSAFE_FILENAME_CHARS = re.compile(r"[^\x20-\x7e]|[\"'\\]")
_UNSAFE_HEADER_CHARS = re.compile(r"[^\x20-\x7e]")

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass
class Download:
    status_code: int
    body: AsyncIterator[bytes]
    headers: dict[str, str] = field(default_factory=dict)


def sanitize_filename(name: str | None) -> str:
    return _UNSAFE_FILENAME_CHARS.sub("_", name or "") or "file"


def header_content_type(mime: str | None) -> str:
    if not mime or _UNSAFE_HEADER_CHARS.search(mime):
        return DEFAULT_CONTENT_TYPE
    return mime


async def open_download(short_id: str, range_header: str | None = None) -> Download:
    """Look up ``short_id`` and open its blob, honouring an optional Range header.

    Raises NotFound when the record or its blob is missing, MalformedRange /
    RangeNotSatisfiable for unusable ranges, StorageUnavailable when the
    blob store fails.
    """
    record = files_service.lookup(short_id)
    store = get_blob_store()

    try:
        size = await store.head(record.storage_key)
    except BlobStoreError as exc:
        logger.error("Blob probe failed for %s", record.storage_key, exc_info=exc)
        raise StorageUnavailable("Blob store unavailable", phase="read") from exc
    if size is None:
        logger.warning("Record %d has no blob at %s", record.id, record.storage_key)
        raise NotFound("File missing in storage")

    byte_range = parse_range(range_header, size)

    headers = {
        "Accept-Ranges": "bytes",
        "Content-Type": header_content_type(record.mime),
        "Content-Disposition": f'attachment; filename="{sanitize_filename(record.name)}"',
    }
    if byte_range is None:
        status_code, offset, length = 200, 0, None
        headers["Content-Length"] = str(size)
    else:
        status_code, offset, length = 206, byte_range.start, byte_range.length
        headers["Content-Range"] = byte_range.content_range(size)
        headers["Content-Length"] = str(length)

    try:
        body = await store.get(record.storage_key, offset=offset, length=length)
    except BlobStoreError as exc:
        logger.error("Blob read failed for %s", record.storage_key, exc_info=exc)
        raise StorageUnavailable("Blob store unavailable", phase="read") from exc
    if body is None:
        raise NotFound("File missing in storage")

    return Download(status_code=status_code, body=body, headers=headers)
