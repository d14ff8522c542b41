"""Filesystem blob store — one file per key under a root directory."""

import logging
import uuid
from collections.abc import AsyncIterable, AsyncIterator
from pathlib import Path

import aiofiles
import aiofiles.os

from storage.base import CHUNK_SIZE, BlobStore, BlobStoreError

logger = logging.getLogger(__name__)


class LocalBlobStore(BlobStore):
    def __init__(self, root: Path):
        self.root = Path(root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if not path.is_relative_to(self.root) or path == self.root:
            raise BlobStoreError(f"Invalid blob key: {key!r}")
        return path

    async def put(
        self, key: str, chunks: AsyncIterable[bytes], content_type: str
    ) -> None:
        # Content type is not persisted locally; the metadata record owns it.
        path = self._path(key)
        tmp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex}.part")
        try:
            await aiofiles.os.makedirs(path.parent, exist_ok=True)
            try:
                async with aiofiles.open(tmp_path, "wb") as f:
                    async for chunk in chunks:
                        await f.write(chunk)
                await aiofiles.os.replace(tmp_path, path)
            finally:
                if await aiofiles.os.path.exists(tmp_path):
                    await aiofiles.os.remove(tmp_path)
        except OSError as exc:
            raise BlobStoreError(f"Failed to write blob {key}: {exc}") from exc
        logger.debug("Stored blob %s (%s)", key, content_type)

    async def head(self, key: str) -> int | None:
        try:
            stat = await aiofiles.os.stat(self._path(key))
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise BlobStoreError(f"Failed to stat blob {key}: {exc}") from exc
        return stat.st_size

    async def get(
        self, key: str, offset: int = 0, length: int | None = None
    ) -> AsyncIterator[bytes] | None:
        if await self.head(key) is None:
            return None
        return _read_range(self._path(key), key, offset, length)


async def _read_range(
    path: Path, key: str, offset: int, length: int | None
) -> AsyncIterator[bytes]:
    # The handle is opened on first iteration so an unstarted body holds nothing.
    try:
        async with aiofiles.open(path, "rb") as handle:
            await handle.seek(offset)
            remaining = length
            while remaining is None or remaining > 0:
                size = CHUNK_SIZE if remaining is None else min(CHUNK_SIZE, remaining)
                chunk = await handle.read(size)
                if not chunk:
                    break
                if remaining is not None:
                    remaining -= len(chunk)
                yield chunk
    except OSError as exc:
        raise BlobStoreError(f"Failed to read blob {key}: {exc}") from exc
