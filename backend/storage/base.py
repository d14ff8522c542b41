"""Blob store interface."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterable, AsyncIterator

CHUNK_SIZE = 1024 * 1024  # 1MB


class BlobStoreError(Exception):
    """Raised when the backing store cannot complete an operation."""


class BlobStore(ABC):
    """Keyed byte storage with size probes and partial reads.

    Keys are opaque slash-separated strings such as ``files/42``.
    """

    @abstractmethod
    async def put(
        self, key: str, chunks: AsyncIterable[bytes], content_type: str
    ) -> None:
        """Store the bytes produced by ``chunks`` under ``key``."""

    @abstractmethod
    async def head(self, key: str) -> int | None:
        """Return the byte length stored under ``key``, or None if absent."""

    @abstractmethod
    async def get(
        self, key: str, offset: int = 0, length: int | None = None
    ) -> AsyncIterator[bytes] | None:
        """Open ``key`` for reading, or return None if absent.

        The returned iterator yields ``length`` bytes starting at ``offset``
        (everything after ``offset`` when ``length`` is None).
        """
