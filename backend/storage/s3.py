"""S3-compatible blob store (AWS S3, Cloudflare R2, MinIO) via aioboto3."""

import logging
import tempfile
from collections.abc import AsyncIterable, AsyncIterator

import aioboto3
from botocore.exceptions import BotoCoreError, ClientError

from storage.base import CHUNK_SIZE, BlobStore, BlobStoreError

logger = logging.getLogger(__name__)

MISSING_CODES = {"404", "NoSuchKey", "NotFound"}


def _is_missing(exc: ClientError) -> bool:
    return exc.response.get("Error", {}).get("Code") in MISSING_CODES


class S3BlobStore(BlobStore):
    def __init__(self, bucket: str, endpoint_url: str | None = None, prefix: str = ""):
        if not bucket:
            raise ValueError("S3_BUCKET is required when BLOB_BACKEND=s3")
        self.bucket = bucket
        self.endpoint_url = endpoint_url
        self.prefix = prefix if not prefix or prefix.endswith("/") else prefix + "/"
        self.session = aioboto3.Session()
        logger.info(
            "S3 blob store initialized: bucket=%s, endpoint=%s, prefix=%s",
            bucket, endpoint_url or "default", self.prefix,
        )

    def _client(self):
        return self.session.client("s3", endpoint_url=self.endpoint_url)

    def _object_key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    async def put(
        self, key: str, chunks: AsyncIterable[bytes], content_type: str
    ) -> None:
        # Spool to disk past CHUNK_SIZE so the upload can be sized and retried by boto.
        with tempfile.SpooledTemporaryFile(max_size=CHUNK_SIZE) as spool:
            async for chunk in chunks:
                spool.write(chunk)
            spool.seek(0)
            try:
                async with self._client() as s3:
                    await s3.upload_fileobj(
                        spool,
                        self.bucket,
                        self._object_key(key),
                        ExtraArgs={"ContentType": content_type},
                    )
            except (ClientError, BotoCoreError) as exc:
                raise BlobStoreError(f"Failed to upload blob {key}: {exc}") from exc

    async def head(self, key: str) -> int | None:
        try:
            async with self._client() as s3:
                response = await s3.head_object(
                    Bucket=self.bucket, Key=self._object_key(key)
                )
        except ClientError as exc:
            if _is_missing(exc):
                return None
            raise BlobStoreError(f"Failed to probe blob {key}: {exc}") from exc
        except BotoCoreError as exc:
            raise BlobStoreError(f"Failed to probe blob {key}: {exc}") from exc
        return response["ContentLength"]

    async def get(
        self, key: str, offset: int = 0, length: int | None = None
    ) -> AsyncIterator[bytes] | None:
        params = {"Bucket": self.bucket, "Key": self._object_key(key)}
        if length is not None:
            params["Range"] = f"bytes={offset}-{offset + length - 1}"
        elif offset:
            params["Range"] = f"bytes={offset}-"

        if await self.head(key) is None:
            return None
        return self._iter_object(key, params)

    async def _iter_object(self, key: str, params: dict) -> AsyncIterator[bytes]:
        # The client is entered on first iteration so an unstarted body holds no connection.
        try:
            async with self._client() as s3:
                response = await s3.get_object(**params)
                async for chunk in response["Body"].iter_chunks(CHUNK_SIZE):
                    yield chunk
        except (ClientError, BotoCoreError) as exc:
            raise BlobStoreError(f"Failed to read blob {key}: {exc}") from exc
