"""Blob storage backends."""

from functools import lru_cache

from config import BLOB_BACKEND, FILES_DIR, S3_BUCKET, S3_ENDPOINT_URL, S3_PREFIX
from storage.base import BlobStore, BlobStoreError


@lru_cache(maxsize=1)
def get_blob_store() -> BlobStore:
    """Return the process-wide blob store selected by BLOB_BACKEND."""
    if BLOB_BACKEND == "local":
        from storage.local import LocalBlobStore

        return LocalBlobStore(FILES_DIR)
    if BLOB_BACKEND == "s3":
        from storage.s3 import S3BlobStore

        return S3BlobStore(S3_BUCKET, endpoint_url=S3_ENDPOINT_URL, prefix=S3_PREFIX)
    raise ValueError(f"Unknown BLOB_BACKEND: {BLOB_BACKEND}")


__all__ = ["BlobStore", "BlobStoreError", "get_blob_store"]
