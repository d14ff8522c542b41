"""Application configuration."""

import os
from pathlib import Path

DATA_DIR = Path(os.environ.get("DATA_DIR", str(Path(__file__).parent.parent / "data")))
DATA_DIR.mkdir(parents=True, exist_ok=True)

DATABASE_URL = os.environ.get("DATABASE_URL", f"sqlite:///{DATA_DIR}/share.db")

# Blob storage: "local" keeps blobs under FILES_DIR, "s3" talks to any
# S3-compatible bucket (AWS, Cloudflare R2, MinIO).
BLOB_BACKEND = os.environ.get("BLOB_BACKEND", "local").strip().lower()

FILES_DIR = DATA_DIR / "blobs"
FILES_DIR.mkdir(parents=True, exist_ok=True)

S3_BUCKET = os.environ.get("S3_BUCKET", "").strip()
S3_ENDPOINT_URL = os.environ.get("S3_ENDPOINT_URL", "").strip() or None
S3_PREFIX = os.environ.get("S3_PREFIX", "").strip()

SITE_NAME = os.environ.get("SITE_NAME", "FileShare")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "info")
