import os
import shutil
import tempfile

# Point config at a scratch data dir before any application module loads.
os.environ["DATA_DIR"] = tempfile.mkdtemp(prefix="drop-share-tests-")
os.environ["BLOB_BACKEND"] = "local"
os.environ.pop("DATABASE_URL", None)

from collections.abc import AsyncGenerator, Callable

import pytest
from httpx import ASGITransport, AsyncClient

from config import FILES_DIR
from database import SessionLocal
from main import app
from api.files.orm import FileModel
from storage import get_blob_store


@pytest.fixture(autouse=True)
def reset_storage() -> None:
    with SessionLocal() as session:
        session.query(FileModel).delete()
        session.commit()
    for entry in FILES_DIR.iterdir():
        if entry.is_dir():
            shutil.rmtree(entry)
        else:
            entry.unlink()


@pytest.fixture
def blob_store():
    return get_blob_store()


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def upload(client: AsyncClient) -> Callable:
    async def _upload(
        content: bytes = b"0123456789",
        name: str = "a.txt",
        mime: str = "text/plain",
        streamable: str | None = None,
    ):
        data = {} if streamable is None else {"streamable": streamable}
        return await client.post(
            "/api/upload",
            files={"file": (name, content, mime)},
            data=data,
        )

    return _upload
