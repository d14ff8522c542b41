from http import HTTPStatus

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from database import SessionLocal
from api.files.orm import PENDING_STORAGE_KEY, FileModel
from api.files.repositories import files_repository
from api.files.services import short_ids
from api.upload.services import upload_service
from storage import BlobStoreError


def _db_down(*args, **kwargs):
    raise OperationalError("statement", {}, Exception("database is locked"))


@pytest.mark.asyncio
async def test_upload_returns_encoded_short_id(upload) -> None:
    response = await upload(streamable="1")
    assert response.status_code == HTTPStatus.OK
    body = response.json()
    assert body["ok"] is True
    assert body["short_id"] == short_ids.encode(body["id"])

    with SessionLocal() as session:
        model = session.get(FileModel, body["id"])
        assert model.short_id == body["short_id"]
        assert model.storage_key == f"files/{body['id']}"
        assert model.name == "a.txt"
        assert model.size == 10
        assert model.mime == "text/plain"
        assert model.streamable is True


@pytest.mark.asyncio
async def test_sequential_uploads_get_distinct_short_ids(upload) -> None:
    first = (await upload()).json()
    second = (await upload()).json()
    assert first["id"] != second["id"]
    assert first["short_id"] != second["short_id"]


@pytest.mark.asyncio
async def test_upload_defaults_mime(client: AsyncClient) -> None:
    response = await client.post(
        "/api/upload", files={"file": ("blob", b"\x00\x01", "")}
    )
    assert response.status_code == HTTPStatus.OK
    meta = (await client.get(f"/meta/{response.json()['short_id']}")).json()
    assert meta["file"]["mime"] == "application/octet-stream"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("1", True),
        ("on", True),
        ("true", True),
        ("0", False),
        ("yes", False),
        ("TRUE", False),
        ("", False),
        (None, False),
    ],
)
def test_parse_streamable(value, expected: bool) -> None:
    assert upload_service.parse_streamable(value) is expected


@pytest.mark.asyncio
async def test_upload_without_streamable_field_is_not_streamable(client, upload) -> None:
    short_id = (await upload()).json()["short_id"]
    meta = (await client.get(f"/meta/{short_id}")).json()
    assert meta["file"]["streamable"] is False


@pytest.mark.asyncio
async def test_upload_requires_multipart(client: AsyncClient) -> None:
    response = await client.post("/api/upload", json={"file": "x"})
    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.json() == {
        "ok": False,
        "error": "Expected multipart/form-data",
        "category": "invalid_input",
    }


@pytest.mark.asyncio
async def test_upload_requires_file_part(client: AsyncClient) -> None:
    response = await client.post(
        "/api/upload",
        data={"file": "not a file"},
        files={"other": ("x.bin", b"x", "application/octet-stream")},
    )
    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.json()["category"] == "invalid_input"


@pytest.mark.asyncio
async def test_upload_rejects_multiple_files(client: AsyncClient) -> None:
    response = await client.post(
        "/api/upload",
        files=[
            ("file", ("a.txt", b"a", "text/plain")),
            ("file", ("b.txt", b"b", "text/plain")),
        ],
    )
    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.json()["error"] == "Expected exactly one file"


@pytest.mark.asyncio
async def test_reserve_failure_writes_nothing(upload, monkeypatch, blob_store) -> None:
    async def unexpected_put(*args, **kwargs):
        raise AssertionError("blob write attempted after failed reserve")

    monkeypatch.setattr(files_repository, "insert", _db_down)
    monkeypatch.setattr(blob_store, "put", unexpected_put)

    response = await upload()
    assert response.status_code == HTTPStatus.SERVICE_UNAVAILABLE
    body = response.json()
    assert body["category"] == "storage_unavailable"
    assert "reserve" in body["error"]


@pytest.mark.asyncio
async def test_store_failure_leaves_unreachable_placeholder(
    client: AsyncClient, upload, monkeypatch, blob_store
) -> None:
    async def failing_put(*args, **kwargs):
        raise BlobStoreError("disk full")

    monkeypatch.setattr(blob_store, "put", failing_put)

    response = await upload()
    assert response.status_code == HTTPStatus.SERVICE_UNAVAILABLE
    assert "store" in response.json()["error"]

    with SessionLocal() as session:
        orphan = session.query(FileModel).one()
        placeholder, file_id = orphan.short_id, orphan.id
        assert orphan.storage_key == PENDING_STORAGE_KEY

    assert placeholder != short_ids.encode(file_id)
    for candidate in (placeholder, short_ids.encode(file_id)):
        assert (await client.get(f"/meta/{candidate}")).status_code == HTTPStatus.NOT_FOUND
        assert (await client.get(f"/d/{candidate}")).status_code == HTTPStatus.NOT_FOUND


@pytest.mark.asyncio
async def test_finalize_failure_leaves_blob_unreachable(
    client: AsyncClient, upload, monkeypatch, blob_store
) -> None:
    monkeypatch.setattr(files_repository, "update_short_id_and_key", _db_down)

    response = await upload()
    assert response.status_code == HTTPStatus.SERVICE_UNAVAILABLE
    assert "finalize" in response.json()["error"]

    with SessionLocal() as session:
        file_id = session.query(FileModel).one().id

    assert await blob_store.head(short_ids.derive_storage_key(file_id)) == 10
    meta = await client.get(f"/meta/{short_ids.encode(file_id)}")
    assert meta.status_code == HTTPStatus.NOT_FOUND


@pytest.mark.asyncio
async def test_finalize_matching_no_row_is_a_failure(upload, monkeypatch) -> None:
    monkeypatch.setattr(
        files_repository, "update_short_id_and_key", lambda *args: False
    )
    response = await upload()
    assert response.status_code == HTTPStatus.SERVICE_UNAVAILABLE
    assert "finalize" in response.json()["error"]


@pytest.mark.asyncio
async def test_malformed_multipart_body_is_structured_error(client: AsyncClient) -> None:
    response = await client.post(
        "/api/upload",
        content=b"garbage",
        headers={"Content-Type": "multipart/form-data"},
    )
    assert response.status_code == HTTPStatus.BAD_REQUEST
    body = response.json()
    assert body["ok"] is False
    assert body["category"] == "invalid_input"
    assert "boundary" in body["error"]
