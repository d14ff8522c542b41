"""Files repository — data access layer.

Errors from the database propagate as ``SQLAlchemyError``; callers decide
which upload or retrieval phase they belong to.
"""

from sqlalchemy import update

from database import SessionLocal
from api.files.orm.file_model import PENDING_STORAGE_KEY, FileModel
from api.files.dto.file import FileResponse


def _get_session():
    return SessionLocal()


def _model_to_dto(model: FileModel) -> FileResponse:
    return FileResponse(
        id=model.id,
        short_id=model.short_id,
        name=model.name,
        size=model.size or 0,
        mime=model.mime,
        streamable=bool(model.streamable),
        created_at=model.created_at,
        storage_key=model.storage_key,
    )


def insert(
    name: str,
    size: int,
    mime: str,
    streamable: bool,
    placeholder_short_id: str,
) -> int:
    """Insert a reserved record and return its store-assigned id."""
    with _get_session() as session:
        model = FileModel(
            short_id=placeholder_short_id,
            name=name,
            size=size,
            mime=mime,
            streamable=streamable,
            storage_key=PENDING_STORAGE_KEY,
        )
        session.add(model)
        session.commit()
        return model.id


def update_short_id_and_key(file_id: int, short_id: str, storage_key: str) -> bool:
    """Finalize a reserved record. Returns False if no row matched."""
    with _get_session() as session:
        result = session.execute(
            update(FileModel)
            .where(FileModel.id == file_id)
            .values(short_id=short_id, storage_key=storage_key)
        )
        session.commit()
        return result.rowcount == 1


def find_by_short_id(short_id: str) -> FileResponse | None:
    with _get_session() as session:
        model = session.query(FileModel).filter_by(short_id=short_id).first()
        return _model_to_dto(model) if model else None
