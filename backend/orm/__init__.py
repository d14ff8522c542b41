"""Central ORM module — imports all models for Alembic metadata discovery."""

from api.files.orm import FileModel

__all__ = [
    "FileModel",
]
