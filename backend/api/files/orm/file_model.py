"""File ORM model."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func
from sqlalchemy.dialects import mssql, mysql

from database import Base

PENDING_STORAGE_KEY = "pending"

# Short ids are case-sensitive ("A" is 10, "a" is 36). Backends whose default
# collation folds case get an explicit binary collation.
SHORT_ID_TYPE = (
    String()
    .with_variant(mysql.VARCHAR(64, collation="utf8mb4_bin"), "mysql", "mariadb")
    .with_variant(mssql.VARCHAR(64, collation="Latin1_General_BIN2"), "mssql")
)


class FileModel(Base):
    __tablename__ = "files"

    id = Column(Integer, primary_key=True, autoincrement=True)
    short_id = Column(SHORT_ID_TYPE, unique=True, nullable=False, index=True)
    name = Column(String, nullable=False)
    size = Column(Integer, nullable=False, default=0)
    mime = Column(String, nullable=False, default="application/octet-stream")
    streamable = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    storage_key = Column(String, nullable=False, default=PENDING_STORAGE_KEY)
