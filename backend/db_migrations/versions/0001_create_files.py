"""create files table

Revision ID: 0001_create_files
Revises:
Create Date: 2026-10-19 00:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import mssql, mysql

revision: str = "0001_create_files"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "files",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "short_id",
            sa.String()
            .with_variant(mysql.VARCHAR(64, collation="utf8mb4_bin"), "mysql", "mariadb")
            .with_variant(mssql.VARCHAR(64, collation="Latin1_General_BIN2"), "mssql"),
            nullable=False,
        ),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("size", sa.Integer(), nullable=False),
        sa.Column("mime", sa.String(), nullable=False),
        sa.Column("streamable", sa.Boolean(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column("storage_key", sa.String(), nullable=False),
    )
    op.create_index("ix_files_short_id", "files", ["short_id"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_files_short_id", table_name="files")
    op.drop_table("files")
