"""create_tables_columns_rows

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-18 09:12:40.118204

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b10"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create tables, table_columns and table_rows."""
    op.create_table(
        "tables",
        sa.Column("id", sa.String(length=36), nullable=False, comment="Table ID (UUID)"),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column(
            "created_by", sa.String(length=255), nullable=False, comment="User ID of the creator"
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_tables_created_by", "tables", ["created_by"])
    op.create_index("ix_tables_created_at", "tables", ["created_at"])

    op.create_table(
        "table_columns",
        sa.Column("id", sa.String(length=36), nullable=False, comment="Column ID (UUID)"),
        sa.Column(
            "table_id",
            sa.String(length=36),
            nullable=False,
            comment="Foreign key to tables table",
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("config", sa.Text(), nullable=False, comment="JSON column configuration"),
        sa.ForeignKeyConstraint(["table_id"], ["tables.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_table_columns_table_id", "table_columns", ["table_id"])
    op.create_index("ix_table_columns_table_position", "table_columns", ["table_id", "position"])

    op.create_table(
        "table_rows",
        sa.Column("id", sa.String(length=36), nullable=False, comment="Row ID (UUID)"),
        sa.Column(
            "table_id",
            sa.String(length=36),
            nullable=False,
            comment="Foreign key to tables table",
        ),
        sa.Column(
            "data", sa.Text(), nullable=False, comment="JSON cell values keyed by column id"
        ),
        sa.Column("created_by", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["table_id"], ["tables.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_table_rows_table_id", "table_rows", ["table_id"])
    op.create_index("ix_table_rows_table_created", "table_rows", ["table_id", "created_at"])


def downgrade() -> None:
    """Drop table_rows, table_columns and tables."""
    op.drop_index("ix_table_rows_table_created", table_name="table_rows")
    op.drop_index("ix_table_rows_table_id", table_name="table_rows")
    op.drop_table("table_rows")
    op.drop_index("ix_table_columns_table_position", table_name="table_columns")
    op.drop_index("ix_table_columns_table_id", table_name="table_columns")
    op.drop_table("table_columns")
    op.drop_index("ix_tables_created_at", table_name="tables")
    op.drop_index("ix_tables_created_by", table_name="tables")
    op.drop_table("tables")
