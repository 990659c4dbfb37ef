"""SQLAlchemy model for the table_rows table."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gridbase.infrastructure.persistence.database import Base


class RowModel(Base):
    """SQLAlchemy model for the table_rows table.

    Row data is a JSON object keyed by column id. Keys are not constrained
    to existing columns; deleting a column leaves its values in place.

    Attributes:
        id: Primary key (UUID string).
        table_id: Foreign key to tables table.
        data: JSON-encoded cell values keyed by column id.
        created_by: ID of the user who created the row.
        created_at: Timestamp when the row was created.
        updated_at: Timestamp when the row was last written.
    """

    __tablename__ = "table_rows"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Row ID (UUID)",
    )
    table_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tables.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Foreign key to tables table",
    )
    data: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="{}",
        comment="JSON cell values keyed by column id",
    )
    created_by: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    # Relationships
    table: Mapped["TableModel"] = relationship(  # noqa: F821
        "TableModel",
        back_populates="rows",
    )

    __table_args__ = (Index("ix_table_rows_table_created", "table_id", "created_at"),)

    def __repr__(self) -> str:
        return f"<Row(id={self.id}, table_id={self.table_id})>"
