"""SQLAlchemy model for the tables table.

A table owns an ordered set of columns and an unordered set of rows.
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gridbase.infrastructure.persistence.database import Base


class TableModel(Base):
    """SQLAlchemy model for the tables table.

    Attributes:
        id: Primary key (UUID string).
        title: Display title.
        created_by: ID of the user who created the table.
        created_at: Timestamp when the table was created.
        updated_at: Timestamp of the last change to the table, its columns
            or its rows.
    """

    __tablename__ = "tables"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Table ID (UUID)",
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    created_by: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="",
        index=True,
        comment="User ID of the creator",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    # Relationships
    columns: Mapped[list["ColumnModel"]] = relationship(  # noqa: F821
        "ColumnModel",
        back_populates="table",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    rows: Mapped[list["RowModel"]] = relationship(  # noqa: F821
        "RowModel",
        back_populates="table",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Table(id={self.id}, title={self.title})>"
