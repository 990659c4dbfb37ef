"""SQLAlchemy model for the table_columns table."""

from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gridbase.infrastructure.persistence.database import Base


class ColumnModel(Base):
    """SQLAlchemy model for the table_columns table.

    Attributes:
        id: Primary key (UUID string).
        table_id: Foreign key to tables table.
        name: Column display name.
        type: Column type (text, number, select, date, checkbox).
        position: Display order within the table; not unique.
        config: JSON-encoded column configuration (select options).
    """

    __tablename__ = "table_columns"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Column ID (UUID)",
    )
    table_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tables.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Foreign key to tables table",
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="text",
    )
    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )
    config: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="{}",
        comment="JSON column configuration",
    )

    # Relationships
    table: Mapped["TableModel"] = relationship(  # noqa: F821
        "TableModel",
        back_populates="columns",
    )

    __table_args__ = (Index("ix_table_columns_table_position", "table_id", "position"),)

    def __repr__(self) -> str:
        return f"<Column(id={self.id}, table_id={self.table_id}, name={self.name})>"
