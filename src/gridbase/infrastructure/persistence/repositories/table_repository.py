"""Repository for table operations.

Provides CRUD operations for the tables table.
"""

from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from gridbase.infrastructure.persistence.models import ColumnModel, RowModel, TableModel


class TableRepository:
    """Repository for table database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, table: TableModel) -> TableModel:
        self.session.add(table)
        await self.session.flush()
        return table

    async def get_by_id(self, table_id: str) -> TableModel | None:
        """Get a table by ID.

        Args:
            table_id: The table ID.

        Returns:
            The table model if found, None otherwise.
        """
        result = await self.session.execute(select(TableModel).where(TableModel.id == table_id))
        return result.scalar_one_or_none()

    async def list_all(self) -> list[TableModel]:
        """List all tables, newest first."""
        result = await self.session.execute(
            select(TableModel).order_by(TableModel.created_at.desc(), TableModel.id)
        )
        return list(result.scalars().all())

    async def exists(self, table_id: str) -> bool:
        result = await self.session.execute(
            select(TableModel.id).where(TableModel.id == table_id).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def touch(self, table_id: str, at: datetime) -> None:
        """Set a table's ``updated_at``."""
        await self.session.execute(
            update(TableModel).where(TableModel.id == table_id).values(updated_at=at)
        )

    async def delete(self, table_id: str) -> None:
        """Delete a table with its columns and rows.

        Children are removed explicitly so the delete does not depend on
        the database enforcing ON DELETE CASCADE.
        """
        await self.session.execute(delete(RowModel).where(RowModel.table_id == table_id))
        await self.session.execute(delete(ColumnModel).where(ColumnModel.table_id == table_id))
        await self.session.execute(delete(TableModel).where(TableModel.id == table_id))
