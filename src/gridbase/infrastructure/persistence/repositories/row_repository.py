"""Repository for row operations.

Provides CRUD operations for the table_rows table.
"""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from gridbase.infrastructure.persistence.models import RowModel


class RowRepository:
    """Repository for row database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, row: RowModel) -> RowModel:
        self.session.add(row)
        await self.session.flush()
        return row

    async def get(self, table_id: str, row_id: str) -> RowModel | None:
        result = await self.session.execute(
            select(RowModel).where(RowModel.table_id == table_id, RowModel.id == row_id)
        )
        return result.scalar_one_or_none()

    async def list_by_table(self, table_id: str) -> list[RowModel]:
        """List a table's rows in creation order."""
        result = await self.session.execute(
            select(RowModel)
            .where(RowModel.table_id == table_id)
            .order_by(RowModel.created_at, RowModel.id)
        )
        return list(result.scalars().all())

    async def update(self, row: RowModel) -> RowModel:
        if row not in self.session:
            self.session.add(row)
        await self.session.flush()
        return row

    async def delete(self, table_id: str, row_id: str) -> bool:
        """Delete a row.

        Returns:
            True if a row was deleted, False if none matched.
        """
        result = await self.session.execute(
            delete(RowModel).where(RowModel.table_id == table_id, RowModel.id == row_id)
        )
        return result.rowcount > 0
