"""Repository for column operations.

Provides CRUD operations for the table_columns table.
"""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from gridbase.infrastructure.persistence.models import ColumnModel


class ColumnRepository:
    """Repository for column database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, column: ColumnModel) -> ColumnModel:
        self.session.add(column)
        await self.session.flush()
        return column

    async def list_by_table(self, table_id: str) -> list[ColumnModel]:
        """List a table's columns ordered by position.

        Args:
            table_id: The table ID.

        Returns:
            Columns in ascending position order.
        """
        result = await self.session.execute(
            select(ColumnModel)
            .where(ColumnModel.table_id == table_id)
            .order_by(ColumnModel.position)
        )
        return list(result.scalars().all())

    async def get_many(self, table_id: str, column_ids: list[str]) -> dict[str, ColumnModel]:
        """Get the named columns of a table, keyed by ID.

        IDs that do not belong to the table are absent from the result.
        """
        result = await self.session.execute(
            select(ColumnModel).where(
                ColumnModel.table_id == table_id,
                ColumnModel.id.in_(column_ids),
            )
        )
        return {column.id: column for column in result.scalars().all()}

    async def update(self, column: ColumnModel) -> ColumnModel:
        if column not in self.session:
            self.session.add(column)
        await self.session.flush()
        return column

    async def delete(self, table_id: str, column_id: str) -> bool:
        """Delete a column.

        Returns:
            True if a column was deleted, False if none matched.
        """
        result = await self.session.execute(
            delete(ColumnModel).where(
                ColumnModel.table_id == table_id,
                ColumnModel.id == column_id,
            )
        )
        return result.rowcount > 0
