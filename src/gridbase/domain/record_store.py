"""Record store adapter interface.

The engine reads and writes tables, columns and rows only through this
interface. Implementations hold no business logic; they serialize column
config and row data to whatever the backing store uses, and report every
outcome as a ``StoreResult`` rather than raising.

Every write that changes a table's columns or rows also bumps the table's
``updated_at`` within the same write.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from gridbase.core.errors import StoreResult
from gridbase.domain.entities import CellValue, Column, ColumnPatch, Row, Table


class RecordStore(ABC):
    """Abstract base class for record stores."""

    # Tables

    @abstractmethod
    async def create_table(self, table: Table, columns: list[Column]) -> StoreResult[Table]:
        """Insert a table together with its initial columns."""
        ...

    @abstractmethod
    async def list_tables(self) -> StoreResult[list[Table]]:
        """List all tables, newest first."""
        ...

    @abstractmethod
    async def get_table(self, table_id: str) -> StoreResult[Table]:
        """Get a table. Fails with NOT_FOUND when missing."""
        ...

    @abstractmethod
    async def rename_table(self, table_id: str, title: str) -> StoreResult[Table]:
        ...

    @abstractmethod
    async def delete_table(self, table_id: str) -> StoreResult[None]:
        """Delete a table with all of its columns and rows."""
        ...

    @abstractmethod
    async def touch_table(self, table_id: str) -> StoreResult[datetime]:
        """Bump ``updated_at`` and return the new value."""
        ...

    # Columns

    @abstractmethod
    async def list_columns(self, table_id: str) -> StoreResult[list[Column]]:
        """List a table's columns ordered by position."""
        ...

    @abstractmethod
    async def insert_column(self, column: Column) -> StoreResult[Column]:
        ...

    @abstractmethod
    async def batch_update_columns(
        self, table_id: str, patches: list[ColumnPatch]
    ) -> StoreResult[list[Column]]:
        """Apply all patches in one transaction, or none of them.

        Fails with NOT_FOUND if any patch names a column that is not in
        the table. Returns the updated columns in patch order.
        """
        ...

    @abstractmethod
    async def delete_column(self, table_id: str, column_id: str) -> StoreResult[None]:
        """Delete a column. Row data is left as is."""
        ...

    # Rows

    @abstractmethod
    async def list_rows(self, table_id: str) -> StoreResult[list[Row]]:
        """List a table's rows in creation order."""
        ...

    @abstractmethod
    async def insert_row(self, row: Row) -> StoreResult[Row]:
        ...

    @abstractmethod
    async def update_row(
        self, table_id: str, row_id: str, data: dict[str, CellValue]
    ) -> StoreResult[Row]:
        """Replace a row's entire data object."""
        ...

    @abstractmethod
    async def delete_row(self, table_id: str, row_id: str) -> StoreResult[None]:
        ...
