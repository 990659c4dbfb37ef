"""Table service for table lifecycle.

Handles creating, listing, renaming and deleting tables. Per-table work
(rows, columns, views) happens in a ``TableSession``.
"""

import uuid

from gridbase.core.config import Settings, get_settings
from gridbase.core.errors import EngineError, ErrorCode, StoreResult
from gridbase.core.logging import get_logger
from gridbase.domain.entities import Column, ColumnType, Table, utcnow
from gridbase.domain.record_store import RecordStore

logger = get_logger(__name__)

MAX_TITLE_LENGTH = 255


class TableService:
    """Service for table lifecycle operations."""

    def __init__(self, store: RecordStore, settings: Settings | None = None) -> None:
        """Initialize the service.

        Args:
            store: Record store backing the tables.
            settings: Optional settings; loaded from the environment if omitted.
        """
        self.store = store
        self.settings = settings or get_settings()

    @staticmethod
    def _invalid_title(title: object) -> StoreResult[Table] | None:
        if not isinstance(title, str) or not title.strip():
            return StoreResult.failure(ErrorCode.VALIDATION_ERROR, "Table title cannot be blank")
        if len(title) > MAX_TITLE_LENGTH:
            return StoreResult.failure(
                ErrorCode.VALIDATION_ERROR,
                f"Table title must be at most {MAX_TITLE_LENGTH} characters",
            )
        return None

    async def create_table(self, title: str | None = None, created_by: str = "") -> StoreResult[Table]:
        """Create a table with a single text column.

        Args:
            title: Table title; defaults to the configured default title.
            created_by: ID of the user creating the table.

        Returns:
            The created table, or the store's failure.
        """
        title = title if title is not None else self.settings.default_table_title
        invalid = self._invalid_title(title)
        if invalid:
            return invalid

        now = utcnow()
        table = Table(
            id=str(uuid.uuid4()),
            title=title,
            created_by=created_by or self.settings.default_user_id,
            created_at=now,
            updated_at=now,
        )
        first_column = Column(
            id=str(uuid.uuid4()),
            table_id=table.id,
            name="Name",
            type=ColumnType.TEXT,
            position=0,
        )

        result = await self.store.create_table(table, [first_column])
        if result.ok:
            logger.info("Table created", table_id=table.id, created_by=table.created_by)
        else:
            self._log_failure("create", result.error)
        return result

    async def list_tables(self) -> StoreResult[list[Table]]:
        """List tables, newest first."""
        return await self.store.list_tables()

    async def delete_table(self, table_id: str) -> StoreResult[None]:
        """Delete a table and everything in it."""
        result = await self.store.delete_table(table_id)
        if result.ok:
            logger.info("Table deleted", table_id=table_id)
        else:
            self._log_failure("delete", result.error, table_id=table_id)
        return result

    @staticmethod
    def _log_failure(operation: str, error: EngineError, **context: str) -> None:
        logger.warning(
            f"Table {operation} failed",
            code=error.code.value,
            error=error.message,
            **context,
        )
