"""SQLAlchemy implementation of the record store.

Each call runs in its own session and transaction. Column config and row
data are stored as JSON text, so the schema stays fixed no matter which
columns a table has. Database errors and stored values that cannot be
read back are logged and reported as ``STORE_ERROR`` results; nothing is
partially committed.
"""

import json
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gridbase.core.errors import ErrorCode, StoreResult
from gridbase.core.logging import get_logger
from gridbase.domain.entities import CellValue, Column, ColumnPatch, ColumnType, Row, Table, utcnow
from gridbase.domain.record_store import RecordStore
from gridbase.domain.services.row_validator import RowDataValidator
from gridbase.infrastructure.persistence.database import DatabaseManager
from gridbase.infrastructure.persistence.models import ColumnModel, RowModel, TableModel
from gridbase.infrastructure.persistence.repositories import (
    ColumnRepository,
    RowRepository,
    TableRepository,
)

logger = get_logger(__name__)

T = TypeVar("T")


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class StoredDataError(ValueError):
    """Raised when a stored row or column cannot be read back."""


def _load_json(raw: str | None, what: str) -> dict[str, Any]:
    if not raw:
        return {}
    try:
        loaded = json.loads(raw)
    except ValueError as e:
        raise StoredDataError(f"{what} is not valid JSON: {e}") from e
    if not isinstance(loaded, dict):
        raise StoredDataError(f"{what} must be a JSON object, got {type(loaded).__name__}")
    return loaded


def _to_table(model: TableModel) -> Table:
    return Table(
        id=model.id,
        title=model.title,
        created_by=model.created_by,
        created_at=_aware(model.created_at),
        updated_at=_aware(model.updated_at),
    )


def _to_column(model: ColumnModel) -> Column:
    try:
        column_type = ColumnType(model.type)
    except ValueError as e:
        raise StoredDataError(f"Column '{model.id}' has unknown type {model.type!r}") from e
    return Column(
        id=model.id,
        table_id=model.table_id,
        name=model.name,
        type=column_type,
        position=model.position,
        config=_load_json(model.config, f"Config of column '{model.id}'"),
    )


def _to_row(model: RowModel) -> Row:
    data = _load_json(model.data, f"Data of row '{model.id}'")
    errors = RowDataValidator.validate_data(data)
    if errors:
        raise StoredDataError(f"Data of row '{model.id}' is invalid: {errors[0].message}")
    return Row(
        id=model.id,
        table_id=model.table_id,
        data=data,
        created_by=model.created_by,
        created_at=_aware(model.created_at),
        updated_at=_aware(model.updated_at),
    )


def _column_model(column: Column) -> ColumnModel:
    return ColumnModel(
        id=column.id,
        table_id=column.table_id,
        name=column.name,
        type=column.type.value,
        position=column.position,
        config=json.dumps(column.config),
    )


def _not_found(kind: str, **ids: str) -> StoreResult[Any]:
    ident = next(iter(ids.values()), "")
    return StoreResult.failure(ErrorCode.NOT_FOUND, f"{kind} '{ident}' not found", dict(ids))


class SqlRecordStore(RecordStore):
    """Record store backed by a SQLAlchemy async engine."""

    def __init__(self, db: DatabaseManager) -> None:
        """Initialize the store.

        Args:
            db: Database manager providing sessions.
        """
        self.db = db

    async def _run(
        self,
        operation: str,
        work: Callable[[AsyncSession], Awaitable[StoreResult[T]]],
        write: bool = False,
    ) -> StoreResult[T]:
        """Run ``work`` in one transaction.

        Writes are committed only when ``work`` succeeds; a failed result
        rolls the whole transaction back.
        """
        try:
            async with self.db.session() as session:
                result = await work(session)
                if write:
                    if result.ok:
                        await session.commit()
                    else:
                        await session.rollback()
                return result
        except SQLAlchemyError as e:
            logger.error("Record store operation failed", operation=operation, error=str(e))
            return StoreResult.failure(
                ErrorCode.STORE_ERROR,
                f"Database error during {operation}",
                {"operation": operation},
            )
        except StoredDataError as e:
            logger.error("Stored record is corrupt", operation=operation, error=str(e))
            return StoreResult.failure(
                ErrorCode.STORE_ERROR,
                f"Corrupt stored data during {operation}",
                {"operation": operation, "reason": str(e)},
            )

    # Tables

    async def create_table(self, table: Table, columns: list[Column]) -> StoreResult[Table]:
        async def work(session: AsyncSession) -> StoreResult[Table]:
            await TableRepository(session).create(
                TableModel(
                    id=table.id,
                    title=table.title,
                    created_by=table.created_by,
                    created_at=table.created_at,
                    updated_at=table.updated_at,
                )
            )
            column_repo = ColumnRepository(session)
            for column in columns:
                await column_repo.create(_column_model(column))
            return StoreResult.success(table)

        return await self._run("create_table", work, write=True)

    async def list_tables(self) -> StoreResult[list[Table]]:
        async def work(session: AsyncSession) -> StoreResult[list[Table]]:
            models = await TableRepository(session).list_all()
            return StoreResult.success([_to_table(m) for m in models])

        return await self._run("list_tables", work)

    async def get_table(self, table_id: str) -> StoreResult[Table]:
        async def work(session: AsyncSession) -> StoreResult[Table]:
            model = await TableRepository(session).get_by_id(table_id)
            if model is None:
                return _not_found("Table", table_id=table_id)
            return StoreResult.success(_to_table(model))

        return await self._run("get_table", work)

    async def rename_table(self, table_id: str, title: str) -> StoreResult[Table]:
        async def work(session: AsyncSession) -> StoreResult[Table]:
            model = await TableRepository(session).get_by_id(table_id)
            if model is None:
                return _not_found("Table", table_id=table_id)
            model.title = title
            model.updated_at = utcnow()
            await session.flush()
            return StoreResult.success(_to_table(model))

        return await self._run("rename_table", work, write=True)

    async def delete_table(self, table_id: str) -> StoreResult[None]:
        async def work(session: AsyncSession) -> StoreResult[None]:
            repo = TableRepository(session)
            if not await repo.exists(table_id):
                return _not_found("Table", table_id=table_id)
            await repo.delete(table_id)
            return StoreResult.success()

        return await self._run("delete_table", work, write=True)

    async def touch_table(self, table_id: str) -> StoreResult[datetime]:
        async def work(session: AsyncSession) -> StoreResult[datetime]:
            repo = TableRepository(session)
            if not await repo.exists(table_id):
                return _not_found("Table", table_id=table_id)
            now = utcnow()
            await repo.touch(table_id, now)
            return StoreResult.success(now)

        return await self._run("touch_table", work, write=True)

    # Columns

    async def list_columns(self, table_id: str) -> StoreResult[list[Column]]:
        async def work(session: AsyncSession) -> StoreResult[list[Column]]:
            models = await ColumnRepository(session).list_by_table(table_id)
            return StoreResult.success([_to_column(m) for m in models])

        return await self._run("list_columns", work)

    async def insert_column(self, column: Column) -> StoreResult[Column]:
        async def work(session: AsyncSession) -> StoreResult[Column]:
            tables = TableRepository(session)
            if not await tables.exists(column.table_id):
                return _not_found("Table", table_id=column.table_id)
            model = await ColumnRepository(session).create(_column_model(column))
            await tables.touch(column.table_id, utcnow())
            return StoreResult.success(_to_column(model))

        return await self._run("insert_column", work, write=True)

    async def batch_update_columns(
        self, table_id: str, patches: list[ColumnPatch]
    ) -> StoreResult[list[Column]]:
        async def work(session: AsyncSession) -> StoreResult[list[Column]]:
            repo = ColumnRepository(session)
            existing = await repo.get_many(table_id, [p.id for p in patches])
            missing = [p.id for p in patches if p.id not in existing]
            if missing:
                return StoreResult.failure(
                    ErrorCode.NOT_FOUND,
                    f"Column '{missing[0]}' not found",
                    {"table_id": table_id, "column_ids": missing},
                )

            updated = []
            for patch in patches:
                model = existing[patch.id]
                if patch.name is not None:
                    model.name = patch.name
                if patch.type is not None:
                    model.type = patch.type.value
                if patch.position is not None:
                    model.position = patch.position
                if patch.config is not None:
                    model.config = json.dumps(patch.config)
                await repo.update(model)
                updated.append(_to_column(model))

            await TableRepository(session).touch(table_id, utcnow())
            return StoreResult.success(updated)

        return await self._run("batch_update_columns", work, write=True)

    async def delete_column(self, table_id: str, column_id: str) -> StoreResult[None]:
        async def work(session: AsyncSession) -> StoreResult[None]:
            if not await ColumnRepository(session).delete(table_id, column_id):
                return _not_found("Column", column_id=column_id, table_id=table_id)
            await TableRepository(session).touch(table_id, utcnow())
            return StoreResult.success()

        return await self._run("delete_column", work, write=True)

    # Rows

    async def list_rows(self, table_id: str) -> StoreResult[list[Row]]:
        async def work(session: AsyncSession) -> StoreResult[list[Row]]:
            models = await RowRepository(session).list_by_table(table_id)
            return StoreResult.success([_to_row(m) for m in models])

        return await self._run("list_rows", work)

    async def insert_row(self, row: Row) -> StoreResult[Row]:
        invalid = self._invalid_data(row.data)
        if invalid:
            return invalid

        async def work(session: AsyncSession) -> StoreResult[Row]:
            tables = TableRepository(session)
            if not await tables.exists(row.table_id):
                return _not_found("Table", table_id=row.table_id)
            model = await RowRepository(session).create(
                RowModel(
                    id=row.id,
                    table_id=row.table_id,
                    data=json.dumps(row.data),
                    created_by=row.created_by,
                    created_at=row.created_at,
                    updated_at=row.updated_at,
                )
            )
            await tables.touch(row.table_id, row.updated_at)
            return StoreResult.success(_to_row(model))

        return await self._run("insert_row", work, write=True)

    async def update_row(
        self, table_id: str, row_id: str, data: dict[str, CellValue]
    ) -> StoreResult[Row]:
        invalid = self._invalid_data(data)
        if invalid:
            return invalid

        async def work(session: AsyncSession) -> StoreResult[Row]:
            repo = RowRepository(session)
            model = await repo.get(table_id, row_id)
            if model is None:
                return _not_found("Row", row_id=row_id, table_id=table_id)
            now = utcnow()
            model.data = json.dumps(data)
            model.updated_at = now
            await repo.update(model)
            await TableRepository(session).touch(table_id, now)
            return StoreResult.success(_to_row(model))

        return await self._run("update_row", work, write=True)

    async def delete_row(self, table_id: str, row_id: str) -> StoreResult[None]:
        async def work(session: AsyncSession) -> StoreResult[None]:
            if not await RowRepository(session).delete(table_id, row_id):
                return _not_found("Row", row_id=row_id, table_id=table_id)
            await TableRepository(session).touch(table_id, utcnow())
            return StoreResult.success()

        return await self._run("delete_row", work, write=True)

    @staticmethod
    def _invalid_data(data: Any) -> StoreResult[Any] | None:
        errors = RowDataValidator.validate_data(data)
        if not errors:
            return None
        return StoreResult.failure(
            ErrorCode.VALIDATION_ERROR,
            "Invalid row data",
            {"errors": [e.to_dict() for e in errors]},
        )
