"""Table session: the cached state of one open table.

A ``TableSession`` is an explicit context object, one per open table. It
loads the table's columns and rows once, serves derived views from that
cache, and writes every mutation through the record store. A mutation is
folded into the cache only after the store acknowledges it; when the store
reports a failure the cache is left exactly as it was and the error is
returned (and kept on ``last_error``) for the caller to show.

Filters, sort and the chosen group-by column are local view state. They
are never persisted and are dropped by ``open`` and ``close``.
"""

import uuid
from collections.abc import Awaitable, Sequence
from dataclasses import asdict
from datetime import datetime
from typing import Any, TypeVar

from gridbase.core.config import Settings, get_settings
from gridbase.core.errors import EngineError, ErrorCode, StoreResult
from gridbase.core.logging import get_logger
from gridbase.domain.entities import (
    Board,
    CellValue,
    Column,
    ColumnPatch,
    ColumnType,
    Filter,
    Row,
    SortSpec,
    Table,
    utcnow,
)
from gridbase.domain.record_store import RecordStore
from gridbase.domain.services.board_engine import group_rows, resolve_group_column
from gridbase.domain.services.column_validator import ColumnValidator
from gridbase.domain.services.row_validator import RowDataValidator
from gridbase.domain.services.view_engine import apply_view

logger = get_logger(__name__)

T = TypeVar("T")


def _ordered(columns: Sequence[Column]) -> list[Column]:
    # stable, so equal positions keep insertion order
    return sorted(columns, key=lambda column: column.position)


class TableSession:
    """In-memory state and write-through mutations for one table."""

    def __init__(
        self,
        store: RecordStore,
        user_id: str | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize an empty (closed) session.

        Args:
            store: Record store used for all reads and writes.
            user_id: Acting user, recorded as ``created_by`` on new rows.
            settings: Optional settings; loaded from the environment if omitted.
        """
        self.store = store
        self.settings = settings or get_settings()
        self.user_id = user_id or self.settings.default_user_id

        self.table: Table | None = None
        self.columns: list[Column] = []
        self.rows: list[Row] = []
        self.filters: list[Filter] = []
        self.sort = SortSpec()
        self.group_column_id: str | None = None
        self.saving = False
        self.last_error: EngineError | None = None

    @property
    def is_open(self) -> bool:
        return self.table is not None

    @property
    def table_id(self) -> str | None:
        return self.table.id if self.table else None

    # Lifecycle

    async def open(self, table_id: str) -> StoreResult[Table]:
        """Load a table, replacing all session state.

        Filters, sort and group column are reset. If any read fails the
        previous state is kept.
        """
        loaded = await self._load(table_id)
        if not loaded.ok:
            return self.record_failure(loaded.error)

        table, columns, rows = loaded.value
        self.table = table
        self.columns = _ordered(columns)
        self.rows = rows
        self.filters = []
        self.sort = SortSpec()
        self.group_column_id = None
        self.last_error = None

        logger.info(
            "Table session opened",
            table_id=table_id,
            column_count=len(self.columns),
            row_count=len(self.rows),
        )
        return StoreResult.success(table)

    async def refresh(self) -> StoreResult[Table]:
        """Reload columns and rows, keeping filters, sort and group column."""
        if not self.is_open:
            return self._not_open()

        loaded = await self._load(self.table.id)
        if not loaded.ok:
            return self.record_failure(loaded.error)

        self.table, columns, self.rows = loaded.value
        self.columns = _ordered(columns)
        return StoreResult.success(self.table)

    def close(self) -> None:
        """Discard all session state."""
        if self.table is not None:
            logger.debug("Table session closed", table_id=self.table.id)
        self.table = None
        self.columns = []
        self.rows = []
        self.filters = []
        self.sort = SortSpec()
        self.group_column_id = None
        self.saving = False
        self.last_error = None

    async def _load(self, table_id: str) -> StoreResult[tuple[Table, list[Column], list[Row]]]:
        table = await self.store.get_table(table_id)
        if not table.ok:
            return StoreResult.from_error(table.error)
        columns = await self.store.list_columns(table_id)
        if not columns.ok:
            return StoreResult.from_error(columns.error)
        rows = await self.store.list_rows(table_id)
        if not rows.ok:
            return StoreResult.from_error(rows.error)
        return StoreResult.success((table.value, columns.value, rows.value))

    # Reads

    def get_column(self, column_id: str) -> Column | None:
        return next((c for c in self.columns if c.id == column_id), None)

    def get_row(self, row_id: str) -> Row | None:
        return next((r for r in self.rows if r.id == row_id), None)

    def visible_rows(self) -> list[Row]:
        """Rows after the active filters and sort."""
        return apply_view(self.rows, self.columns, self.filters, self.sort)

    def board(self, column_id: str | None = None) -> Board:
        """Group all cached rows by a select column.

        Raises:
            NoGroupColumnError: If no eligible select column exists.
            NotFoundError: If ``column_id`` names no column.
        """
        column = resolve_group_column(self.columns, column_id or self.group_column_id)
        return group_rows(self.rows, column)

    # Local view state

    def set_sort(self, column_id: str | None) -> None:
        self.sort = SortSpec(column_id=column_id, direction=self.sort.direction)

    def toggle_sort_direction(self) -> None:
        self.sort = self.sort.toggled()

    def add_filter(self, filter_: Filter) -> None:
        self.filters = [*self.filters, filter_]

    def remove_filter(self, index: int) -> None:
        """Remove the filter at ``index``; out-of-range indexes are ignored."""
        self.filters = [f for i, f in enumerate(self.filters) if i != index]

    def clear_filters(self) -> None:
        self.filters = []

    def set_group_column(self, column_id: str | None) -> None:
        self.group_column_id = column_id

    # Row mutations

    async def add_row(self, initial_data: dict[str, CellValue] | None = None) -> StoreResult[Row]:
        """Create a row, optionally with initial cell values."""
        if not self.is_open:
            return self._not_open()

        data = dict(initial_data or {})
        invalid = self._invalid_row_data(data)
        if invalid:
            return invalid

        now = utcnow()
        row = Row(
            id=str(uuid.uuid4()),
            table_id=self.table.id,
            data=data,
            created_by=self.user_id,
            created_at=now,
            updated_at=now,
        )
        result = await self._write(self.store.insert_row(row))
        if not result.ok:
            return self.record_failure(result.error)

        self.rows = [*self.rows, result.value]
        self._touch(result.value.updated_at)
        logger.info("Row added", table_id=self.table.id, row_id=row.id)
        return result

    async def update_row(self, row_id: str, data: dict[str, CellValue]) -> StoreResult[Row]:
        """Replace a row's entire data object.

        Callers merge edits into the current data before calling; there
        is no per-cell patch, and concurrent writers resolve by last
        write wins.
        """
        if not self.is_open:
            return self._not_open()

        invalid = self._invalid_row_data(data)
        if invalid:
            return invalid

        result = await self._write(self.store.update_row(self.table.id, row_id, dict(data)))
        if not result.ok:
            return self.record_failure(result.error)

        updated = result.value
        if self.get_row(row_id) is None:
            self.rows = [*self.rows, updated]
        else:
            self.rows = [updated if r.id == row_id else r for r in self.rows]
        self._touch(updated.updated_at)
        logger.info("Row updated", table_id=self.table.id, row_id=row_id)
        return result

    async def update_cell(self, row_id: str, column_id: str, value: CellValue) -> StoreResult[Row]:
        """Set one cell by merging into the cached row data and writing it whole."""
        if not self.is_open:
            return self._not_open()
        row = self.get_row(row_id)
        if row is None:
            return self._fail(ErrorCode.NOT_FOUND, f"Row '{row_id}' not found", row_id=row_id)
        return await self.update_row(row_id, {**row.data, column_id: value})

    async def delete_row(self, row_id: str) -> StoreResult[None]:
        if not self.is_open:
            return self._not_open()

        result = await self._write(self.store.delete_row(self.table.id, row_id))
        if not result.ok:
            return self.record_failure(result.error)

        self.rows = [r for r in self.rows if r.id != row_id]
        self._touch()
        logger.info("Row deleted", table_id=self.table.id, row_id=row_id)
        return result

    # Column mutations

    async def add_column(
        self,
        name: str | None = None,
        column_type: ColumnType | str | None = None,
        config: dict[str, Any] | None = None,
    ) -> StoreResult[Column]:
        """Append a column after the current last position."""
        if not self.is_open:
            return self._not_open()

        errors = ColumnValidator.validate_new_column(name, column_type, config)
        if errors:
            return self._fail(
                ErrorCode.VALIDATION_ERROR,
                "Invalid column definition",
                errors=[e.to_dict() for e in errors],
            )

        position = max((c.position for c in self.columns), default=-1) + 1
        column = Column(
            id=str(uuid.uuid4()),
            table_id=self.table.id,
            name=name if name is not None else self.settings.default_column_name,
            type=ColumnType(column_type.lower()) if column_type is not None else ColumnType.TEXT,
            position=position,
            config=dict(config or {}),
        )
        result = await self._write(self.store.insert_column(column))
        if not result.ok:
            return self.record_failure(result.error)

        self.columns = _ordered([*self.columns, result.value])
        self._touch()
        logger.info(
            "Column added",
            table_id=self.table.id,
            column_id=column.id,
            column_type=column.type.value,
            position=position,
        )
        return result

    async def update_columns(
        self, patches: Sequence[ColumnPatch | dict[str, Any]]
    ) -> StoreResult[list[Column]]:
        """Apply a batch of partial column updates atomically.

        Either every patch is written and folded into the cache, or none
        is. Changing a column's type leaves row values untouched.
        """
        if not self.is_open:
            return self._not_open()

        raw = [asdict(p) if isinstance(p, ColumnPatch) else p for p in patches]
        errors = ColumnValidator.validate_patches(raw)
        if errors:
            return self._fail(
                ErrorCode.VALIDATION_ERROR,
                "Invalid column update",
                errors=[e.to_dict() for e in errors],
            )

        typed = [ColumnValidator.to_patch(p) for p in raw]
        result = await self._write(self.store.batch_update_columns(self.table.id, typed))
        if not result.ok:
            return self.record_failure(result.error)

        updated = {column.id: column for column in result.value}
        self.columns = _ordered([updated.get(c.id, c) for c in self.columns])
        self._touch()
        logger.info(
            "Columns updated",
            table_id=self.table.id,
            column_ids=list(updated.keys()),
        )
        return result

    async def update_column(
        self,
        column_id: str,
        name: str | None = None,
        column_type: ColumnType | str | None = None,
        position: int | None = None,
        config: dict[str, Any] | None = None,
    ) -> StoreResult[Column]:
        """Update a single column through the batch path."""
        patch = {
            "id": column_id,
            "name": name,
            "type": column_type,
            "position": position,
            "config": config,
        }
        result = await self.update_columns([patch])
        if not result.ok:
            return StoreResult.from_error(result.error)
        return StoreResult.success(result.value[0])

    async def delete_column(self, column_id: str) -> StoreResult[None]:
        """Delete a column. Rows keep their values for it."""
        if not self.is_open:
            return self._not_open()

        result = await self._write(self.store.delete_column(self.table.id, column_id))
        if not result.ok:
            return self.record_failure(result.error)

        self.columns = [c for c in self.columns if c.id != column_id]
        if self.group_column_id == column_id:
            self.group_column_id = None
        self._touch()
        logger.info("Column deleted", table_id=self.table.id, column_id=column_id)
        return result

    # Table mutations

    async def rename_table(self, title: str) -> StoreResult[Table]:
        if not self.is_open:
            return self._not_open()
        if not isinstance(title, str) or not title.strip():
            return self._fail(ErrorCode.VALIDATION_ERROR, "Table title cannot be blank")

        result = await self._write(self.store.rename_table(self.table.id, title))
        if not result.ok:
            return self.record_failure(result.error)

        self.table = result.value
        logger.info("Table renamed", table_id=self.table.id)
        return result

    # Helpers

    def record_failure(self, error: EngineError) -> StoreResult[Any]:
        """Remember and log a failed operation, returning it as a result."""
        self.last_error = error
        logger.warning(
            "Table operation failed",
            table_id=self.table_id,
            code=error.code.value,
            error=error.message,
        )
        return StoreResult.from_error(error)

    def _fail(self, code: ErrorCode, message: str, **details: Any) -> StoreResult[Any]:
        return self.record_failure(EngineError(code=code, message=message, details=details))

    def _not_open(self) -> StoreResult[Any]:
        return self._fail(ErrorCode.VALIDATION_ERROR, "No table is open in this session")

    def _invalid_row_data(self, data: Any) -> StoreResult[Any] | None:
        errors = RowDataValidator.validate_data(data)
        if not errors:
            return None
        return self._fail(
            ErrorCode.VALIDATION_ERROR,
            "Invalid row data",
            errors=[e.to_dict() for e in errors],
        )

    async def _write(self, call: Awaitable[StoreResult[T]]) -> StoreResult[T]:
        self.saving = True
        try:
            result = await call
        finally:
            self.saving = False
        if result.ok:
            self.last_error = None
        return result

    def _touch(self, at: datetime | None = None) -> None:
        if self.table is not None:
            self.table.updated_at = at or utcnow()
