"""Board operations on top of a table session.

The board is a kanban view over one select column. Moving a row between
buckets is a row data write; adding, editing, deleting and reordering
buckets are writes of the column's option list. Every write goes through
the session, so the session cache and the store stay in step.
"""

import uuid
from collections.abc import Callable
from typing import Any

from gridbase.core.errors import EngineError, ErrorCode, GridbaseError, StoreResult
from gridbase.core.logging import get_logger
from gridbase.domain.entities import UNCATEGORIZED, Board, Column, Row, SelectOption
from gridbase.domain.services.board_engine import (
    append_option,
    cell_value_for_bucket,
    remove_option,
    reorder_options,
    replace_option,
    resolve_group_column,
)
from gridbase.domain.services.table_session import TableSession

logger = get_logger(__name__)


class BoardService:
    """Kanban operations for one session and one group-by column."""

    def __init__(self, session: TableSession, column_id: str | None = None) -> None:
        """Initialize the board service.

        Args:
            session: An open table session.
            column_id: Group-by column; defaults to the session's choice,
                then to the first select column.
        """
        self.session = session
        self.column_id = column_id

    def _column(self) -> Column:
        return resolve_group_column(
            self.session.columns, self.column_id or self.session.group_column_id
        )

    def board(self) -> Board:
        """Current grouping of the session's cached rows."""
        return self.session.board(self.column_id)

    async def move_row(self, row_id: str, bucket_key: str) -> StoreResult[Row]:
        """Move a row into a bucket by rewriting its group cell.

        Moving into the uncategorized bucket clears the cell.
        """
        try:
            column = self._column()
        except GridbaseError as e:
            return self.session.record_failure(e.error)

        row = self.session.get_row(row_id)
        if row is None:
            return self._fail(ErrorCode.NOT_FOUND, f"Row '{row_id}' not found", row_id=row_id)
        if bucket_key != UNCATEGORIZED and bucket_key not in column.option_ids():
            return self._fail(
                ErrorCode.NOT_FOUND, f"Bucket '{bucket_key}' not found", bucket_key=bucket_key
            )

        data = {**row.data, column.id: cell_value_for_bucket(bucket_key)}
        result = await self.session.update_row(row_id, data)
        if result.ok:
            logger.info(
                "Row moved",
                table_id=self.session.table_id,
                row_id=row_id,
                column_id=column.id,
                bucket=bucket_key,
            )
        return result

    async def add_row_to_bucket(self, bucket_key: str) -> StoreResult[Row]:
        """Create a row that starts in ``bucket_key``."""
        try:
            column = self._column()
        except GridbaseError as e:
            return self.session.record_failure(e.error)

        if bucket_key != UNCATEGORIZED and bucket_key not in column.option_ids():
            return self._fail(
                ErrorCode.NOT_FOUND, f"Bucket '{bucket_key}' not found", bucket_key=bucket_key
            )
        return await self.session.add_row({column.id: cell_value_for_bucket(bucket_key)})

    async def add_bucket(self, label: str, color: str | None = None) -> StoreResult[SelectOption]:
        """Append a new option to the group column."""
        if not isinstance(label, str) or not label.strip():
            return self._fail(ErrorCode.VALIDATION_ERROR, "Bucket label cannot be blank")

        option = SelectOption(
            id=str(uuid.uuid4()),
            label=label,
            color=color or self.session.settings.default_bucket_color,
        )
        result = await self._edit_options(lambda options: append_option(options, option))
        if not result.ok:
            return StoreResult.from_error(result.error)
        return StoreResult.success(option)

    async def update_bucket(
        self, option_id: str, label: str | None = None, color: str | None = None
    ) -> StoreResult[Column]:
        """Change an option's label and/or color in one write."""
        if label is not None and (not isinstance(label, str) or not label.strip()):
            return self._fail(ErrorCode.VALIDATION_ERROR, "Bucket label cannot be blank")
        return await self._edit_options(
            lambda options: replace_option(options, option_id, label=label, color=color)
        )

    async def rename_bucket(self, option_id: str, label: str) -> StoreResult[Column]:
        return await self.update_bucket(option_id, label=label)

    async def recolor_bucket(self, option_id: str, color: str) -> StoreResult[Column]:
        return await self.update_bucket(option_id, color=color)

    async def delete_bucket(self, option_id: str) -> StoreResult[Column]:
        """Remove an option. Rows holding it fall into uncategorized."""
        return await self._edit_options(lambda options: remove_option(options, option_id))

    async def reorder_buckets(self, dragged_id: str, target_id: str) -> StoreResult[Column]:
        """Move the dragged option to the target option's position."""
        return await self._edit_options(
            lambda options: reorder_options(options, dragged_id, target_id)
        )

    async def _edit_options(
        self, edit: Callable[[list[SelectOption]], list[SelectOption]]
    ) -> StoreResult[Column]:
        try:
            column = self._column()
            options = edit(column.options)
        except GridbaseError as e:
            return self.session.record_failure(e.error)

        config = column.with_options(options).config
        return await self.session.update_column(column.id, config=config)

    def _fail(self, code: ErrorCode, message: str, **details: Any) -> StoreResult[Any]:
        return self.session.record_failure(EngineError(code=code, message=message, details=details))
