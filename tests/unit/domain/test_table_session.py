"""Unit tests for TableSession with a mocked record store."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from gridbase.core.errors import ErrorCode, NoGroupColumnError, StoreResult
from gridbase.domain.entities import (
    ColumnType,
    Filter,
    FilterOperator,
    Row,
    SortDirection,
    Table,
)
from gridbase.domain.record_store import RecordStore
from gridbase.domain.services.table_session import TableSession

EARLY = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def columns(make_column, status_options):
    return [
        make_column("status", ColumnType.SELECT, 1, options=status_options),
        make_column("name", ColumnType.TEXT, 0),
    ]


@pytest.fixture
def rows(make_row):
    return [
        make_row("r1", name="b", status="todo"),
        make_row("r2", name="a", status="done"),
    ]


@pytest.fixture
def mock_store(columns, rows):
    store = AsyncMock(spec=RecordStore)
    store.get_table.return_value = StoreResult.success(
        Table(id="t1", title="Tasks", created_by="u1", created_at=EARLY, updated_at=EARLY)
    )
    store.list_columns.return_value = StoreResult.success(columns)
    store.list_rows.return_value = StoreResult.success(rows)
    return store


@pytest_asyncio.fixture
async def session(mock_store, settings):
    session = TableSession(mock_store, user_id="u1", settings=settings)
    await session.open("t1")
    return session


def store_failure(code=ErrorCode.STORE_ERROR, message="Database error"):
    return StoreResult.failure(code, message)


class TestOpen:
    @pytest.mark.asyncio
    async def test_open_loads_and_orders_columns(self, session):
        assert session.is_open
        assert [c.id for c in session.columns] == ["name", "status"]
        assert [r.id for r in session.rows] == ["r1", "r2"]

    @pytest.mark.asyncio
    async def test_open_failure_keeps_session_closed(self, mock_store, settings):
        mock_store.get_table.return_value = store_failure(ErrorCode.NOT_FOUND, "Table 't9' not found")
        session = TableSession(mock_store, settings=settings)

        result = await session.open("t9")

        assert result.ok is False
        assert result.error.code == ErrorCode.NOT_FOUND
        assert session.is_open is False
        assert session.last_error == result.error

    @pytest.mark.asyncio
    async def test_open_resets_view_state(self, session):
        session.add_filter(Filter("name", FilterOperator.EQUALS, "a"))
        session.set_sort("name")
        session.set_group_column("status")

        await session.open("t1")

        assert session.filters == []
        assert session.sort.column_id is None
        assert session.group_column_id is None

    @pytest.mark.asyncio
    async def test_close_clears_state(self, session):
        session.close()
        assert session.table is None
        assert session.rows == []
        assert session.columns == []


class TestMutationsWithoutTable:
    @pytest.mark.asyncio
    async def test_mutation_before_open_is_rejected(self, mock_store, settings):
        session = TableSession(mock_store, settings=settings)

        result = await session.add_row()

        assert result.error.code == ErrorCode.VALIDATION_ERROR
        mock_store.insert_row.assert_not_called()


class TestRowMutations:
    @pytest.mark.asyncio
    async def test_add_row_success_appends_and_touches(self, session, mock_store):
        mock_store.insert_row.side_effect = lambda row: StoreResult.success(row)

        result = await session.add_row({"name": "c"})

        assert result.ok
        assert session.rows[-1].data == {"name": "c"}
        assert session.rows[-1].created_by == "u1"
        assert session.table.updated_at > EARLY
        assert session.saving is False

    @pytest.mark.asyncio
    async def test_add_row_failure_leaves_cache(self, session, mock_store):
        mock_store.insert_row.return_value = store_failure()

        result = await session.add_row({"name": "c"})

        assert result.ok is False
        assert [r.id for r in session.rows] == ["r1", "r2"]
        assert session.last_error.code == ErrorCode.STORE_ERROR
        assert session.table.updated_at == EARLY

    @pytest.mark.asyncio
    async def test_add_row_rejects_non_scalar_values(self, session, mock_store):
        result = await session.add_row({"name": ["a", "b"]})

        assert result.error.code == ErrorCode.VALIDATION_ERROR
        mock_store.insert_row.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_row_failure_leaves_cache(self, session, mock_store):
        mock_store.update_row.return_value = store_failure()

        await session.update_row("r1", {"name": "changed"})

        assert session.get_row("r1").data == {"name": "b", "status": "todo"}

    @pytest.mark.asyncio
    async def test_update_row_replaces_data(self, session, mock_store):
        mock_store.update_row.side_effect = lambda table_id, row_id, data: StoreResult.success(
            Row(id=row_id, table_id=table_id, data=data)
        )

        await session.update_row("r1", {"name": "only"})

        assert session.get_row("r1").data == {"name": "only"}

    @pytest.mark.asyncio
    async def test_update_cell_merges_into_row(self, session, mock_store):
        mock_store.update_row.side_effect = lambda table_id, row_id, data: StoreResult.success(
            Row(id=row_id, table_id=table_id, data=data)
        )

        await session.update_cell("r1", "status", "doing")

        mock_store.update_row.assert_awaited_once_with("t1", "r1", {"name": "b", "status": "doing"})

    @pytest.mark.asyncio
    async def test_delete_row_failure_keeps_row(self, session, mock_store):
        mock_store.delete_row.return_value = store_failure(ErrorCode.NOT_FOUND, "gone")

        result = await session.delete_row("r1")

        assert result.error.code == ErrorCode.NOT_FOUND
        assert session.get_row("r1") is not None


class TestColumnMutations:
    @pytest.mark.asyncio
    async def test_add_column_goes_after_last_position(self, session, mock_store):
        mock_store.insert_column.side_effect = lambda column: StoreResult.success(column)

        result = await session.add_column()

        assert result.value.position == 2
        assert result.value.name == "New Column"
        assert result.value.type == ColumnType.TEXT
        assert session.columns[-1].id == result.value.id

    @pytest.mark.asyncio
    async def test_add_column_invalid_type(self, session, mock_store):
        result = await session.add_column(name="X", column_type="formula")

        assert result.error.code == ErrorCode.VALIDATION_ERROR
        mock_store.insert_column.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_columns_failure_changes_nothing(self, session, mock_store):
        mock_store.batch_update_columns.return_value = store_failure(
            ErrorCode.NOT_FOUND, "Column 'ghost' not found"
        )
        before = [(c.id, c.name, c.position) for c in session.columns]

        result = await session.update_columns(
            [{"id": "name", "name": "Title"}, {"id": "ghost", "name": "x"}]
        )

        assert result.error.code == ErrorCode.NOT_FOUND
        assert [(c.id, c.name, c.position) for c in session.columns] == before

    @pytest.mark.asyncio
    async def test_update_columns_empty_batch(self, session, mock_store):
        result = await session.update_columns([])

        assert result.error.code == ErrorCode.VALIDATION_ERROR
        mock_store.batch_update_columns.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_columns_reorders_cache(self, session, mock_store):
        async def apply(table_id, patches):
            current = {c.id: c for c in session.columns}
            return StoreResult.success([p.apply(current[p.id]) for p in patches])

        mock_store.batch_update_columns.side_effect = apply

        await session.update_columns([{"id": "status", "position": 0}, {"id": "name", "position": 1}])

        assert [c.id for c in session.columns] == ["status", "name"]

    @pytest.mark.asyncio
    async def test_delete_group_column_resets_choice(self, session, mock_store):
        mock_store.delete_column.return_value = StoreResult.success()
        session.set_group_column("status")

        await session.delete_column("status")

        assert session.group_column_id is None
        assert [c.id for c in session.columns] == ["name"]


class TestViewState:
    @pytest.mark.asyncio
    async def test_visible_rows_apply_filters_and_sort(self, session):
        session.set_sort("name")
        assert [r.id for r in session.visible_rows()] == ["r2", "r1"]

        session.toggle_sort_direction()
        assert session.sort.direction == SortDirection.DESC
        assert [r.id for r in session.visible_rows()] == ["r1", "r2"]

        session.add_filter(Filter("status", FilterOperator.EQUALS, "done"))
        assert [r.id for r in session.visible_rows()] == ["r2"]

    @pytest.mark.asyncio
    async def test_set_sort_keeps_direction(self, session):
        session.toggle_sort_direction()
        session.set_sort("name")
        assert session.sort.direction == SortDirection.DESC

    @pytest.mark.asyncio
    async def test_remove_filter_by_index(self, session):
        session.add_filter(Filter("name", FilterOperator.IS_EMPTY))
        session.add_filter(Filter("name", FilterOperator.IS_NOT_EMPTY))

        session.remove_filter(0)
        session.remove_filter(7)

        assert [f.operator for f in session.filters] == [FilterOperator.IS_NOT_EMPTY]

        session.clear_filters()
        assert session.filters == []

    @pytest.mark.asyncio
    async def test_view_state_is_never_written(self, session, mock_store):
        session.add_filter(Filter("name", FilterOperator.IS_EMPTY))
        session.set_sort("name")
        session.set_group_column("status")

        for method in ("insert_row", "update_row", "batch_update_columns", "rename_table"):
            getattr(mock_store, method).assert_not_called()

    @pytest.mark.asyncio
    async def test_board_uses_group_column(self, session):
        board = session.board()
        assert board.column.id == "status"
        assert [r.id for r in board.bucket("todo").rows] == ["r1"]

    @pytest.mark.asyncio
    async def test_board_without_select_column(self, session):
        session.columns = [c for c in session.columns if c.type != ColumnType.SELECT]
        with pytest.raises(NoGroupColumnError):
            session.board()


class TestRenameTable:
    @pytest.mark.asyncio
    async def test_blank_title_rejected(self, session, mock_store):
        result = await session.rename_table("  ")
        assert result.error.code == ErrorCode.VALIDATION_ERROR
        mock_store.rename_table.assert_not_called()

    @pytest.mark.asyncio
    async def test_rename_updates_cached_table(self, session, mock_store):
        mock_store.rename_table.return_value = StoreResult.success(
            Table(id="t1", title="Renamed", created_by="u1")
        )
        await session.rename_table("Renamed")
        assert session.table.title == "Renamed"
