"""Integration tests for SqlRecordStore against in-memory SQLite."""

import pytest

from gridbase.core.errors import ErrorCode
from gridbase.domain.entities import ColumnPatch, ColumnType, Row, utcnow
from gridbase.domain.services import TableService, TableSession
from gridbase.infrastructure.persistence.models import RowModel
from gridbase.infrastructure.persistence.repositories import RowRepository


@pytest.fixture
def tables(store, settings):
    return TableService(store, settings)


async def create(tables, title="Tasks"):
    return (await tables.create_table(title, created_by="u1")).unwrap()


class TestTables:
    @pytest.mark.asyncio
    async def test_create_adds_default_name_column(self, tables, store):
        table = await create(tables)

        columns = (await store.list_columns(table.id)).unwrap()

        assert [(c.name, c.type, c.position) for c in columns] == [("Name", ColumnType.TEXT, 0)]
        assert table.created_by == "u1"

    @pytest.mark.asyncio
    async def test_default_title(self, tables):
        table = (await tables.create_table()).unwrap()
        assert table.title == "Untitled Database"

    @pytest.mark.asyncio
    async def test_list_newest_first(self, tables, store):
        first = await create(tables, "First")
        second = await create(tables, "Second")

        listed = (await store.list_tables()).unwrap()

        assert [t.id for t in listed] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_get_missing_table(self, store):
        result = await store.get_table("missing")
        assert result.error.code == ErrorCode.NOT_FOUND

    @pytest.mark.asyncio
    async def test_rename(self, tables, store):
        table = await create(tables)

        renamed = (await store.rename_table(table.id, "Renamed")).unwrap()

        assert renamed.title == "Renamed"
        assert renamed.updated_at >= table.updated_at

    @pytest.mark.asyncio
    async def test_delete_cascades(self, tables, store):
        table = await create(tables)
        (await store.insert_row(Row(id="r1", table_id=table.id, data={"a": 1}))).unwrap()

        (await store.delete_table(table.id)).unwrap()

        assert (await store.get_table(table.id)).error.code == ErrorCode.NOT_FOUND
        assert (await store.list_columns(table.id)).unwrap() == []
        assert (await store.list_rows(table.id)).unwrap() == []

    @pytest.mark.asyncio
    async def test_delete_missing_table(self, store):
        result = await store.delete_table("missing")
        assert result.error.code == ErrorCode.NOT_FOUND

    @pytest.mark.asyncio
    async def test_touch_bumps_updated_at(self, tables, store):
        table = await create(tables)

        at = (await store.touch_table(table.id)).unwrap()
        touched = (await store.get_table(table.id)).unwrap()

        assert at >= table.updated_at
        assert touched.updated_at == at

    @pytest.mark.asyncio
    async def test_touch_missing_table(self, store):
        result = await store.touch_table("missing")
        assert result.error.code == ErrorCode.NOT_FOUND


class TestRows:
    @pytest.mark.asyncio
    async def test_row_round_trip_preserves_values(self, tables, store):
        table = await create(tables)
        data = {"text": "hello", "int": 3, "float": 2.5, "flag": False, "empty": None}

        inserted = (await store.insert_row(Row(id="r1", table_id=table.id, data=data))).unwrap()
        listed = (await store.list_rows(table.id)).unwrap()

        assert inserted.data == data
        assert listed[0].data == data
        assert listed[0].created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_update_replaces_whole_data(self, tables, store):
        table = await create(tables)
        await store.insert_row(Row(id="r1", table_id=table.id, data={"a": 1, "b": 2}))

        updated = (await store.update_row(table.id, "r1", {"a": 5})).unwrap()

        assert updated.data == {"a": 5}

    @pytest.mark.asyncio
    async def test_update_missing_row(self, tables, store):
        table = await create(tables)
        result = await store.update_row(table.id, "nope", {})
        assert result.error.code == ErrorCode.NOT_FOUND

    @pytest.mark.asyncio
    async def test_insert_into_missing_table(self, store):
        result = await store.insert_row(Row(id="r1", table_id="missing"))
        assert result.error.code == ErrorCode.NOT_FOUND

    @pytest.mark.asyncio
    async def test_invalid_data_rejected_at_boundary(self, tables, store):
        table = await create(tables)
        result = await store.insert_row(Row(id="r1", table_id=table.id, data={"a": [1]}))
        assert result.error.code == ErrorCode.VALIDATION_ERROR

    @pytest.mark.asyncio
    async def test_row_writes_touch_table(self, tables, store):
        table = await create(tables)

        await store.insert_row(Row(id="r1", table_id=table.id))
        touched = (await store.get_table(table.id)).unwrap()

        assert touched.updated_at >= table.updated_at

    @pytest.mark.asyncio
    async def test_delete_row(self, tables, store):
        table = await create(tables)
        await store.insert_row(Row(id="r1", table_id=table.id))

        (await store.delete_row(table.id, "r1")).unwrap()

        assert (await store.list_rows(table.id)).unwrap() == []
        assert (await store.delete_row(table.id, "r1")).error.code == ErrorCode.NOT_FOUND


class TestBatchUpdateColumns:
    @pytest.mark.asyncio
    async def test_partial_fields(self, tables, store):
        table = await create(tables)
        column = (await store.list_columns(table.id)).unwrap()[0]

        updated = (
            await store.batch_update_columns(table.id, [ColumnPatch(id=column.id, name="Title")])
        ).unwrap()

        assert updated[0].name == "Title"
        assert updated[0].type == ColumnType.TEXT
        assert updated[0].position == 0

    @pytest.mark.asyncio
    async def test_missing_column_rolls_back_batch(self, tables, store):
        table = await create(tables)
        column = (await store.list_columns(table.id)).unwrap()[0]

        result = await store.batch_update_columns(
            table.id,
            [ColumnPatch(id=column.id, name="Title"), ColumnPatch(id="ghost", name="x")],
        )

        assert result.error.code == ErrorCode.NOT_FOUND
        assert result.error.details["column_ids"] == ["ghost"]
        assert (await store.list_columns(table.id)).unwrap()[0].name == "Name"

    @pytest.mark.asyncio
    async def test_column_of_other_table_is_not_found(self, tables, store):
        first = await create(tables, "First")
        second = await create(tables, "Second")
        foreign = (await store.list_columns(second.id)).unwrap()[0]

        result = await store.batch_update_columns(first.id, [ColumnPatch(id=foreign.id, name="x")])

        assert result.error.code == ErrorCode.NOT_FOUND

    @pytest.mark.asyncio
    async def test_type_change_keeps_row_values(self, tables, store):
        table = await create(tables)
        column = (await store.list_columns(table.id)).unwrap()[0]
        await store.insert_row(Row(id="r1", table_id=table.id, data={column.id: "abc"}))

        await store.batch_update_columns(
            table.id, [ColumnPatch(id=column.id, type=ColumnType.NUMBER)]
        )

        assert (await store.list_rows(table.id)).unwrap()[0].data == {column.id: "abc"}

    @pytest.mark.asyncio
    async def test_delete_column_keeps_row_values(self, tables, store):
        table = await create(tables)
        column = (await store.list_columns(table.id)).unwrap()[0]
        await store.insert_row(Row(id="r1", table_id=table.id, data={column.id: "kept"}))

        (await store.delete_column(table.id, column.id)).unwrap()

        assert (await store.list_columns(table.id)).unwrap() == []
        assert (await store.list_rows(table.id)).unwrap()[0].data == {column.id: "kept"}


class TestCorruptStoredData:
    async def _insert_raw_row(self, db_manager, table_id, raw_data):
        now = utcnow()
        async with db_manager.session() as session:
            await RowRepository(session).create(
                RowModel(
                    id="bad",
                    table_id=table_id,
                    data=raw_data,
                    created_by="u1",
                    created_at=now,
                    updated_at=now,
                )
            )
            await session.commit()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_data", ["{bad", "[1, 2]", '{"a": {"nested": true}}'])
    async def test_unreadable_row_is_store_error(self, tables, store, db_manager, raw_data):
        table = await create(tables)
        await self._insert_raw_row(db_manager, table.id, raw_data)

        result = await store.list_rows(table.id)

        assert result.error.code == ErrorCode.STORE_ERROR
        assert "bad" in result.error.details["reason"]

    @pytest.mark.asyncio
    async def test_session_open_surfaces_store_error(self, tables, store, db_manager):
        table = await create(tables)
        await self._insert_raw_row(db_manager, table.id, "{bad")

        session = TableSession(store)
        result = await session.open(table.id)

        assert result.error.code == ErrorCode.STORE_ERROR
        assert session.last_error == result.error
        assert not session.is_open
