"""Tables API routes.

Provides endpoints for tables, their columns and rows, filtered and
sorted views, and the board (kanban) view over a select column.

Engine failures surface as ``GridbaseError`` (via ``StoreResult.unwrap``)
and are turned into HTTP errors by the application's exception handler.
"""

from fastapi import APIRouter, Query, Response, status

from gridbase.core.logging import get_logger
from gridbase.domain.entities import Filter, SortSpec
from gridbase.domain.services import BoardService
from gridbase.infrastructure.api.dependencies import CurrentUserId, OpenSession, Store, Tables
from gridbase.infrastructure.api.schemas import (
    BoardResponse,
    ColumnResponse,
    CreateBucketRequest,
    CreateColumnRequest,
    CreateRowRequest,
    CreateTableRequest,
    MoveRowRequest,
    OptionResponse,
    RenameTableRequest,
    ReorderBucketsRequest,
    RowResponse,
    TableDetailResponse,
    TableListResponse,
    TableResponse,
    UpdateBucketRequest,
    UpdateColumnsRequest,
    UpdateColumnsResponse,
    UpdateRowRequest,
    ViewRequest,
    ViewResponse,
)

logger = get_logger(__name__)

router = APIRouter()

NOT_FOUND = {404: {"description": "Table, column or row not found"}}


# Tables


@router.get("", status_code=status.HTTP_200_OK, response_model=TableListResponse)
async def list_tables(tables: Tables) -> TableListResponse:
    """List all tables, newest first."""
    items = (await tables.list_tables()).unwrap()
    return TableListResponse(
        items=[TableResponse.model_validate(t) for t in items],
        total=len(items),
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TableDetailResponse)
async def create_table(
    request: CreateTableRequest,
    tables: Tables,
    store: Store,
    user_id: CurrentUserId,
) -> TableDetailResponse:
    """Create a table with a default 'Name' text column."""
    table = (await tables.create_table(request.title, created_by=user_id)).unwrap()
    columns = (await store.list_columns(table.id)).unwrap()
    return TableDetailResponse.build(table, columns, [])


@router.get("/{table_id}", response_model=TableDetailResponse, responses=NOT_FOUND)
async def get_table(session: OpenSession) -> TableDetailResponse:
    """Get a table with its columns and rows."""
    return TableDetailResponse.build(session.table, session.columns, session.rows)


@router.put("/{table_id}", response_model=TableResponse, responses=NOT_FOUND)
async def rename_table(request: RenameTableRequest, session: OpenSession) -> TableResponse:
    table = (await session.rename_table(request.title)).unwrap()
    return TableResponse.model_validate(table)


@router.delete("/{table_id}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND)
async def delete_table(table_id: str, tables: Tables) -> Response:
    """Delete a table together with all of its columns and rows."""
    (await tables.delete_table(table_id)).unwrap()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Columns


@router.post(
    "/{table_id}/columns",
    status_code=status.HTTP_201_CREATED,
    response_model=ColumnResponse,
    responses=NOT_FOUND,
)
async def add_column(request: CreateColumnRequest, session: OpenSession) -> ColumnResponse:
    """Append a column after the last one."""
    column = (
        await session.add_column(
            name=request.name,
            column_type=request.type,
            config=request.config,
        )
    ).unwrap()
    return ColumnResponse.from_column(column)


@router.put("/{table_id}/columns", response_model=UpdateColumnsResponse, responses=NOT_FOUND)
async def update_columns(
    request: UpdateColumnsRequest, session: OpenSession
) -> UpdateColumnsResponse:
    """Apply a batch of partial column updates atomically.

    If any patch names a column that does not exist, nothing is written.
    """
    columns = (await session.update_columns([p.model_dump() for p in request.columns])).unwrap()
    return UpdateColumnsResponse(columns=[ColumnResponse.from_column(c) for c in columns])


@router.delete(
    "/{table_id}/columns/{column_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=NOT_FOUND,
)
async def delete_column(column_id: str, session: OpenSession) -> Response:
    """Delete a column. Row values for it are kept."""
    (await session.delete_column(column_id)).unwrap()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Rows


@router.post(
    "/{table_id}/rows",
    status_code=status.HTTP_201_CREATED,
    response_model=RowResponse,
    responses=NOT_FOUND,
)
async def add_row(request: CreateRowRequest, session: OpenSession) -> RowResponse:
    row = (await session.add_row(request.data)).unwrap()
    return RowResponse.model_validate(row)


@router.put("/{table_id}/rows/{row_id}", response_model=RowResponse, responses=NOT_FOUND)
async def update_row(row_id: str, request: UpdateRowRequest, session: OpenSession) -> RowResponse:
    """Replace a row's data. The body must carry every cell to keep."""
    row = (await session.update_row(row_id, request.data)).unwrap()
    return RowResponse.model_validate(row)


@router.delete(
    "/{table_id}/rows/{row_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=NOT_FOUND,
)
async def delete_row(row_id: str, session: OpenSession) -> Response:
    (await session.delete_row(row_id)).unwrap()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Views


@router.post("/{table_id}/view", response_model=ViewResponse, responses=NOT_FOUND)
async def query_view(request: ViewRequest, session: OpenSession) -> ViewResponse:
    """Rows after filters (combined with AND) and an optional single-column sort."""
    for f in request.filters:
        session.add_filter(Filter(column_id=f.column_id, operator=f.operator, value=f.value))
    if request.sort is not None:
        session.sort = SortSpec(column_id=request.sort.column_id, direction=request.sort.direction)

    rows = session.visible_rows()
    logger.debug(
        "View computed",
        table_id=session.table_id,
        filter_count=len(session.filters),
        row_count=len(rows),
    )
    return ViewResponse(rows=[RowResponse.model_validate(r) for r in rows], total=len(rows))


@router.get(
    "/{table_id}/board",
    response_model=BoardResponse,
    responses={**NOT_FOUND, 409: {"description": "No select column to group by"}},
)
async def get_board(
    session: OpenSession,
    column_id: str | None = Query(default=None, description="Select column to group by"),
) -> BoardResponse:
    """Group rows into buckets by a select column (first one by default)."""
    return BoardResponse.from_board(session.board(column_id))


@router.post(
    "/{table_id}/board/{column_id}/buckets",
    status_code=status.HTTP_201_CREATED,
    response_model=OptionResponse,
    responses=NOT_FOUND,
)
async def add_bucket(
    column_id: str, request: CreateBucketRequest, session: OpenSession
) -> OptionResponse:
    option = (await BoardService(session, column_id).add_bucket(request.label, request.color)).unwrap()
    return OptionResponse.from_option(option)


@router.patch(
    "/{table_id}/board/{column_id}/buckets/{option_id}",
    response_model=ColumnResponse,
    responses=NOT_FOUND,
)
async def update_bucket(
    column_id: str, option_id: str, request: UpdateBucketRequest, session: OpenSession
) -> ColumnResponse:
    """Rename and/or recolor a bucket."""
    column = (
        await BoardService(session, column_id).update_bucket(
            option_id, label=request.label, color=request.color
        )
    ).unwrap()
    return ColumnResponse.from_column(column)


@router.delete(
    "/{table_id}/board/{column_id}/buckets/{option_id}",
    response_model=ColumnResponse,
    responses=NOT_FOUND,
)
async def delete_bucket(column_id: str, option_id: str, session: OpenSession) -> ColumnResponse:
    """Remove a bucket. Its rows move to uncategorized on the next read."""
    column = (await BoardService(session, column_id).delete_bucket(option_id)).unwrap()
    return ColumnResponse.from_column(column)


@router.post(
    "/{table_id}/board/{column_id}/buckets/{bucket_key}/rows",
    status_code=status.HTTP_201_CREATED,
    response_model=RowResponse,
    responses=NOT_FOUND,
)
async def add_row_to_bucket(column_id: str, bucket_key: str, session: OpenSession) -> RowResponse:
    row = (await BoardService(session, column_id).add_row_to_bucket(bucket_key)).unwrap()
    return RowResponse.model_validate(row)


@router.post(
    "/{table_id}/board/{column_id}/reorder",
    response_model=ColumnResponse,
    responses=NOT_FOUND,
)
async def reorder_buckets(
    column_id: str, request: ReorderBucketsRequest, session: OpenSession
) -> ColumnResponse:
    """Move the dragged bucket to the target bucket's position."""
    column = (
        await BoardService(session, column_id).reorder_buckets(request.dragged_id, request.target_id)
    ).unwrap()
    return ColumnResponse.from_column(column)


@router.post(
    "/{table_id}/board/{column_id}/rows/{row_id}/move",
    response_model=RowResponse,
    responses=NOT_FOUND,
)
async def move_row(
    column_id: str, row_id: str, request: MoveRowRequest, session: OpenSession
) -> RowResponse:
    """Move a row to another bucket ('uncategorized' clears the cell)."""
    row = (await BoardService(session, column_id).move_row(row_id, request.bucket_key)).unwrap()
    return RowResponse.model_validate(row)
