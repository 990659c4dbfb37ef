"""Pydantic schemas for table endpoints.

Request bodies are checked for shape here; semantic checks (column types,
option lists, row values) run in the domain validators so that the same
rules apply to API and in-process callers.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from gridbase.domain.entities import (
    Board,
    Bucket,
    Column,
    FilterOperator,
    Row,
    SelectOption,
    SortDirection,
    Table,
)


class CreateTableRequest(BaseModel):
    """Request body for creating a table."""

    title: str | None = Field(
        default=None,
        max_length=255,
        description="Table title (defaults to 'Untitled Database')",
    )


class RenameTableRequest(BaseModel):
    """Request body for renaming a table."""

    title: str = Field(..., min_length=1, max_length=255)


class TableResponse(BaseModel):
    """A table without its columns or rows."""

    id: str = Field(..., description="Table ID (UUID)")
    title: str
    created_by: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TableListResponse(BaseModel):
    items: list[TableResponse]
    total: int


class ColumnResponse(BaseModel):
    id: str
    table_id: str
    name: str
    type: str
    position: int
    config: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_column(cls, column: Column) -> "ColumnResponse":
        return cls(**column.to_dict())


class RowResponse(BaseModel):
    id: str
    table_id: str
    data: dict[str, Any]
    created_by: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TableDetailResponse(BaseModel):
    """A table with its columns (by position) and rows (by creation)."""

    table: TableResponse
    columns: list[ColumnResponse]
    rows: list[RowResponse]

    @classmethod
    def build(cls, table: Table, columns: list[Column], rows: list[Row]) -> "TableDetailResponse":
        return cls(
            table=TableResponse.model_validate(table),
            columns=[ColumnResponse.from_column(c) for c in columns],
            rows=[RowResponse.model_validate(r) for r in rows],
        )


class CreateColumnRequest(BaseModel):
    """Request body for adding a column. All fields are optional."""

    name: str | None = Field(default=None, description="Column name (defaults to 'New Column')")
    type: str | None = Field(
        default=None,
        description="Column type: text, number, select, date, checkbox",
    )
    config: dict[str, Any] | None = Field(
        default=None,
        description="Column configuration, e.g. {'options': [...]} for select",
    )


class ColumnPatchRequest(BaseModel):
    """One partial update in a batch. Omitted fields are left unchanged."""

    id: str
    name: str | None = None
    type: str | None = None
    position: int | None = None
    config: dict[str, Any] | None = None


class UpdateColumnsRequest(BaseModel):
    """Request body for a batch column update."""

    columns: list[ColumnPatchRequest] = Field(
        ...,
        description="Column patches, applied all together or not at all",
    )


class UpdateColumnsResponse(BaseModel):
    columns: list[ColumnResponse]


class CreateRowRequest(BaseModel):
    data: dict[str, Any] = Field(default_factory=dict, description="Initial cell values")


class UpdateRowRequest(BaseModel):
    """Request body for replacing a row's data."""

    data: dict[str, Any] = Field(..., description="Complete cell values keyed by column id")


class FilterRequest(BaseModel):
    column_id: str
    operator: FilterOperator
    value: str = ""


class SortRequest(BaseModel):
    column_id: str | None = None
    direction: SortDirection = SortDirection.ASC


class ViewRequest(BaseModel):
    """Filters and sort for a derived row list."""

    filters: list[FilterRequest] = Field(default_factory=list)
    sort: SortRequest | None = None


class ViewResponse(BaseModel):
    rows: list[RowResponse]
    total: int


class OptionResponse(BaseModel):
    id: str
    label: str
    color: str

    @classmethod
    def from_option(cls, option: SelectOption) -> "OptionResponse":
        return cls(**option.to_dict())


class BucketResponse(BaseModel):
    key: str
    label: str
    color: str
    count: int
    rows: list[RowResponse]

    @classmethod
    def from_bucket(cls, bucket: Bucket) -> "BucketResponse":
        return cls(
            key=bucket.key,
            label=bucket.label,
            color=bucket.color,
            count=len(bucket.rows),
            rows=[RowResponse.model_validate(r) for r in bucket.rows],
        )


class BoardResponse(BaseModel):
    """Rows grouped by a select column.

    The uncategorized bucket is included only when it holds rows.
    """

    column: ColumnResponse
    buckets: list[BucketResponse]

    @classmethod
    def from_board(cls, board: Board) -> "BoardResponse":
        return cls(
            column=ColumnResponse.from_column(board.column),
            buckets=[BucketResponse.from_bucket(b) for b in board.visible_buckets],
        )


class CreateBucketRequest(BaseModel):
    label: str = Field(..., min_length=1, max_length=255)
    color: str | None = None


class UpdateBucketRequest(BaseModel):
    """Rename and/or recolor a bucket."""

    label: str | None = Field(default=None, min_length=1, max_length=255)
    color: str | None = None


class ReorderBucketsRequest(BaseModel):
    dragged_id: str = Field(..., description="Option being dragged")
    target_id: str = Field(..., description="Option dropped onto")


class MoveRowRequest(BaseModel):
    bucket_key: str = Field(..., description="Target option id, or 'uncategorized'")
