"""API Schemas for request/response validation."""

from gridbase.infrastructure.api.schemas.table_schemas import (
    BoardResponse,
    BucketResponse,
    ColumnPatchRequest,
    ColumnResponse,
    CreateBucketRequest,
    CreateColumnRequest,
    CreateRowRequest,
    CreateTableRequest,
    FilterRequest,
    MoveRowRequest,
    OptionResponse,
    RenameTableRequest,
    ReorderBucketsRequest,
    RowResponse,
    SortRequest,
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

__all__ = [
    "BoardResponse",
    "BucketResponse",
    "ColumnPatchRequest",
    "ColumnResponse",
    "CreateBucketRequest",
    "CreateColumnRequest",
    "CreateRowRequest",
    "CreateTableRequest",
    "FilterRequest",
    "MoveRowRequest",
    "OptionResponse",
    "RenameTableRequest",
    "ReorderBucketsRequest",
    "RowResponse",
    "SortRequest",
    "TableDetailResponse",
    "TableListResponse",
    "TableResponse",
    "UpdateBucketRequest",
    "UpdateColumnsRequest",
    "UpdateColumnsResponse",
    "UpdateRowRequest",
    "ViewRequest",
    "ViewResponse",
]
