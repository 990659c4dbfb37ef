"""Domain services for gridbase.

Services hold the table engine's logic: value coercion, filtering and
sorting, board grouping, validation and the per-table session. They
depend only on the ``RecordStore`` interface, never on a concrete store
or the web layer.
"""

from gridbase.domain.services.board_engine import (
    UNCATEGORIZED_COLOR,
    UNCATEGORIZED_LABEL,
    append_option,
    cell_value_for_bucket,
    group_rows,
    remove_option,
    reorder_options,
    replace_option,
    resolve_group_column,
)
from gridbase.domain.services.cell_values import (
    collation_key,
    is_empty,
    sort_key,
    stringify,
    to_number,
    to_timestamp,
)
from gridbase.domain.services.column_validator import ColumnValidationError, ColumnValidator
from gridbase.domain.services.row_validator import RowDataValidator, RowValidationError
from gridbase.domain.services.view_engine import (
    apply_filters,
    apply_sort,
    apply_view,
    matches_filter,
)
from gridbase.domain.services.table_session import TableSession
from gridbase.domain.services.board_service import BoardService
from gridbase.domain.services.table_service import TableService

__all__ = [
    "BoardService",
    "ColumnValidationError",
    "ColumnValidator",
    "RowDataValidator",
    "RowValidationError",
    "TableService",
    "TableSession",
    "UNCATEGORIZED_COLOR",
    "UNCATEGORIZED_LABEL",
    "append_option",
    "apply_filters",
    "apply_sort",
    "apply_view",
    "cell_value_for_bucket",
    "collation_key",
    "group_rows",
    "is_empty",
    "matches_filter",
    "remove_option",
    "reorder_options",
    "replace_option",
    "resolve_group_column",
    "sort_key",
    "stringify",
    "to_number",
    "to_timestamp",
]
