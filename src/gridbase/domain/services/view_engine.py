"""Filter/sort engine for the flat table view.

Pure functions over an already-loaded row set. Nothing here performs I/O
or mutates its inputs; the session recomputes the view from the full
cached row list on every read.
"""

import math
from collections.abc import Iterable, Sequence

from gridbase.domain.entities import (
    Column,
    Filter,
    FilterOperator,
    Row,
    SortDirection,
    SortSpec,
)
from gridbase.domain.services.cell_values import (
    MISSING,
    is_empty,
    sort_key,
    stringify,
    to_number,
)


def matches_filter(row: Row, column: Column, filter_: Filter) -> bool:
    """Evaluate one filter against one row.

    Text operators compare case-insensitively on the stringified cell.
    Numeric operators compare ``to_number`` readings, where a null cell
    reads as 0 and a missing key as NaN; any NaN side makes the comparison
    false.
    """
    value = row.get(column.id)
    operator = filter_.operator

    if operator == FilterOperator.IS_EMPTY:
        return is_empty(value)
    if operator == FilterOperator.IS_NOT_EMPTY:
        return not is_empty(value)

    if operator in (FilterOperator.GREATER_THAN, FilterOperator.LESS_THAN):
        cell = to_number(row.data.get(column.id, MISSING))
        target = to_number(filter_.value)
        if math.isnan(cell) or math.isnan(target):
            return False
        if operator == FilterOperator.GREATER_THAN:
            return cell > target
        return cell < target

    cell_text = stringify(value).casefold()
    target_text = (filter_.value or "").casefold()
    if operator == FilterOperator.CONTAINS:
        return target_text in cell_text
    if operator == FilterOperator.EQUALS:
        return cell_text == target_text
    if operator == FilterOperator.NOT_EQUALS:
        return cell_text != target_text

    raise ValueError(f"Unhandled filter operator: {operator!r}")


def apply_filters(
    rows: Iterable[Row], columns: Sequence[Column], filters: Sequence[Filter]
) -> list[Row]:
    """Keep rows passing every filter.

    Filters on columns that no longer exist are ignored.
    """
    columns_by_id = {column.id: column for column in columns}
    active = [
        (columns_by_id[f.column_id], f) for f in filters if f.column_id in columns_by_id
    ]
    return [
        row for row in rows if all(matches_filter(row, column, f) for column, f in active)
    ]


def apply_sort(rows: Iterable[Row], columns: Sequence[Column], sort: SortSpec) -> list[Row]:
    """Stable sort by a single column.

    Rows with equal keys keep their relative order in both directions.
    Sorting by a missing column, or by no column, returns rows unchanged.
    """
    result = list(rows)
    if sort.column_id is None:
        return result

    column = next((c for c in columns if c.id == sort.column_id), None)
    if column is None:
        return result

    return sorted(
        result,
        key=lambda row: sort_key(row.get(column.id), column.type),
        reverse=sort.direction == SortDirection.DESC,
    )


def apply_view(
    rows: Iterable[Row],
    columns: Sequence[Column],
    filters: Sequence[Filter] = (),
    sort: SortSpec | None = None,
) -> list[Row]:
    """Derive the ordered row sequence for the table view."""
    filtered = apply_filters(rows, columns, filters)
    return apply_sort(filtered, columns, sort or SortSpec())
