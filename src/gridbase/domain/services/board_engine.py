"""Grouping engine for the board view.

Grouping reads each row's value for a select column and places the row in
the bucket of the matching option. Anything that does not match an option
id (null, a stale id left behind by a deleted option, a value written
under another column type) lands in the uncategorized bucket.

The option-list helpers below return new lists and never touch rows:
deleting an option leaves rows holding its id, and those rows fall into
uncategorized on the next grouping pass.
"""

from collections.abc import Iterable, Sequence

from gridbase.core.errors import NoGroupColumnError, NotFoundError
from gridbase.domain.entities import (
    UNCATEGORIZED,
    Board,
    Bucket,
    Column,
    ColumnType,
    Row,
    SelectOption,
)

UNCATEGORIZED_LABEL = "No Status"
UNCATEGORIZED_COLOR = "#e5e7eb"


def resolve_group_column(columns: Sequence[Column], column_id: str | None = None) -> Column:
    """Pick the column to group by.

    Args:
        columns: Table columns in display order.
        column_id: Explicit choice; defaults to the first select column.

    Raises:
        NotFoundError: If ``column_id`` names no column.
        NoGroupColumnError: If the chosen column is not a select column,
            or no select column exists.
    """
    if column_id is not None:
        column = next((c for c in columns if c.id == column_id), None)
        if column is None:
            raise NotFoundError(f"Column '{column_id}' not found", {"column_id": column_id})
        if column.type != ColumnType.SELECT:
            raise NoGroupColumnError(
                f"Column '{column.name}' is not a select column",
                {"column_id": column_id, "type": column.type.value},
            )
        return column

    for column in sorted(columns, key=lambda c: c.position):
        if column.type == ColumnType.SELECT:
            return column
    raise NoGroupColumnError("Board view requires a select column to group by")


def group_rows(rows: Iterable[Row], column: Column) -> Board:
    """Partition rows into one bucket per option plus uncategorized."""
    buckets = [
        Bucket(key=option.id, label=option.label, color=option.color)
        for option in column.options
    ]
    uncategorized = Bucket(key=UNCATEGORIZED, label=UNCATEGORIZED_LABEL, color=UNCATEGORIZED_COLOR)
    by_key = {bucket.key: bucket for bucket in buckets}

    for row in rows:
        value = row.get(column.id)
        target = by_key.get(value) if isinstance(value, str) else None
        (target or uncategorized).rows.append(row)

    return Board(column=column, buckets=buckets + [uncategorized])


def cell_value_for_bucket(bucket_key: str) -> str | None:
    """The cell value that places a row in ``bucket_key``."""
    return None if bucket_key == UNCATEGORIZED else bucket_key


def _index_of(options: Sequence[SelectOption], option_id: str) -> int:
    for index, option in enumerate(options):
        if option.id == option_id:
            return index
    raise NotFoundError(f"Option '{option_id}' not found", {"option_id": option_id})


def append_option(options: Sequence[SelectOption], option: SelectOption) -> list[SelectOption]:
    return [*options, option]


def replace_option(
    options: Sequence[SelectOption],
    option_id: str,
    label: str | None = None,
    color: str | None = None,
) -> list[SelectOption]:
    """Replace one option's label and/or color, keeping its position."""
    index = _index_of(options, option_id)
    current = options[index]
    updated = SelectOption(
        id=current.id,
        label=current.label if label is None else label,
        color=current.color if color is None else color,
    )
    return [*options[:index], updated, *options[index + 1:]]


def remove_option(options: Sequence[SelectOption], option_id: str) -> list[SelectOption]:
    index = _index_of(options, option_id)
    return [*options[:index], *options[index + 1:]]


def reorder_options(
    options: Sequence[SelectOption], dragged_id: str, target_id: str
) -> list[SelectOption]:
    """Move the dragged option to the target's index.

    The dragged option is spliced out and reinserted at the index the
    target held before the move, so ``[A, B, C]`` dragging A onto C gives
    ``[B, C, A]`` and dragging C onto A gives ``[C, A, B]``.
    """
    dragged_index = _index_of(options, dragged_id)
    target_index = _index_of(options, target_id)
    result = list(options)
    if dragged_index == target_index:
        return result
    dragged = result.pop(dragged_index)
    result.insert(target_index, dragged)
    return result
