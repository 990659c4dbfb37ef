"""Filter and sort specifications for derived row views.

Both are session-scoped and never persisted.
"""

from dataclasses import dataclass, replace
from enum import Enum


class FilterOperator(str, Enum):
    """Operators supported by row filters."""

    CONTAINS = "contains"
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    IS_EMPTY = "is_empty"
    IS_NOT_EMPTY = "is_not_empty"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Filter:
    """A single predicate. Active filters are combined with AND."""

    column_id: str
    operator: FilterOperator
    value: str = ""


@dataclass(frozen=True)
class SortSpec:
    """Sort on at most one column. ``column_id=None`` keeps row order."""

    column_id: str | None = None
    direction: SortDirection = SortDirection.ASC

    def toggled(self) -> "SortSpec":
        direction = SortDirection.DESC if self.direction == SortDirection.ASC else SortDirection.ASC
        return replace(self, direction=direction)
