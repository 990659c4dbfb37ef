"""Domain entities for gridbase.

Entities are plain dataclasses with no dependency on the store, the web
layer or any framework.
"""

from gridbase.domain.entities.board import UNCATEGORIZED, Board, Bucket
from gridbase.domain.entities.column import Column, ColumnPatch, ColumnType, SelectOption
from gridbase.domain.entities.row import CellValue, Row
from gridbase.domain.entities.table import Table, utcnow
from gridbase.domain.entities.view import Filter, FilterOperator, SortDirection, SortSpec

__all__ = [
    "Board",
    "Bucket",
    "CellValue",
    "Column",
    "ColumnPatch",
    "ColumnType",
    "Filter",
    "FilterOperator",
    "Row",
    "SelectOption",
    "SortDirection",
    "SortSpec",
    "Table",
    "UNCATEGORIZED",
    "utcnow",
]
