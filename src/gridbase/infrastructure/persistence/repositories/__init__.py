"""Persistence repositories for database operations."""

from gridbase.infrastructure.persistence.repositories.column_repository import (
    ColumnRepository,
)
from gridbase.infrastructure.persistence.repositories.row_repository import (
    RowRepository,
)
from gridbase.infrastructure.persistence.repositories.table_repository import (
    TableRepository,
)

__all__ = [
    "ColumnRepository",
    "RowRepository",
    "TableRepository",
]
