"""SQLAlchemy models for gridbase tables, columns and rows.

All models inherit from the Base class defined in database.py and are
created on application startup in development mode.
"""

from gridbase.infrastructure.persistence.models.column import ColumnModel
from gridbase.infrastructure.persistence.models.row import RowModel
from gridbase.infrastructure.persistence.models.table import TableModel

__all__ = [
    "ColumnModel",
    "RowModel",
    "TableModel",
]
