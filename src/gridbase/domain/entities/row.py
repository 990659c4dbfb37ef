"""Row entity.

Row data is a sparse mapping from column id to a scalar cell value. Keys
may be missing (column added later, read as empty) or stale (column
deleted, ignored on read). Nothing purges stale keys.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Union

from gridbase.domain.entities.table import utcnow

CellValue = Union[str, int, float, bool, None]


@dataclass
class Row:
    """Row entity.

    Attributes:
        id: Unique identifier (UUID string).
        table_id: Owning table.
        data: Cell values keyed by column id.
        created_by: ID of the user who created the row.
        created_at: Creation timestamp; rows are listed in this order.
        updated_at: Timestamp of the last data write.
    """

    id: str
    table_id: str
    data: dict[str, CellValue] = field(default_factory=dict)
    created_by: str = ""
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def get(self, column_id: str) -> CellValue:
        """Cell value for a column; missing keys read as ``None``."""
        return self.data.get(column_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "table_id": self.table_id,
            "data": dict(self.data),
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
