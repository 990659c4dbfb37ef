"""Table entity.

A table is the "database" a user creates in the workspace: a title plus an
ordered set of typed columns and an unordered set of rows.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass
class Table:
    """Table entity.

    Attributes:
        id: Unique identifier (UUID string).
        title: Display title.
        created_by: ID of the user who created the table.
        created_at: Timestamp when the table was created.
        updated_at: Timestamp of the last structural or row change.
    """

    id: str
    title: str
    created_by: str
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Table ID is required")
