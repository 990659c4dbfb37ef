"""Board (grouped) view types."""

from dataclasses import dataclass, field

from gridbase.domain.entities.column import Column
from gridbase.domain.entities.row import Row

UNCATEGORIZED = "uncategorized"


@dataclass
class Bucket:
    """One board lane: a select option, or the uncategorized catch-all."""

    key: str
    label: str
    color: str
    rows: list[Row] = field(default_factory=list)

    @property
    def is_uncategorized(self) -> bool:
        return self.key == UNCATEGORIZED


@dataclass
class Board:
    """Rows partitioned by a select column.

    ``buckets`` holds one bucket per option in option order followed by the
    uncategorized bucket, which is always present here even when empty.
    """

    column: Column
    buckets: list[Bucket]

    @property
    def visible_buckets(self) -> list[Bucket]:
        """Buckets to render: uncategorized only when it has rows."""
        return [b for b in self.buckets if not (b.is_uncategorized and not b.rows)]

    def bucket(self, key: str) -> Bucket | None:
        for bucket in self.buckets:
            if bucket.key == key:
                return bucket
        return None
