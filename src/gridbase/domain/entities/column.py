"""Column entity and its configuration types.

A column is a typed field definition inside a table. Only ``select``
columns carry configuration today: an ordered list of options, which is
the single source of truth for the values a row may hold in that column.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any


class ColumnType(str, Enum):
    """Supported column types."""

    TEXT = "text"
    NUMBER = "number"
    SELECT = "select"
    DATE = "date"
    CHECKBOX = "checkbox"


@dataclass(frozen=True)
class SelectOption:
    """One entry of a select column's option list."""

    id: str
    label: str
    color: str

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "label": self.label, "color": self.color}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SelectOption":
        return cls(
            id=str(data["id"]),
            label=str(data.get("label", "")),
            color=str(data.get("color", "")),
        )


@dataclass
class Column:
    """Column entity.

    Attributes:
        id: Unique identifier (UUID string).
        table_id: Owning table.
        name: Display name.
        type: Column type; decides how cells are compared and coerced.
        position: Display order. Not unique; new columns get max + 1.
        config: Type-dependent configuration (``{"options": [...]}``
            for select columns).
    """

    id: str
    table_id: str
    name: str
    type: ColumnType = ColumnType.TEXT
    position: int = 0
    config: dict[str, Any] = field(default_factory=dict)

    @property
    def options(self) -> list[SelectOption]:
        """Select options in display order (empty for other types)."""
        raw = self.config.get("options") or []
        return [SelectOption.from_dict(item) for item in raw if isinstance(item, dict) and "id" in item]

    def option_ids(self) -> list[str]:
        return [option.id for option in self.options]

    def with_options(self, options: list[SelectOption]) -> "Column":
        """Return a copy whose config holds ``options``."""
        config = {**self.config, "options": [option.to_dict() for option in options]}
        return replace(self, config=config)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "table_id": self.table_id,
            "name": self.name,
            "type": self.type.value,
            "position": self.position,
            "config": self.config,
        }


@dataclass
class ColumnPatch:
    """Partial column update. ``None`` fields are left unchanged."""

    id: str
    name: str | None = None
    type: ColumnType | None = None
    position: int | None = None
    config: dict[str, Any] | None = None

    def apply(self, column: Column) -> Column:
        changes: dict[str, Any] = {}
        if self.name is not None:
            changes["name"] = self.name
        if self.type is not None:
            changes["type"] = self.type
        if self.position is not None:
            changes["position"] = self.position
        if self.config is not None:
            changes["config"] = self.config
        return replace(column, **changes)

    def is_empty(self) -> bool:
        return self.name is None and self.type is None and self.position is None and self.config is None
