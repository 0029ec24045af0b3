from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence


class FieldType(str, Enum):
    NUMBER = "number"
    TEXT = "text"
    DATE = "date"
    TIME = "time"  # HH:MM, e.g. grass-cutting start/stop


@dataclass(frozen=True)
class FieldDefinition:
    id: str
    name: str  # display name, used for headers
    type: FieldType = FieldType.TEXT
    required: bool = False

    def __post_init__(self) -> None:
        # allow FieldDefinition("x", "X", "number")
        object.__setattr__(self, "type", FieldType(self.type))


@dataclass(frozen=True)
class TableSchema:
    name: str
    fields: Sequence[FieldDefinition]
    id_field: str = "id"
    date_field: str = "date"

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))
        seen = set()
        for f in self.fields:
            if f.id in seen:
                raise ValueError(f"Duplicate field id {f.id!r} in schema {self.name!r}")
            seen.add(f.id)

    @property
    def field_ids(self) -> list[str]:
        return [f.id for f in self.fields]

    @property
    def displayed_field_ids(self) -> list[str]:
        """Columns a table shows, the date column first when it is not listed."""
        ids = self.field_ids
        if self.date_field not in ids:
            ids = [self.date_field] + ids
        return ids

    def field(self, field_id: str) -> FieldDefinition:
        for f in self.fields:
            if f.id == field_id:
                return f
        raise KeyError(f"Unknown field {field_id!r} in schema {self.name!r}")

    def has_field(self, field_id: str) -> bool:
        return any(f.id == field_id for f in self.fields)

    def field_type(self, field_id: str) -> FieldType:
        """Type of a column; the date field is a date even when not listed."""
        if field_id == self.date_field and not self.has_field(field_id):
            return FieldType.DATE
        return self.field(field_id).type
