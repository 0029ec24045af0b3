from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Sequence
import logging

import pandas as pd

from .schema import FieldType, TableSchema
from ..time.dates import DateParseError, format_date, parse_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Record:
    """One dated row of operational data. date is a naive midnight Timestamp."""

    record_id: str
    date: pd.Timestamp
    values: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "record_id", str(self.record_id))
        object.__setattr__(self, "date", parse_date(self.date))
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def get(self, field_id: str, schema: TableSchema | None = None) -> Any:
        date_field = schema.date_field if schema is not None else "date"
        if field_id == date_field:
            return self.date
        return self.values.get(field_id)


def _format_number(v: Any) -> str:
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return str(v)


def display_value(record: Record, field_id: str, schema: TableSchema) -> str:
    """Value as a table cell shows it; empty string for missing."""
    v = record.get(field_id, schema)
    if v is None or (isinstance(v, float) and pd.isna(v)):
        return ""
    ftype = schema.field_type(field_id)
    if ftype == FieldType.DATE:
        try:
            return format_date(parse_date(v))
        except DateParseError:
            return str(v)
    if ftype == FieldType.NUMBER:
        return _format_number(v)
    return str(v)


def index_records(records: Iterable[Record]) -> dict[str, Record]:
    out: dict[str, Record] = {}
    for r in records:
        if r.record_id in out:
            raise ValueError(f"Duplicate record id {r.record_id!r}")
        out[r.record_id] = r
    return out


def load_records(
    rows: Iterable[Mapping[str, Any]],
    schema: TableSchema,
    on_error: str = "raise",
) -> list[Record]:
    """Build records from raw row dicts.

    on_error decides what happens to rows whose date does not parse:
    "raise" propagates DateParseError, "skip" drops the row with a warning.
    """
    if on_error not in ("raise", "skip"):
        raise ValueError("on_error must be raise/skip")

    out = []
    for row in rows:
        rid = row.get(schema.id_field)
        if rid is None:
            raise ValueError(f"Row without {schema.id_field!r}: {dict(row)}")
        values = {
            k: v
            for k, v in row.items()
            if k not in (schema.id_field, schema.date_field)
        }
        try:
            out.append(Record(rid, row.get(schema.date_field), values))
        except DateParseError as exc:
            if on_error == "raise":
                raise
            logger.warning(f"load_records: skipping record {rid!r} in {schema.name}: {exc}")
    index_records(out)
    return out


def records_to_frame(records: Sequence[Record], schema: TableSchema) -> pd.DataFrame:
    """Wide frame, one row per record in input order, one column per field."""
    cols = [f for f in schema.field_ids if f != schema.date_field]
    rows = []
    for r in records:
        row = {schema.id_field: r.record_id, schema.date_field: r.date}
        row.update({c: r.values.get(c) for c in cols})
        rows.append(row)
    return pd.DataFrame(rows, columns=[schema.id_field, schema.date_field] + cols)
