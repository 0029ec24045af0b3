from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple
import math
import re

from ..data.schema import FieldDefinition, FieldType, TableSchema
from ..time.dates import try_parse_date

_TIME = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")
_INT = re.compile(r"^[+-]?\d+$")


@dataclass(frozen=True)
class CellError:
    record_id: str
    field_id: str
    message: str


def _is_empty(raw: Any) -> bool:
    if raw is None:
        return True
    if isinstance(raw, float) and math.isnan(raw):
        return True
    return isinstance(raw, str) and not raw.strip()


def _to_number(raw: Any) -> Optional[float | int]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return raw
    text = str(raw).strip().replace(",", "")
    if _INT.match(text):
        return int(text)
    try:
        v = float(text)
    except ValueError:
        return None
    return v if math.isfinite(v) else None


def validate_value(
    field: FieldDefinition, raw: Any, record_id: str = ""
) -> Tuple[Any, Optional[CellError]]:
    """Coerce a user-entered cell value to the field's type.

    Returns (value, None) when valid, else (raw, CellError).
    """
    if _is_empty(raw):
        if field.required:
            return raw, CellError(record_id, field.id, f"{field.name} is required")
        return None, None

    if field.type == FieldType.NUMBER:
        v = _to_number(raw)
        if v is None:
            return raw, CellError(record_id, field.id, f"{field.name} must be a number")
        return v, None

    if field.type == FieldType.DATE:
        res = try_parse_date(raw)
        if not res.ok:
            return raw, CellError(
                record_id, field.id, f"{field.name} must be a date (YYYY-MM-DD)"
            )
        return res.value, None

    if field.type == FieldType.TIME:
        text = str(raw).strip()
        if not _TIME.match(text):
            return raw, CellError(
                record_id, field.id, f"{field.name} must be a time (HH:MM)"
            )
        return text, None

    return str(raw), None


def validate_record(
    values: Mapping[str, Any], schema: TableSchema, record_id: str = ""
) -> List[CellError]:
    errors = []
    for f in schema.fields:
        if f.id == schema.date_field:
            continue
        _, err = validate_value(f, values.get(f.id), record_id)
        if err is not None:
            errors.append(err)
    return errors
