from __future__ import annotations

from typing import Any, Optional, Sequence
import logging

import pandas as pd

from ..config import DEFAULTS
from ..data.record import Record, display_value
from ..data.schema import TableSchema
from ..table.view import ViewSpec, view
from ..time.dates import format_date, parse_date

logger = logging.getLogger(__name__)


def export_csv(
    records: Sequence[Record],
    schema: TableSchema,
    start_date: Any,
    end_date: Any,
    spec: Optional[ViewSpec] = None,
    fields: Optional[Sequence[str]] = None,
) -> str:
    """CSV text for records dated within [start_date, end_date] inclusive.

    Header row holds display names, Date first when the schema does not list
    it. Rows keep collection order unless a ViewSpec asks for filtering or
    sorting.
    """
    start = parse_date(start_date)
    end = parse_date(end_date)
    if start > end:
        raise ValueError(f"start_date {format_date(start)} is after end_date {format_date(end)}")

    field_ids = list(fields) if fields is not None else schema.displayed_field_ids
    if not field_ids:
        raise ValueError("No fields to export.")
    headers = []
    for fid in field_ids:
        if fid == schema.date_field and not schema.has_field(fid):
            headers.append("Date")
        else:
            headers.append(schema.field(fid).name)

    rows = [r for r in records if start <= r.date <= end]
    if spec is not None:
        rows = view(rows, schema, spec)

    df = pd.DataFrame(
        [[display_value(r, fid, schema) for fid in field_ids] for r in rows],
        columns=headers,
        dtype=object,
    )
    logger.info(
        f"export_csv[{schema.name}]: {len(df)} rows from {format_date(start)} to {format_date(end)}"
    )
    return df.to_csv(index=False, lineterminator="\n")


def export_filename(prefix: str = DEFAULTS.export_prefix, today: Any = None) -> str:
    day = parse_date(pd.Timestamp.now() if today is None else today)
    return f"{prefix}-{format_date(day)}.csv"
