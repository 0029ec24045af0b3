from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, List, Literal, Mapping, Optional, Sequence
import logging
import math

import numpy as np
import pandas as pd

from ..config import DEFAULTS
from ..data.record import Record, display_value
from ..data.schema import FieldType, TableSchema
from ..time.dates import month_key, month_label, parse_date, try_parse_date

logger = logging.getLogger(__name__)

SortDir = Literal["asc", "desc"]


@dataclass(frozen=True)
class ViewSpec:
    """Filter state of one table.

    field_filters match a column's displayed value exactly (dropdown filters);
    column_filters keep rows whose displayed value contains the text, ignoring
    case (per-column text boxes).
    """

    search_term: str = ""
    category_filter: str = DEFAULTS.all_sentinel
    sort_key: Optional[str] = None
    sort_dir: SortDir = "desc"
    field_filters: Mapping[str, str] = field(default_factory=dict)
    date_from: Optional[pd.Timestamp] = None
    date_to: Optional[pd.Timestamp] = None
    column_filters: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.sort_dir not in ("asc", "desc"):
            raise ValueError("sort_dir must be asc/desc")
        object.__setattr__(self, "field_filters", dict(self.field_filters))
        object.__setattr__(self, "column_filters", dict(self.column_filters))
        if self.date_from is not None:
            object.__setattr__(self, "date_from", parse_date(self.date_from))
        if self.date_to is not None:
            object.__setattr__(self, "date_to", parse_date(self.date_to))

    def with_changes(self, **changes: Any) -> "ViewSpec":
        return replace(self, **changes)


def toggle_sort(spec: ViewSpec, field_id: str) -> ViewSpec:
    """Header-click behaviour: same column flips direction, new column sorts asc."""
    if spec.sort_key == field_id:
        return spec.with_changes(sort_dir="asc" if spec.sort_dir == "desc" else "desc")
    return spec.with_changes(sort_key=field_id, sort_dir="asc")


def _search_text(record: Record, schema: TableSchema) -> str:
    return " ".join(display_value(record, f, schema) for f in schema.displayed_field_ids)


def _sort_series(records: Sequence[Record], schema: TableSchema, key: str) -> pd.Series:
    ftype = schema.field_type(key)
    raw = [r.get(key, schema) for r in records]

    if ftype == FieldType.DATE:
        parsed = []
        for v in raw:
            res = try_parse_date(v)
            parsed.append(res.value if res.ok else pd.NaT)
        return pd.Series(pd.DatetimeIndex(parsed))
    if ftype == FieldType.NUMBER:
        return pd.to_numeric(pd.Series(raw, dtype=object), errors="coerce")
    return pd.Series(
        [None if v is None else str(v).lower() for v in raw], dtype=object
    )


def sort_records(
    records: Sequence[Record],
    schema: TableSchema,
    key: str,
    direction: SortDir = "asc",
) -> List[Record]:
    """Stable sort on one column. Missing values go last in both directions."""
    if direction not in ("asc", "desc"):
        raise ValueError("direction must be asc/desc")
    if not records:
        return []

    s = _sort_series(records, schema, key)
    # dense ranks; -1 marks missing
    codes, _ = pd.factorize(s, sort=True)
    ranks = codes.astype(float)
    if direction == "desc":
        ranks = -ranks
    ranks[codes < 0] = np.inf
    order = np.argsort(ranks, kind="stable")
    return [records[i] for i in order]


def view(
    records: Sequence[Record],
    schema: TableSchema,
    spec: Optional[ViewSpec] = None,
    category_of: Callable[[pd.Timestamp], str] = month_key,
) -> List[Record]:
    """Filtered and ordered rows to render. The input is never mutated."""
    spec = spec or ViewSpec()
    records = list(records)
    if not records:
        return []

    mask = np.ones(len(records), dtype=bool)

    term = spec.search_term.strip().lower()
    if term:
        texts = pd.Series([_search_text(r, schema) for r in records]).str.lower()
        mask &= texts.str.contains(term, regex=False).to_numpy()

    if spec.category_filter != DEFAULTS.all_sentinel:
        cats = pd.Series([category_of(r.date) for r in records])
        mask &= (cats == spec.category_filter).to_numpy()

    for field_id, wanted in spec.field_filters.items():
        if wanted in (None, "", DEFAULTS.all_sentinel):
            continue
        vals = pd.Series([display_value(r, field_id, schema) for r in records])
        mask &= (vals == str(wanted)).to_numpy()

    for field_id, text in spec.column_filters.items():
        needle = "" if text is None else str(text).lower()
        if not needle:
            continue
        vals = pd.Series([display_value(r, field_id, schema) for r in records]).str.lower()
        mask &= vals.str.contains(needle, regex=False).to_numpy()

    if spec.date_from is not None or spec.date_to is not None:
        dates = pd.DatetimeIndex([r.date for r in records])
        if spec.date_from is not None:
            mask &= np.asarray(dates >= spec.date_from)
        if spec.date_to is not None:
            mask &= np.asarray(dates <= spec.date_to)

    out = [r for r, keep in zip(records, mask) if keep]
    if spec.sort_key is not None:
        out = sort_records(out, schema, spec.sort_key, spec.sort_dir)

    logger.debug(
        f"view[{schema.name}]: {len(records)} -> {len(out)} rows "
        f"search={spec.search_term!r} category={spec.category_filter!r} "
        f"sort={spec.sort_key}:{spec.sort_dir}"
    )
    return out


def group_records(
    records: Sequence[Record], field_id: str, schema: TableSchema
) -> dict[str, List[Record]]:
    """Buckets keyed by displayed value, in first-appearance order."""
    groups: dict[str, List[Record]] = {}
    for r in records:
        groups.setdefault(display_value(r, field_id, schema), []).append(r)
    return groups


def month_options(records: Sequence[Record]) -> list[tuple[str, str]]:
    """Category selector entries: "all" first, then months most recent first."""
    months = pd.DatetimeIndex([r.date for r in records]).to_period("M").unique()
    months = months.sort_values(ascending=False)
    opts = [(DEFAULTS.all_sentinel, "All Months")]
    for p in months:
        ts = p.to_timestamp()
        opts.append((month_key(ts), month_label(ts)))
    return opts


@dataclass(frozen=True)
class Page:
    items: List[Record]
    page: int
    page_size: int
    total_pages: int
    total: int


def paginate(
    records: Sequence[Record], page: int = 1, page_size: int = DEFAULTS.page_size
) -> Page:
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    total = len(records)
    total_pages = max(1, math.ceil(total / page_size))
    page = min(max(1, page), total_pages)
    start = (page - 1) * page_size
    return Page(
        items=list(records[start : start + page_size]),
        page=page,
        page_size=page_size,
        total_pages=total_pages,
        total=total,
    )
