from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional
import re

import pandas as pd

from ..config import DEFAULTS

_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})([T ].+)?$")


class DateParseError(ValueError):
    """Raised when a record date cannot be parsed. Keeps the offending input."""

    def __init__(self, raw: Any, reason: str = "") -> None:
        self.raw = raw
        msg = f"Invalid date: {raw!r}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


def _naive_midnight(ts: pd.Timestamp) -> pd.Timestamp:
    # tz-aware input keeps its local wall-clock date
    if ts.tzinfo is not None:
        ts = ts.tz_localize(None)
    return ts.normalize()


def parse_date(value: Any) -> pd.Timestamp:
    """Parse a business date into a naive, midnight-normalized Timestamp.

    Accepts date/datetime/Timestamp objects and strings that start with
    YYYY-MM-DD (an ISO time part may follow). Never falls back to "now".
    """
    if value is None:
        raise DateParseError(value, "missing")

    if isinstance(value, (pd.Timestamp, datetime, date)):
        ts = pd.Timestamp(value)
        if pd.isna(ts):
            raise DateParseError(value, "not a time")
        return _naive_midnight(ts)

    if not isinstance(value, str):
        raise DateParseError(value, f"unsupported type {type(value).__name__}")

    text = value.strip()
    match = _ISO_DATE.match(text)
    if not match:
        raise DateParseError(value, "expected YYYY-MM-DD")
    try:
        # the written date is the wall-clock date, whatever offset follows
        ts = pd.Timestamp(int(match.group(1)), int(match.group(2)), int(match.group(3)))
        if match.group(4):
            pd.Timestamp(text)
    except ValueError as exc:
        raise DateParseError(value, str(exc)) from exc
    return ts


@dataclass(frozen=True)
class DateParse:
    """Tagged parse result: either ok with a value, or an error with the raw input."""

    ok: bool
    raw: Any
    value: Optional[pd.Timestamp] = None
    error: Optional[DateParseError] = None


def try_parse_date(value: Any) -> DateParse:
    try:
        return DateParse(ok=True, raw=value, value=parse_date(value))
    except DateParseError as exc:
        return DateParse(ok=False, raw=value, error=exc)


def format_date(ts: pd.Timestamp, fmt: str = DEFAULTS.date_format) -> str:
    return pd.Timestamp(ts).strftime(fmt)


def month_key(ts: pd.Timestamp) -> str:
    return pd.Timestamp(ts).strftime(DEFAULTS.month_value_format)


def month_label(ts: pd.Timestamp) -> str:
    return pd.Timestamp(ts).strftime(DEFAULTS.month_label_format)
