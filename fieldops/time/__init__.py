from .dates import (
    DateParse,
    DateParseError,
    format_date,
    month_key,
    month_label,
    parse_date,
    try_parse_date,
)
from .edit_window import EditWindowPolicy, days_between, is_editable

__all__ = [
    "DateParse",
    "DateParseError",
    "format_date",
    "month_key",
    "month_label",
    "parse_date",
    "try_parse_date",
    "EditWindowPolicy",
    "days_between",
    "is_editable",
]
