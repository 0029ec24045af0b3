from dataclasses import dataclass


@dataclass(frozen=True)
class TableDefaults:
    # fallback when no client is selected
    allowed_edit_days: int = 30
    page_size: int = 25

    date_format: str = "%Y-%m-%d"
    month_value_format: str = "%m-%Y"  # category filter value, e.g. "08-2025"
    month_label_format: str = "%B %Y"  # e.g. "August 2025"
    all_sentinel: str = "all"

    export_prefix: str = "historic-data"


DEFAULTS = TableDefaults()
