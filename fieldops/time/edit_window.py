from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional
import math

import pandas as pd

from .dates import parse_date

_ONE_DAY = pd.Timedelta(days=1)


def _reference(reference_now: Optional[pd.Timestamp]) -> pd.Timestamp:
    ts = pd.Timestamp.now() if reference_now is None else pd.Timestamp(reference_now)
    if ts.tzinfo is not None:
        ts = ts.tz_localize(None)
    return ts


def days_between(reference_now: pd.Timestamp, record_date: Any) -> int:
    """Whole days elapsed from record_date to reference_now (floored).

    A record locks the moment it crosses the day boundary, so 7 days and
    23 hours counts as 7. Future dates give negative values.
    """
    elapsed = _reference(reference_now) - parse_date(record_date)
    return math.floor(elapsed / _ONE_DAY)


def is_editable(
    record_date: Any,
    allowed_edit_days: int,
    reference_now: Optional[pd.Timestamp] = None,
) -> bool:
    if allowed_edit_days < 0:
        raise ValueError(f"allowed_edit_days must be >= 0, got {allowed_edit_days}")
    return days_between(_reference(reference_now), record_date) <= allowed_edit_days


@dataclass(frozen=True)
class EditWindowPolicy:
    """Trailing number of days during which a historic record stays editable."""

    allowed_edit_days: int

    def __post_init__(self) -> None:
        if self.allowed_edit_days < 0:
            raise ValueError(
                f"allowed_edit_days must be >= 0, got {self.allowed_edit_days}"
            )

    def is_editable(
        self, record_date: Any, reference_now: Optional[pd.Timestamp] = None
    ) -> bool:
        return is_editable(record_date, self.allowed_edit_days, reference_now)
