from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence
import math

import numpy as np
import pandas as pd

from ..data.record import Record, records_to_frame
from ..data.schema import FieldType, TableSchema


def column_totals(records: Sequence[Record], schema: TableSchema) -> pd.DataFrame:
    """min/max/avg/sum per numeric column. Missing or non-numeric cells count as 0.

    Columns with no values (no records) are left out.
    """
    df = records_to_frame(records, schema)
    rows = []
    for f in schema.fields:
        if f.type != FieldType.NUMBER or f.id == schema.date_field:
            continue
        s = pd.to_numeric(df[f.id], errors="coerce").fillna(0.0).astype(float)
        if s.empty:
            continue
        rows.append(
            {
                "field": f.id,
                "min": float(s.min()),
                "max": float(s.max()),
                "avg": float(s.mean()),
                "sum": float(s.sum()),
            }
        )
    return pd.DataFrame(rows, columns=["field", "min", "max", "avg", "sum"]).set_index(
        "field"
    )


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


@dataclass(frozen=True)
class GrassCuttingProgress:
    actual: float
    planned: float
    deviation: float
    percent: int


def grass_cutting_progress(actual: float, planned: float) -> GrassCuttingProgress:
    percent = _round_half_up(actual / planned * 100) if planned > 0 else 0
    return GrassCuttingProgress(
        actual=actual, planned=planned, deviation=actual - planned, percent=percent
    )


@dataclass(frozen=True)
class CleaningProgress:
    modules_cleaned: float
    cycles: float
    percent: float
    uncleaned: float


def cleaning_progress(
    modules_cleaned: float, total_modules: float, daily_planned: float
) -> CleaningProgress:
    # not clamped: cleaning more than planned shows > 100% and negative uncleaned
    return CleaningProgress(
        modules_cleaned=modules_cleaned,
        cycles=modules_cleaned / total_modules if total_modules > 0 else 0.0,
        percent=modules_cleaned / daily_planned * 100 if daily_planned > 0 else 0.0,
        uncleaned=daily_planned - modules_cleaned,
    )


def completion_band(percent: float) -> str:
    if percent >= 100:
        return "complete"
    if percent >= 80:
        return "warning"
    return "behind"


def block_summary(
    records: Sequence[Record],
    schema: TableSchema,
    block_field: str = "block",
    inverter_field: str = "inverter",
    total_field: str = "totalModules",
    cleaned_field: str = "modulesCleaned",
) -> pd.DataFrame:
    """Per-block totals: inverters seen, total modules, modules cleaned, cleaned %."""
    cols = ["inverters", "total_modules", "total_cleaned", "cleaned_percent"]
    if not records:
        return pd.DataFrame(columns=cols, index=pd.Index([], name="block"))

    df = pd.DataFrame(
        {
            "block": [r.get(block_field, schema) for r in records],
            "inverter": [r.get(inverter_field, schema) for r in records],
            "total": [r.get(total_field, schema) for r in records],
            "cleaned": [r.get(cleaned_field, schema) for r in records],
        }
    )
    df["total"] = pd.to_numeric(df["total"], errors="coerce").fillna(0.0)
    df["cleaned"] = pd.to_numeric(df["cleaned"], errors="coerce").fillna(0.0)

    g = df.groupby("block", sort=False)
    out = pd.DataFrame(
        {
            "total_modules": g["total"].sum(),
            "total_cleaned": g["cleaned"].sum(),
        }
    )
    inverters = {b: list(dict.fromkeys(s.dropna())) for b, s in g["inverter"]}
    out["inverters"] = pd.Series(inverters, dtype=object)
    pct = out["total_cleaned"] / out["total_modules"].replace(0, np.nan) * 100
    out["cleaned_percent"] = pct.fillna(0.0)
    return out[cols]
