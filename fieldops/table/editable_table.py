from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence
import logging

import pandas as pd

from ..config import DEFAULTS
from ..data.record import Record, display_value, index_records
from ..data.schema import TableSchema
from ..diagnostics.summary import column_totals
from ..export.csv_export import export_csv
from ..time.edit_window import EditWindowPolicy
from .edit_buffer import EditBuffer, EditMode
from .sinks import CellKey, SaveResult, SaveSink
from .validation import CellError, validate_record, validate_value
from .view import Page, ViewSpec, month_options, paginate, toggle_sort, view

logger = logging.getLogger(__name__)


class RecordLockedError(ValueError):
    """Raised when editing a record outside the edit window (or its date)."""


@dataclass(frozen=True)
class SaveReport:
    result: SaveResult
    blocked: List[CellError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.result.ok

    @property
    def committed(self) -> Mapping[CellKey, Any]:
        return self.result.committed


class EditableTable:
    """Historic-record table: filter state + edit window + edit buffer + save.

    Every domain table (generation, meter, grass cutting, cleaning) is this
    class configured with its own schema; records are read-only input.
    """

    def __init__(
        self,
        schema: TableSchema,
        records: Sequence[Record],
        policy: EditWindowPolicy,
        sink: SaveSink,
        spec: Optional[ViewSpec] = None,
        clock: Callable[[], pd.Timestamp] = pd.Timestamp.now,
        page_size: int = DEFAULTS.page_size,
    ):
        self.schema = schema
        self.records: Dict[str, Record] = index_records(records)
        self.policy = policy
        self.sink = sink
        self.spec = spec or ViewSpec(sort_key=schema.date_field, sort_dir="desc")
        self.clock = clock
        self.page_size = page_size
        self.buffer = EditBuffer()
        self._errors: Dict[CellKey, CellError] = {}

    # ---- filter state ----
    def rows(self) -> List[Record]:
        return view(list(self.records.values()), self.schema, self.spec)

    def page(self, number: int = 1) -> Page:
        return paginate(self.rows(), number, self.page_size)

    def set_search(self, term: str) -> None:
        self.spec = self.spec.with_changes(search_term=term)

    def set_category(self, category: str) -> None:
        self.spec = self.spec.with_changes(category_filter=category)

    def set_field_filter(self, field_id: str, value: Optional[str]) -> None:
        self.schema.field(field_id)
        filters = dict(self.spec.field_filters)
        if value in (None, "", DEFAULTS.all_sentinel):
            filters.pop(field_id, None)
        else:
            filters[field_id] = value
        self.spec = self.spec.with_changes(field_filters=filters)

    def set_column_filter(self, field_id: str, text: Optional[str]) -> None:
        self.schema.field_type(field_id)
        filters = dict(self.spec.column_filters)
        if not text:
            filters.pop(field_id, None)
        else:
            filters[field_id] = text
        self.spec = self.spec.with_changes(column_filters=filters)

    def set_date_range(self, date_from: Any = None, date_to: Any = None) -> None:
        self.spec = self.spec.with_changes(date_from=date_from, date_to=date_to)

    def sort_by(self, field_id: str) -> None:
        self.schema.field_type(field_id)
        self.spec = toggle_sort(self.spec, field_id)

    def reset_filters(self) -> None:
        self.spec = ViewSpec(sort_key=self.spec.sort_key, sort_dir=self.spec.sort_dir)

    def month_options(self) -> list[tuple[str, str]]:
        return month_options(list(self.records.values()))

    # ---- edit window ----
    def _record(self, record_id: str) -> Record:
        try:
            return self.records[str(record_id)]
        except KeyError:
            raise KeyError(f"Unknown record {record_id!r} in {self.schema.name}") from None

    def is_locked(self, record_id: str) -> bool:
        rec = self._record(record_id)
        return not self.policy.is_editable(rec.date, self.clock())

    # ---- editing ----
    @property
    def mode(self) -> EditMode:
        return self.buffer.mode

    def begin_edit(self) -> None:
        self.buffer.begin_edit()

    def edit_cell(self, record_id: str, field_id: str, raw: Any) -> Optional[CellError]:
        """Stage a user edit. Invalid input is staged too and reported per cell."""
        rec = self._record(record_id)
        if field_id == self.schema.date_field:
            raise RecordLockedError("The date column is not editable.")
        fdef = self.schema.field(field_id)
        if not self.policy.is_editable(rec.date, self.clock()):
            raise RecordLockedError(
                f"Record {rec.record_id!r} is older than {self.policy.allowed_edit_days} days."
            )

        value, err = validate_value(fdef, raw, rec.record_id)
        self.buffer.stage(rec.record_id, field_id, value)
        key = (rec.record_id, field_id)
        if err is None:
            self._errors.pop(key, None)
        else:
            self._errors[key] = err
        return err

    def current_value(self, record_id: str, field_id: str) -> Any:
        rec = self._record(record_id)
        return self.buffer.current_value(rec.record_id, field_id, self.records, self.schema)

    def display_value(self, record_id: str, field_id: str) -> str:
        rec = self._record(record_id)
        if not self.buffer.is_staged(rec.record_id, field_id):
            return display_value(rec, field_id, self.schema)
        staged = self.buffer.current_value(rec.record_id, field_id, self.records, self.schema)
        preview = Record(rec.record_id, rec.date, {**rec.values, field_id: staged})
        return display_value(preview, field_id, self.schema)

    def cell_error(self, record_id: str, field_id: str) -> Optional[CellError]:
        return self._errors.get((str(record_id), field_id))

    def errors(self) -> List[CellError]:
        return list(self._errors.values())

    def has_unsaved_changes(self) -> bool:
        return self.buffer.has_pending()

    def save(self) -> SaveReport:
        """Commit staged edits of valid records; records with cell errors stay staged.

        Each staged record is checked as a whole, so a required field left
        empty in the stored record blocks it too.
        """
        for rid in self.buffer.staged_records():
            values = self.buffer.overlay(rid, self.records)
            for err in validate_record(values, self.schema, rid):
                self._errors.setdefault((err.record_id, err.field_id), err)

        blocked_ids = sorted({rid for rid, _ in self._errors})
        if blocked_ids:
            logger.warning(
                f"save[{self.schema.name}]: {len(blocked_ids)} records blocked by validation errors"
            )
        result = self.buffer.commit(self.sink, exclude_records=blocked_ids)
        return SaveReport(result=result, blocked=self.errors())

    def discard(self) -> None:
        self.buffer.discard()
        self._errors.clear()

    # ---- derived outputs ----
    def export_csv(self, start_date: Any, end_date: Any, apply_view: bool = False) -> str:
        spec = self.spec if apply_view else None
        return export_csv(list(self.records.values()), self.schema, start_date, end_date, spec)

    def totals(self) -> pd.DataFrame:
        """Footer totals over every record of the table, whatever the filters."""
        return column_totals(list(self.records.values()), self.schema)
