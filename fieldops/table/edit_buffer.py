from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional
import logging

from ..data.record import Record
from ..data.schema import TableSchema
from .sinks import CellKey, SaveError, SaveResult, SaveSink

logger = logging.getLogger(__name__)


class EditMode(str, Enum):
    VIEWING = "viewing"
    EDITING = "editing"


class EditModeError(RuntimeError):
    pass


class EditBuffer:
    """Sparse (record_id, field_id) -> value overlay of unsaved cell edits.

    Two modes: VIEWING -> EDITING on begin_edit(); EDITING -> VIEWING on a
    commit that leaves nothing staged, or on discard().
    """

    def __init__(self) -> None:
        self._pending: Dict[CellKey, Any] = {}
        self.mode = EditMode.VIEWING

    def begin_edit(self) -> None:
        self.mode = EditMode.EDITING

    def stage(self, record_id: str, field_id: str, value: Any) -> None:
        if self.mode != EditMode.EDITING:
            raise EditModeError("Cannot stage edits while viewing; call begin_edit() first.")
        self._pending[(str(record_id), field_id)] = value

    def current_value(
        self,
        record_id: str,
        field_id: str,
        records: Mapping[str, Record],
        schema: Optional[TableSchema] = None,
    ) -> Any:
        key = (str(record_id), field_id)
        if key in self._pending:
            return self._pending[key]
        return records[str(record_id)].get(field_id, schema)

    def overlay(
        self, record_id: str, records: Mapping[str, Record]
    ) -> Dict[str, Any]:
        """Stored values of a record with its staged edits applied."""
        rid = str(record_id)
        values = dict(records[rid].values)
        values.update({f: v for (r, f), v in self._pending.items() if r == rid})
        return values

    def staged_records(self) -> list[str]:
        return sorted({r for r, _ in self._pending})

    def is_staged(self, record_id: str, field_id: str) -> bool:
        return (str(record_id), field_id) in self._pending

    def has_pending(self) -> bool:
        return bool(self._pending)

    def pending_count(self) -> int:
        return len(self._pending)

    def pending(self) -> Dict[CellKey, Any]:
        return dict(self._pending)

    def commit(
        self, sink: SaveSink, exclude_records: Optional[Iterable[str]] = None
    ) -> SaveResult:
        """Hand staged edits to sink; clear what it accepted.

        Edits of exclude_records stay staged and are not sent. On failure
        nothing is cleared.
        """
        excluded = {str(r) for r in (exclude_records or ())}
        batch = {k: v for k, v in self._pending.items() if k[0] not in excluded}

        if batch:
            try:
                result = sink.save(dict(batch))
            except SaveError as exc:
                result = SaveResult.failure(exc)
            if not result.ok:
                logger.warning(
                    f"commit: sink rejected {len(batch)} edits, keeping them staged: {result.error}"
                )
                return result
            for k in batch:
                del self._pending[k]
            logger.info(f"commit: {len(batch)} edits saved, {len(self._pending)} still staged")

        if not self._pending:
            self.mode = EditMode.VIEWING
        return SaveResult(ok=True, committed=dict(batch))

    def discard(self) -> None:
        self._pending.clear()
        self.mode = EditMode.VIEWING
