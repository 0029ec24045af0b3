from .view import (
    Page,
    ViewSpec,
    group_records,
    month_options,
    paginate,
    sort_records,
    toggle_sort,
    view,
)
from .sinks import LoggingSaveSink, MemorySaveSink, SaveError, SaveResult, SaveSink
from .edit_buffer import EditBuffer, EditMode, EditModeError
from .validation import CellError, validate_record, validate_value
from .editable_table import EditableTable, RecordLockedError, SaveReport

__all__ = [
    "Page",
    "ViewSpec",
    "group_records",
    "month_options",
    "paginate",
    "sort_records",
    "toggle_sort",
    "view",
    "LoggingSaveSink",
    "MemorySaveSink",
    "SaveError",
    "SaveResult",
    "SaveSink",
    "EditBuffer",
    "EditMode",
    "EditModeError",
    "CellError",
    "validate_record",
    "validate_value",
    "EditableTable",
    "RecordLockedError",
    "SaveReport",
]
