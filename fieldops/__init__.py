"""fieldops: editable historic-record tables for solar site field operations."""

from .config import DEFAULTS, TableDefaults
from .data.schema import FieldDefinition, FieldType, TableSchema
from .data.record import Record, load_records
from .data.source import InMemoryRecordSource, RecordSource

from .time.dates import DateParse, DateParseError, parse_date, try_parse_date
from .time.edit_window import EditWindowPolicy, is_editable

from .table.view import ViewSpec, view, sort_records, group_records
from .table.edit_buffer import EditBuffer, EditMode
from .table.sinks import SaveError, SaveResult, SaveSink, LoggingSaveSink
from .table.editable_table import EditableTable, RecordLockedError
from .export.csv_export import export_csv
from .data.context import Client, Site, SiteContext

__all__ = [
    "DEFAULTS",
    "TableDefaults",
    "FieldDefinition",
    "FieldType",
    "TableSchema",
    "Record",
    "load_records",
    "InMemoryRecordSource",
    "RecordSource",
    "DateParse",
    "DateParseError",
    "parse_date",
    "try_parse_date",
    "EditWindowPolicy",
    "is_editable",
    "ViewSpec",
    "view",
    "sort_records",
    "group_records",
    "EditBuffer",
    "EditMode",
    "SaveError",
    "SaveResult",
    "SaveSink",
    "LoggingSaveSink",
    "EditableTable",
    "RecordLockedError",
    "export_csv",
    "Client",
    "Site",
    "SiteContext",
]
