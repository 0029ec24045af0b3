import pandas as pd
import pytest

from fieldops.data.record import Record
from fieldops.data.schema import FieldDefinition, FieldType, TableSchema
from fieldops.table.sinks import SaveError


class RaisingSink:
    """Save collaborator that fails by raising, like a dropped connection."""

    def __init__(self):
        self.calls = 0

    def save(self, pending):
        self.calls += 1
        raise SaveError("connection reset")


@pytest.fixture
def meter_schema():
    return TableSchema(
        name="meter.historic",
        fields=[
            FieldDefinition("date", "Date", FieldType.DATE, True),
            FieldDefinition("meter", "Meter", FieldType.TEXT, True),
            FieldDefinition("exportValue", "Export", FieldType.NUMBER, True),
            FieldDefinition("importValue", "Import", FieldType.NUMBER, False),
            FieldDefinition("startTime", "Start Time", FieldType.TIME, False),
            FieldDefinition("remarks", "Remarks", FieldType.TEXT, False),
        ],
    )


@pytest.fixture
def meter_records():
    return [
        Record(
            "a",
            "2025-08-10",
            {"meter": "Meter B", "exportValue": 5, "importValue": 1.5, "remarks": "Clear sky"},
        ),
        Record(
            "b",
            "2025-08-12",
            {"meter": "meter a", "exportValue": 3, "importValue": None, "remarks": "Cloudy"},
        ),
        Record(
            "c",
            "2025-07-30",
            {"meter": "Meter C", "exportValue": 5, "importValue": 2, "remarks": None},
        ),
        Record(
            "d",
            "2025-08-19",
            {"meter": "Meter A", "exportValue": None, "importValue": 0, "remarks": "Inverter trip"},
        ),
    ]


@pytest.fixture
def now():
    return pd.Timestamp("2025-08-20 09:00")


@pytest.fixture
def raising_sink():
    return RaisingSink()
