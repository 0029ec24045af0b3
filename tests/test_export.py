import pandas as pd
import pytest

from fieldops.data.record import Record
from fieldops.data.schema import FieldDefinition, FieldType, TableSchema
from fieldops.export.csv_export import export_csv, export_filename
from fieldops.table.view import ViewSpec


@pytest.fixture
def cleaning_schema():
    return TableSchema(
        name="operations.cleaning",
        fields=[
            FieldDefinition("date", "Date", FieldType.DATE, True),
            FieldDefinition("modulesCleaned", "Modules Cleaned", FieldType.NUMBER),
            FieldDefinition("remarks", "Remarks", FieldType.TEXT),
        ],
    )


@pytest.fixture
def august(cleaning_schema):
    # newest first, so "original order" is distinguishable from date order
    days = pd.date_range("2025-08-01", "2025-08-31", freq="D")[::-1]
    return [
        Record(f"r{d.day}", d, {"modulesCleaned": d.day * 10, "remarks": f"day {d.day}"})
        for d in days
    ]


def test_inclusive_range_in_collection_order(cleaning_schema, august):
    text = export_csv(august, cleaning_schema, "2025-08-10", "2025-08-20")
    lines = text.strip().split("\n")

    assert lines[0] == "Date,Modules Cleaned,Remarks"
    dates = [l.split(",")[0] for l in lines[1:]]
    assert len(dates) == 11
    assert dates[0] == "2025-08-20"
    assert dates[-1] == "2025-08-10"
    assert lines[1] == "2025-08-20,200,day 20"


def test_sorted_export_when_requested(cleaning_schema, august):
    spec = ViewSpec(sort_key="date", sort_dir="asc")
    text = export_csv(august, cleaning_schema, "2025-08-10", "2025-08-12", spec=spec)
    assert [l.split(",")[0] for l in text.strip().split("\n")[1:]] == [
        "2025-08-10",
        "2025-08-11",
        "2025-08-12",
    ]


def test_empty_values_and_quoting(cleaning_schema):
    records = [
        Record("x", "2025-08-05", {"modulesCleaned": None, "remarks": "dusty, windy"}),
        Record("y", "2025-08-06", {"modulesCleaned": 12.5, "remarks": 'said "done"'}),
    ]
    text = export_csv(records, cleaning_schema, "2025-08-01", "2025-08-31")
    lines = text.strip().split("\n")
    assert lines[1] == '2025-08-05,,"dusty, windy"'
    assert lines[2] == '2025-08-06,12.5,"said ""done"""'


def test_field_subset_and_empty_result(cleaning_schema, august):
    text = export_csv(
        august, cleaning_schema, "2025-09-01", "2025-09-30", fields=["date", "remarks"]
    )
    assert text.strip() == "Date,Remarks"


def test_date_column_exported_when_schema_omits_it():
    schema = TableSchema(
        name="generation.meter_reading",
        fields=[FieldDefinition("inverter1", "Inverter 1", FieldType.NUMBER)],
    )
    records = [
        Record("a", "2025-08-10", {"inverter1": 1250.5}),
        Record("b", "2025-08-12", {"inverter1": 1180}),
    ]
    lines = export_csv(records, schema, "2025-08-01", "2025-08-31").strip().split("\n")
    assert lines == ["Date,Inverter 1", "2025-08-10,1250.5", "2025-08-12,1180"]


def test_range_validation(cleaning_schema, august):
    with pytest.raises(ValueError):
        export_csv(august, cleaning_schema, "2025-08-20", "2025-08-10")
    with pytest.raises(ValueError):
        export_csv(august, cleaning_schema, "20/08/2025", "2025-08-31")


def test_export_filename():
    assert export_filename("cleaning-data", "2025-08-20") == "cleaning-data-2025-08-20.csv"
    assert export_filename(today=pd.Timestamp("2025-01-02 17:00")) == "historic-data-2025-01-02.csv"
