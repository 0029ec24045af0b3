import pandas as pd
import pytest

from fieldops.data.schema import FieldDefinition, FieldType
from fieldops.table.validation import validate_record, validate_value

EXPORT = FieldDefinition("exportValue", "Export", FieldType.NUMBER, True)
IMPORT = FieldDefinition("importValue", "Import", FieldType.NUMBER, False)
START = FieldDefinition("startTime", "Start Time", FieldType.TIME, True)
CUT_DATE = FieldDefinition("cutDate", "Cut Date", FieldType.DATE, False)
REMARKS = FieldDefinition("remarks", "Remarks", FieldType.TEXT, False)


def test_required_field_empty():
    value, err = validate_value(EXPORT, "  ", "a")
    assert err is not None
    assert err.message == "Export is required"
    assert (err.record_id, err.field_id) == ("a", "exportValue")


def test_optional_field_empty_becomes_none():
    assert validate_value(IMPORT, "") == (None, None)
    assert validate_value(REMARKS, None) == (None, None)


@pytest.mark.parametrize(
    "raw, expected",
    [("12.5", 12.5), ("1,250", 1250), ("-3", -3), (7, 7), (2.25, 2.25)],
)
def test_numbers_are_coerced(raw, expected):
    value, err = validate_value(EXPORT, raw)
    assert err is None
    assert value == expected


@pytest.mark.parametrize("raw", ["abc", "12kWh", True, "nan", "inf"])
def test_non_numeric_rejected(raw):
    value, err = validate_value(EXPORT, raw)
    assert err is not None
    assert err.message == "Export must be a number"
    assert value == raw or value is raw


@pytest.mark.parametrize("raw", ["07:30", "00:00", "23:59"])
def test_valid_times(raw):
    assert validate_value(START, raw) == (raw, None)


@pytest.mark.parametrize("raw", ["7:30", "24:00", "12:60", "noon"])
def test_malformed_times(raw):
    _, err = validate_value(START, raw)
    assert err.message == "Start Time must be a time (HH:MM)"


def test_date_cells():
    value, err = validate_value(CUT_DATE, "2025-08-10")
    assert err is None
    assert value == pd.Timestamp("2025-08-10")

    _, err = validate_value(CUT_DATE, "2025/08/10")
    assert err.message == "Cut Date must be a date (YYYY-MM-DD)"


def test_text_is_kept_as_string():
    assert validate_value(REMARKS, 42) == ("42", None)


def test_validate_record_collects_all_errors(meter_schema):
    errors = validate_record(
        {"meter": "", "exportValue": "x", "startTime": "7am"}, meter_schema, "r1"
    )
    assert sorted(e.field_id for e in errors) == ["exportValue", "meter", "startTime"]
    assert all(e.record_id == "r1" for e in errors)
