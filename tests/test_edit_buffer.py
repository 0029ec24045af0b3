import pytest

from fieldops.data.record import index_records
from fieldops.table.edit_buffer import EditBuffer, EditMode, EditModeError
from fieldops.table.sinks import MemorySaveSink, SaveError


@pytest.fixture
def store(meter_records):
    return index_records(meter_records)


def test_stage_requires_edit_mode():
    buf = EditBuffer()
    assert buf.mode == EditMode.VIEWING
    with pytest.raises(EditModeError):
        buf.stage("a", "remarks", "x")


def test_current_value_overlays_store(store):
    buf = EditBuffer()
    buf.begin_edit()
    buf.stage("a", "remarks", "Dusty")
    assert buf.current_value("a", "remarks", store) == "Dusty"
    assert buf.current_value("a", "meter", store) == "Meter B"
    # the underlying record is untouched
    assert store["a"].values["remarks"] == "Clear sky"

    buf.stage("a", "remarks", "Very dusty")
    assert buf.pending_count() == 1
    assert buf.current_value("a", "remarks", store) == "Very dusty"


def test_discard_restores_original_values(store, meter_schema):
    buf = EditBuffer()
    buf.begin_edit()
    buf.stage("a", "remarks", "x")
    buf.stage("b", "exportValue", 99)
    buf.discard()

    assert not buf.has_pending()
    assert buf.mode == EditMode.VIEWING
    for rid, rec in store.items():
        for fid in meter_schema.field_ids:
            assert buf.current_value(rid, fid, store) == rec.get(fid)


def test_commit_success_clears_buffer():
    sink = MemorySaveSink()
    buf = EditBuffer()
    buf.begin_edit()
    buf.stage("a", "remarks", "ok")

    result = buf.commit(sink)

    assert result.ok
    assert sink.last == {("a", "remarks"): "ok"}
    assert result.committed == {("a", "remarks"): "ok"}
    assert not buf.has_pending()
    assert buf.mode == EditMode.VIEWING


def test_commit_failure_keeps_edits_staged():
    sink = MemorySaveSink(fail_with="backend offline")
    buf = EditBuffer()
    buf.begin_edit()
    buf.stage("a", "remarks", "ok")

    result = buf.commit(sink)

    assert not result.ok
    assert isinstance(result.error, SaveError)
    assert buf.pending() == {("a", "remarks"): "ok"}
    assert buf.mode == EditMode.EDITING

    # retry is an explicit second commit
    sink.fail_with = None
    assert buf.commit(sink).ok
    assert not buf.has_pending()


def test_commit_when_sink_raises(raising_sink):
    buf = EditBuffer()
    buf.begin_edit()
    buf.stage("a", "remarks", "ok")

    result = buf.commit(raising_sink)

    assert not result.ok
    assert "connection reset" in str(result.error)
    assert buf.has_pending()
    assert raising_sink.calls == 1


def test_commit_excluding_records():
    sink = MemorySaveSink()
    buf = EditBuffer()
    buf.begin_edit()
    buf.stage("a", "remarks", "ok")
    buf.stage("b", "exportValue", "abc")

    result = buf.commit(sink, exclude_records=["b"])

    assert result.ok
    assert sink.last == {("a", "remarks"): "ok"}
    assert buf.pending() == {("b", "exportValue"): "abc"}
    assert buf.mode == EditMode.EDITING


def test_empty_commit_does_not_call_sink():
    sink = MemorySaveSink()
    buf = EditBuffer()
    buf.begin_edit()

    result = buf.commit(sink)

    assert result.ok
    assert sink.batches == []
    assert buf.mode == EditMode.VIEWING
